"""A browser word-guessing game served by Flask."""
