"""Colour classes for board tiles and keyboard keys.

A letter is "present" when it appears anywhere in the answer. Duplicates are
not counted against each other, so a guess with two E's against an answer
with one E can show both as present.
"""

CORRECT = "correct"
PRESENT = "present"
ABSENT = "absent"
EMPTY = "empty"
PENDING = "pending"
UNUSED = "unused"


def score(letter, position, answer):
    answer = answer.upper()
    if letter == answer[position]:
        return CORRECT
    if letter in answer:
        return PRESENT
    return ABSENT


def letter_color(letter, position, answer, is_winning_row=False):
    if not letter:
        return EMPTY
    if is_winning_row:
        return CORRECT
    return score(letter, position, answer)


def key_color(key, guesses, attempt, answer):
    color = UNUSED
    for guess in guesses[:attempt]:
        for position, letter in enumerate(guess):
            if letter != key:
                continue
            result = score(letter, position, answer)
            if result == CORRECT:
                return CORRECT
            color = result
    return color
