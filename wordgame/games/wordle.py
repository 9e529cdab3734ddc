import logging
import random
from dataclasses import asdict, dataclass, field

logger = logging.getLogger(__name__)

ANSWERS = ("EAGLE", "ATRIA", "ADMIN")
MAX_ATTEMPTS = 6
WORD_LENGTH = 5

PLAYING = "playing"
WON = "won"
LOST = "lost"


@dataclass(frozen=True)
class Notification:
    """A transient message for the player (shown as a toast)."""
    kind: str
    title: str
    description: str
    variant: str = "default"

    def as_dict(self):
        return asdict(self)


def too_short():
    return Notification(
        "too_short",
        "Word too short",
        f"Your guess must be {WORD_LENGTH} letters long.",
        "destructive",
    )


def not_a_word():
    return Notification(
        "not_a_word",
        "Not a word",
        f"Please enter a {WORD_LENGTH}-letter word using only letters.",
        "destructive",
    )


def won():
    return Notification("won", "Congratulations!", "You've guessed the word correctly!")


def lost(answer):
    return Notification("lost", "Game Over", f"The word was {answer}.", "destructive")


def pick_answer(rng=None):
    return (rng or random).choice(ANSWERS).upper()


def is_letter(ch):
    return len(ch) == 1 and ch.isascii() and ch.isalpha()


@dataclass
class GameState:
    answer: str
    guesses: list = field(default_factory=lambda: [""] * MAX_ATTEMPTS)
    current_guess: str = ""
    attempt: int = 0
    status: str = PLAYING
    rng: random.Random = field(default=None, repr=False, compare=False)

    @classmethod
    def new(cls, rng=None):
        return cls(answer=pick_answer(rng), rng=rng)

    @property
    def playing(self):
        return self.status == PLAYING

    def append_letter(self, ch):
        if not self.playing or not is_letter(ch):
            return
        if len(self.current_guess) < WORD_LENGTH:
            self.current_guess += ch.upper()

    def delete_last_letter(self):
        if self.playing:
            self.current_guess = self.current_guess[:-1]

    def submit_guess(self):
        """Submit the current guess.

        Returns the notification to show, or None when the game simply moves
        on to the next row. A short guess leaves the state untouched.
        """
        if not self.playing:
            return None

        guess = self.current_guess
        if len(guess) != WORD_LENGTH:
            return too_short()

        self.guesses[self.attempt] = guess
        logger.info("Guess %d: %s", self.attempt + 1, guess)

        if guess.upper() == self.answer.upper():
            self.status = WON
            logger.info("Won on attempt %d", self.attempt + 1)
            return won()

        if self.attempt == MAX_ATTEMPTS - 1:
            self.status = LOST
            logger.info("Lost, the word was %s", self.answer)
            return lost(self.answer)

        self.attempt += 1
        self.current_guess = ""
        return None

    def reset(self):
        self.answer = pick_answer(self.rng)
        self.guesses = [""] * MAX_ATTEMPTS
        self.current_guess = ""
        self.attempt = 0
        self.status = PLAYING
        logger.info("New game started")


# Actions shared by the physical keyboard and the on-screen buttons

@dataclass(frozen=True)
class Append:
    letter: str


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class Submit:
    pass


def key_action(key):
    """Map a key name (as reported by the browser) to an action, or None."""
    if is_letter(key):
        return Append(key.upper())
    key = key.upper()
    if key == "ENTER":
        return Submit()
    if key == "BACKSPACE":
        return Delete()
    return None


# The on-screen keyboard uses the same names as the physical one
button_action = key_action


def dispatch(state, action):
    if not state.playing:
        return None
    if isinstance(action, Append):
        state.append_letter(action.letter)
    elif isinstance(action, Delete):
        state.delete_last_letter()
    elif isinstance(action, Submit):
        return state.submit_guess()
    else:
        raise TypeError(f"Unknown action: {action!r}")
    return None


def handle_key(state, key):
    if not state.playing:
        return None
    action = key_action(key)
    if action is None:
        return None
    return dispatch(state, action)


def type_word(state, text):
    """Type a whole word and press enter.

    Anything but a word of exactly five letters is turned away before the
    guess in progress is touched.
    """
    if not state.playing:
        return None
    word = text.strip()
    if not all(is_letter(ch) for ch in word):
        return not_a_word()
    if len(word) < WORD_LENGTH:
        return too_short()
    if len(word) > WORD_LENGTH:
        return not_a_word()
    while state.current_guess:
        dispatch(state, Delete())
    for ch in word:
        dispatch(state, Append(ch))
    return dispatch(state, Submit())
