"""Derive what the page shows from the game state."""

from wordgame.games import feedback, wordle

KEYBOARD_ROWS = [
    list("QWERTYUIOP"),
    list("ASDFGHJKL"),
    list("ZXCVBNM") + ["BACKSPACE"],
]

KEY_LABELS = {"BACKSPACE": "⌫"}


def is_winning_row(state, row):
    return state.status == wordle.WON and state.guesses[row].upper() == state.answer.upper()


def board(state):
    rows = []
    for row in range(wordle.MAX_ATTEMPTS):
        word = state.current_guess if row == state.attempt else state.guesses[row]
        winning = is_winning_row(state, row)
        tiles = []
        for position in range(wordle.WORD_LENGTH):
            letter = word[position] if position < len(word) else ""
            if winning or row < state.attempt:
                color = feedback.letter_color(letter, position, state.answer, winning)
            elif letter:
                color = feedback.PENDING
            else:
                color = feedback.EMPTY
            tiles.append({"letter": letter, "color": color})
        rows.append(tiles)
    return rows


def keyboard(state):
    rows = []
    for keys in KEYBOARD_ROWS:
        row = []
        for key in keys:
            if key in KEY_LABELS:
                color = feedback.UNUSED
            else:
                color = feedback.key_color(key, state.guesses, state.attempt, state.answer)
            row.append({"key": key, "label": KEY_LABELS.get(key, key), "color": color})
        rows.append(row)
    return rows


def banner(state):
    if state.status == wordle.WON:
        return "Congrats!! You won!!"
    if state.status == wordle.LOST:
        return f"Game over! The word was {state.answer}"
    return None


def render(state):
    return {
        "status": state.status,
        "attempt": state.attempt,
        "current_guess": state.current_guess,
        "board": board(state),
        "keyboard": keyboard(state),
        "banner": banner(state),
        "answer": state.answer if state.status == wordle.LOST else None,
    }
