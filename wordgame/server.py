"""
Word Game Server - serves the puzzle page and applies player input
Run this with: python -m wordgame.server
"""

from flask import Blueprint, Flask, current_app, jsonify, render_template, request
from werkzeug.exceptions import HTTPException
import importlib
import logging
import random
import sys
import threading
import traceback
from pathlib import Path
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from wordgame import view
from wordgame.games import wordle

logger = logging.getLogger(__name__)

GAMES_DIR = Path(__file__).parent / "games"
GAMES_PACKAGE = "wordgame.games"

DEFAULT_CONFIG = {
    "HOST": "0.0.0.0",
    "PORT": 6000,
    "WATCH": True,
    "SEED": None,
}

bp = Blueprint("wordgame", __name__)


class GameReloader(FileSystemEventHandler):
    """Watches the games directory and reloads modules when files change"""

    def on_modified(self, event):
        if event.src_path.endswith('.py'):
            game_name = Path(event.src_path).stem
            if game_name != "__init__":
                logger.info("🔄 Reloading %s...", game_name)
                load_game(game_name)


def load_game(game_name):
    """Load or reload a game module"""
    module_path = f"{GAMES_PACKAGE}.{game_name}"
    try:
        if module_path in sys.modules:
            importlib.reload(sys.modules[module_path])
        else:
            importlib.import_module(module_path)
    except Exception:
        # A half-saved file must not take the watcher down; the old module stays live
        logger.exception("❌ Error loading %s", game_name)
        return False
    logger.info("✅ Loaded game module: %s", game_name)
    return True


def start_reloader(path=GAMES_DIR):
    observer = Observer()
    observer.schedule(GameReloader(), str(path), recursive=False)
    observer.start()
    return observer


class GameHost:
    """The one game this server hosts. Requests take turns on it."""

    def __init__(self, seed=None):
        self.rng = random.Random(seed)
        self.state = wordle.GameState.new(self.rng)
        self.lock = threading.Lock()

    def step(self, action):
        """Apply ``action(state)`` and render the result in one go."""
        with self.lock:
            notification = action(self.state)
            return notification, view.render(self.state)


def game_host():
    return current_app.extensions["wordgame"]


def format_error_message(function_name, error):
    """Format a helpful error message for debugging"""
    return {
        "error": f"Error in {function_name}()",
        "type": type(error).__name__,
        "message": str(error),
        "traceback": traceback.format_exc(),
        "help": f"Check wordgame/games/ - look at what {function_name}() calls",
    }


def bad_request(error, help_text):
    current_app.logger.warning("Rejected %s %s: %s", request.method, request.path, error)
    return jsonify({"error": error, "help": help_text}), 400


def json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def game_response(notification, state, **extra):
    body = {
        "state": state,
        "notification": notification.as_dict() if notification else None,
    }
    body.update(extra)
    return jsonify(body)


def parse_action(data):
    if "button" in data:
        return wordle.button_action(str(data["button"]))

    name = str(data.get("action", "")).lower()
    if name == "append":
        letter = str(data.get("letter", ""))
        return wordle.Append(letter.upper()) if wordle.is_letter(letter) else None
    if name == "delete":
        return wordle.Delete()
    if name == "submit":
        return wordle.Submit()
    return None


@bp.route('/', methods=['GET'])
def index():
    """Serve the game page"""
    return render_template("index.html")


@bp.route('/state', methods=['GET'])
def get_state():
    """Current board, keyboard and banner"""
    _, state = game_host().step(lambda game: None)
    return jsonify({"state": state})


@bp.route('/key', methods=['POST'])
def press_key():
    """A key pressed on the physical keyboard"""
    data = json_body()
    if data is None or not isinstance(data.get("key"), str):
        return bad_request(
            "No key provided",
            "Send JSON like {\"key\": \"a\"} with Content-Type: application/json",
        )

    key = data["key"]
    notification, state = game_host().step(lambda game: wordle.handle_key(game, key))
    return game_response(notification, state)


@bp.route('/action', methods=['POST'])
def press_button():
    """An on-screen button"""
    data = json_body()
    if data is None:
        return bad_request(
            "No JSON data provided",
            "Send a POST request with Content-Type: application/json",
        )

    action = parse_action(data)
    if action is None:
        return bad_request(
            f"Unknown action: {data}",
            "Use {\"action\": \"append\", \"letter\": \"A\"}, {\"action\": \"delete\"}, "
            "{\"action\": \"submit\"} or {\"button\": \"Q\"}",
        )

    notification, state = game_host().step(lambda game: wordle.dispatch(game, action))
    return game_response(notification, state)


@bp.route('/message', methods=['POST'])
def send_message():
    """Type a whole word and submit it"""
    data = json_body()
    if data is None or not isinstance(data.get("input"), str):
        return bad_request(
            "No input provided",
            "Send JSON like {\"input\": \"eagle\"} with Content-Type: application/json",
        )

    user_input = data["input"]
    notification, state = game_host().step(lambda game: wordle.type_word(game, user_input))

    if notification:
        message = f"{notification.title} {notification.description}"
    elif state["status"] == wordle.PLAYING:
        remaining = wordle.MAX_ATTEMPTS - state["attempt"]
        message = f"Not quite. You have {remaining} guesses left."
    else:
        message = state["banner"]
    return game_response(notification, state, message=message)


@bp.route('/reset', methods=['POST'])
def reset_game():
    """Start a new game with a fresh answer"""
    notification, state = game_host().step(lambda game: game.reset())
    return game_response(notification, state)


@bp.route('/health', methods=['GET'])
def health():
    """Health check endpoint"""
    return jsonify({
        "status": "ok",
        "game_status": game_host().state.status,
        "watching": current_app.config["WATCH"],
    })


def handle_exception(error):
    if isinstance(error, HTTPException):
        return error
    function_name = request.endpoint or request.path
    current_app.logger.exception("❌ Error in %s()", function_name)
    return jsonify(format_error_message(function_name, error)), 500


def create_app(config=None):
    """Factory function to create and configure the Flask app."""
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env("WORDGAME")
    if config:
        app.config.from_mapping(config)

    app.extensions["wordgame"] = GameHost(app.config["SEED"])
    app.register_blueprint(bp)
    app.register_error_handler(Exception, handle_exception)
    app.logger.info("🎮 New game ready")
    return app


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    logger.info("🎮 Starting Word Game Server...")

    app = create_app()

    observer = None
    if app.config["WATCH"]:
        observer = start_reloader()
        logger.info("👀 Watching %s for changes...", GAMES_DIR)

    host = app.config["HOST"]
    port = app.config["PORT"]
    logger.info("🚀 Server starting on http://%s:%s", host, port)

    try:
        app.run(host=host, port=port, debug=False)
    finally:
        if observer is not None:
            observer.stop()
            observer.join()


if __name__ == '__main__':
    main()
