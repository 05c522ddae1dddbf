"""Flask web app for product search and keyword page ranking.

Serves the JSON API from ``web.api`` under /api.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, Response, jsonify

# Load environment variables from .env file (explicitly specify path)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from catalog import __version__  # noqa: E402
from catalog.logging_config import setup_logging  # noqa: E402

from .api import api  # noqa: E402
from .config import FLASK_DEBUG, FLASK_HOST, FLASK_PORT, LOG_TO_FILE  # noqa: E402

app = Flask(__name__)
app.register_blueprint(api)


@app.route("/", methods=["GET"])
def index() -> Response:
    """Service name, version and the API entry points."""
    return jsonify({
        "service": "theatrecraft-search",
        "version": __version__,
        "endpoints": sorted(
            str(rule) for rule in app.url_map.iter_rules() if str(rule).startswith("/api/")
        ),
    })


def main() -> None:
    setup_logging(
        level=logging.DEBUG if FLASK_DEBUG else logging.INFO,
        log_to_file=LOG_TO_FILE,
    )
    app.run(host=FLASK_HOST, port=FLASK_PORT, debug=FLASK_DEBUG)


if __name__ == "__main__":
    main()
