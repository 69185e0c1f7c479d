"""
Kanji App - Flask backend
Read-only JSON API over the seeded kanji table.
"""
import logging
from typing import Any

from flask import Flask, current_app, jsonify
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from . import queries
from .context import AppContext

logger = logging.getLogger(__name__)

EXTENSION_KEY = "kanji_app"


def get_context() -> AppContext:
    return current_app.extensions[EXTENSION_KEY]


def create_app(context: AppContext) -> Flask:
    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = context
    app.json.ensure_ascii = False  # type: ignore[attr-defined]
    app.config["DEBUG"] = context.settings.debug

    CORS(app, origins=context.settings.cors_origins)

    @app.route('/')
    def index() -> Any:
        return "Hello from Kanji App Backend!", 200, {"Content-Type": "text/plain; charset=utf-8"}

    @app.route('/api/kanji')
    def api_kanji_list() -> Any:
        """Return every kanji in insertion order."""
        try:
            return jsonify(queries.list_kanji(get_context().database))
        except SQLAlchemyError:
            logger.exception("Error fetching all kanji")
            return jsonify({"error": "Failed to fetch kanji list"}), 500

    @app.route('/api/kanji/<character>')
    def api_kanji_detail(character: str) -> Any:
        """Return one kanji by exact character match."""
        try:
            record = queries.get_kanji(get_context().database, character)
        except SQLAlchemyError:
            logger.exception("Error fetching kanji %s", character)
            return jsonify({"error": f"Failed to fetch kanji {character}"}), 500
        if record is None:
            return jsonify({"error": "Kanji not found"}), 404
        return jsonify(record)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException) -> Any:
        message = "Not found" if e.code == 404 else e.name
        return jsonify({"error": message}), e.code

    return app
