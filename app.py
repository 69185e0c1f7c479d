#!/usr/bin/env python3
"""
Kanji App - Flask Backend
Loads kanji_data.json into the database on startup and serves it as JSON.
"""

import argparse
import logging
from pathlib import Path

from kanji_app.config import Settings, configure_logging, load_env_file
from kanji_app.context import AppContext
from kanji_app.server import create_app

logger = logging.getLogger("kanji_app.app")


def main() -> None:
    env_file = load_env_file()
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description='Kanji App Backend')
    parser.add_argument('--host', default=settings.host, help=f'Host to bind to (default: {settings.host})')
    parser.add_argument('--port', type=int, default=settings.port, help=f'Port to bind to (default: {settings.port})')
    parser.add_argument('--data', default=str(settings.data_path), help='Path to kanji_data.json')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    args = parser.parse_args()

    settings.host = args.host
    settings.port = args.port
    settings.data_path = Path(args.data)
    settings.debug = settings.debug or args.debug

    configure_logging(settings.debug)
    if env_file:
        logger.debug("Loaded environment from %s", env_file)

    with AppContext.from_settings(settings) as context:
        context.initialize()
        app = create_app(context)
        logger.info("🚀 Backend server is running on http://%s:%d", settings.host, settings.port)
        app.run(debug=settings.debug, host=settings.host, port=settings.port, use_reloader=False)


if __name__ == '__main__':
    main()
