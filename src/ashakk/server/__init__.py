"""Flask + Socket.IO transport for the Ashakk engine."""

import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from ashakk.config import Config
from ashakk.rooms import RoomRegistry

socketio = SocketIO()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    level = flask_app.config.get("LOG_LEVEL", "INFO")
    flask_app.logger.setLevel(level)
    logging.getLogger("ashakk").setLevel(level)

    origins = flask_app.config["CORS_ORIGINS"]
    CORS(flask_app, origins=origins)
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    flask_app.extensions["ashakk.rooms"] = RoomRegistry(
        max_players=flask_app.config["MAX_PLAYERS"],
        min_players=flask_app.config["MIN_PLAYERS"],
    )

    from ashakk.server.routes import main
    flask_app.register_blueprint(main)

    # Handlers bind to the server created by init_app above
    from ashakk.server.socket_events import register_socketio_handlers
    register_socketio_handlers()

    return flask_app


def main() -> None:
    """Console entry point: run the Socket.IO server."""
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    app.logger.info("Ashakk server listening on port %d", app.config["PORT"])
    socketio.run(app, host="0.0.0.0", port=app.config["PORT"], allow_unsafe_werkzeug=True)
