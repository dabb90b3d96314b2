from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import random
import time
from config import Config

socketio = SocketIO(async_mode=None)


def _parse_origins(value):
    if not value or value.strip() == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__, static_folder=None)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _parse_origins(flask_app.config.get('CORS_ORIGINS', '*'))
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from arena.main import main
    flask_app.register_blueprint(main)

    # One authoritative world per application instance
    from arena.broadcast import SocketIODispatcher
    from arena.services.world.session import SessionManager

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    seed = flask_app.config.get('RANDOM_SEED')
    flask_app.extensions['arena'] = SessionManager.from_config(
        flask_app.config,
        SocketIODispatcher(socketio, namespace=namespace),
        rng=random.Random(seed),
        logger=flask_app.logger,
    )
    flask_app.extensions['arena_started_at'] = time.monotonic()

    # Importing here binds the handlers to the initialized socketio instance
    from arena.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
