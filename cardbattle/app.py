# cardbattle/app.py
import logging

from flask import Flask
from flask_socketio import SocketIO

from . import init_cardbattle
from .config import Config
from .store import StateStore


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    logging.basicConfig(
        level=flask_app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    socketio = SocketIO(
        flask_app,
        cors_allowed_origins=flask_app.config.get('CORS_ALLOWED_ORIGINS', []),
        async_mode=flask_app.config.get('SOCKETIO_ASYNC_MODE'),
    )

    store = StateStore(
        forfeit_on_disconnect=flask_app.config.get('FORFEIT_ON_DISCONNECT', False),
        inline=flask_app.config.get('INLINE_STORE', False),
    )
    init_cardbattle(flask_app, socketio, store)
    if not store.inline:
        store.start(socketio.start_background_task)
    flask_app.logger.info("card battle server ready (async_mode=%s)", socketio.async_mode)

    return flask_app
