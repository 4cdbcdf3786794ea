# cardbattle/__init__.py
from .routes import cards_bp
from .sockets import register_card_socket_handlers
from .store import StateStore


def init_cardbattle(app, socketio, store: StateStore):
    app.extensions["cardbattle"] = store
    app.register_blueprint(cards_bp)
    register_card_socket_handlers(socketio, store, background_sessions=not store.inline)
