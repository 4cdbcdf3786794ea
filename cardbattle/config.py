# cardbattle/config.py
import os


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ALLOWED_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173'
        ).split(',')
        if origin.strip()
    ]
    # None lets Flask-SocketIO pick eventlet/gevent/threading from what is installed
    SOCKETIO_ASYNC_MODE = os.environ.get('SOCKETIO_ASYNC_MODE') or None
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Finish a live match in the opponent's favour when a player disconnects
    FORFEIT_ON_DISCONNECT = _env_flag('FORFEIT_ON_DISCONNECT')
    # Handle store events on the caller's thread instead of a background worker
    INLINE_STORE = _env_flag('INLINE_STORE')
