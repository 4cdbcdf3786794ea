# cardbattle/sockets.py
import json
import logging
from typing import Dict

from flask import request

from .session import Session

logger = logging.getLogger(__name__)


def _transport_for(socketio, sid: str):
    def send(text: str) -> None:
        socketio.emit("message", text, to=sid)
    return send


def register_card_socket_handlers(socketio, store, background_sessions: bool = False):
    sessions: Dict[str, Session] = {}

    @socketio.on("connect")
    def card_connect():
        sid = request.sid
        session = Session(
            sid,
            transport=_transport_for(socketio, sid),
            store=store,
            spawn=socketio.start_background_task if background_sessions else None,
        )
        sessions[sid] = session
        logger.debug("connection %s opened", sid)
        session.open()

    @socketio.on("message")
    def card_message(payload):
        session = sessions.get(request.sid)
        if session is None:
            return
        # clients that send an object instead of a text envelope
        text = payload if isinstance(payload, str) else json.dumps(payload)
        session.receive(text)

    @socketio.on("disconnect")
    def card_disconnect(reason=None):
        session = sessions.pop(request.sid, None)
        if session is None:
            return
        logger.debug("connection %s closed (%s)", request.sid, reason)
        session.close()

    return sessions
