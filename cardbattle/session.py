# cardbattle/session.py
import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from . import protocol
from .engine.messages import Connected, OutgoingMessage
from .store import Create, Delete, Receive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Initializing:
    pass


@dataclass(frozen=True)
class Active:
    player_id: int


SessionStatus = Union[Initializing, Active]

_CLOSE = object()


class Session:
    """
    One per live connection. Owns the transport handle and, once the store
    has answered with Connected(id), a cached copy of its player id.

    With `spawn` set, outbound messages are queued and written to the
    transport by a dedicated task so the store never waits on socket I/O.
    """

    def __init__(
        self,
        sid: str,
        transport: Callable[[str], Any],
        store,
        codec=protocol,
        spawn: Optional[Callable[..., Any]] = None,
    ):
        self.sid = sid
        self.transport = transport
        self.store = store
        self.codec = codec
        self.status: SessionStatus = Initializing()
        self.closed = False
        self._lock = threading.Lock()
        self._outbox: Optional["queue.Queue[Any]"] = queue.Queue() if spawn else None
        self._spawn = spawn

    @property
    def player_id(self) -> Optional[int]:
        status = self.status
        if isinstance(status, Active):
            return status.player_id
        return None

    def open(self) -> None:
        if self._spawn is not None:
            self._spawn(self.run)
        self.store.submit(Create(session=self))

    def receive(self, text: str) -> None:
        player_id = self.player_id
        if player_id is None:
            logger.warning("session %s not ready, dropping inbound payload", self.sid)
            return
        self.store.submit(Receive(player_id=player_id, text=text))

    def close(self) -> None:
        with self._lock:
            if self.closed:
                return
            self.closed = True
            player_id = self.player_id
        if player_id is not None:
            self.store.submit(Delete(player_id=player_id))
        if self._outbox is not None:
            self._outbox.put(_CLOSE)

    def publish(self, message: OutgoingMessage) -> None:
        """Called by the store; never blocks it when a writer task is running."""
        if self._outbox is not None and not self.closed:
            self._outbox.put(message)
            return
        self.deliver(message)

    def run(self) -> None:
        while True:
            message = self._outbox.get()
            if message is _CLOSE:
                break
            try:
                self.deliver(message)
            except Exception:
                logger.exception("session %s failed to deliver %s", self.sid, type(message).__name__)

    def deliver(self, message: OutgoingMessage) -> None:
        if isinstance(message, Connected):
            with self._lock:
                self.status = Active(player_id=message.id)
                closed = self.closed
            if closed:
                # the connection went away before the store registered it
                self.store.submit(Delete(player_id=message.id))
                return
        elif self.closed:
            return
        self.transport(self.codec.encode(message))
