# cardbattle/store.py
"""
The authoritative state store.

All player and match mutations funnel through one StateStore, which handles
its inbox strictly one event at a time. Sessions only ever submit events and
receive publish() calls back.
"""

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from . import protocol
from .engine.errors import CardBattleError, MessageUndecodable
from .engine.messages import (
    Chat,
    ChallengeRequest,
    ChallengeResponse,
    Connected,
    Err,
    IncomingMessage,
    PickCard,
    PlayCard,
)
from .state import GameState, Outbound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Create:
    session: Any


@dataclass(frozen=True)
class Delete:
    player_id: int


@dataclass(frozen=True)
class Receive:
    player_id: int
    text: str


@dataclass(frozen=True)
class Stats:
    reply: "queue.Queue[Dict[str, int]]"


_STOP = object()


class StateStore:
    def __init__(self, codec=protocol, forfeit_on_disconnect: bool = False, inline: bool = False):
        self.state = GameState()
        self.codec = codec
        self.forfeit_on_disconnect = forfeit_on_disconnect
        self.inline = inline
        self._inbox: "queue.Queue[Any]" = queue.Queue()
        self._lock = threading.RLock()

    # --- actor plumbing ---

    def submit(self, event) -> None:
        """Non-blocking from the caller's point of view unless running inline."""
        if self.inline:
            with self._lock:
                self._handle_safely(event)
            return
        self._inbox.put(event)

    def start(self, spawn: Callable[..., Any]) -> None:
        spawn(self.run)

    def stop(self) -> None:
        self._inbox.put(_STOP)

    def run(self) -> None:
        logger.info("state store started")
        while True:
            event = self._inbox.get()
            if event is _STOP:
                break
            self._handle_safely(event)
        logger.info("state store stopped")

    def drain(self) -> None:
        """Handle everything queued so far on the calling thread."""
        while True:
            try:
                event = self._inbox.get_nowait()
            except queue.Empty:
                return
            if event is _STOP:
                return
            self._handle_safely(event)

    def snapshot_counts(self, timeout: Optional[float] = 5.0) -> Dict[str, int]:
        reply: "queue.Queue[Dict[str, int]]" = queue.Queue(maxsize=1)
        self.submit(Stats(reply=reply))
        return reply.get(timeout=timeout)

    def _handle_safely(self, event) -> None:
        try:
            self.handle(event)
        except Exception:
            logger.exception("state store failed on %r", event)

    # --- event handling ---

    def handle(self, event) -> None:
        if isinstance(event, Create):
            self._on_create(event)
        elif isinstance(event, Delete):
            self._on_delete(event)
        elif isinstance(event, Receive):
            self._on_receive(event)
        elif isinstance(event, Stats):
            event.reply.put({"players": len(self.state.players), "matches": len(self.state.matches)})
        else:
            raise TypeError(f"unknown store event {event!r}")

    def _on_create(self, event: Create) -> None:
        player = self.state.add_player(event.session)
        logger.info("player %s connected", player.id)
        self._dispatch([(player.id, Connected(id=player.id))])

    def _on_delete(self, event: Delete) -> None:
        outbound = self.state.remove_player(event.player_id, forfeit=self.forfeit_on_disconnect)
        logger.info("player %s disconnected", event.player_id)
        self._dispatch(outbound)

    def _on_receive(self, event: Receive) -> None:
        if event.player_id not in self.state.players:
            logger.warning("dropping message from unknown player %s", event.player_id)
            return
        try:
            message = self.codec.decode(event.text)
            outbound = self.apply(event.player_id, message)
        except MessageUndecodable as exc:
            logger.info("undecodable message from player %s: %s", event.player_id, exc.detail)
            outbound = [(event.player_id, Err(text=str(exc)))]
        except CardBattleError as exc:
            logger.info("rejected request from player %s: %s", event.player_id, exc)
            outbound = [(event.player_id, Err(text=str(exc)))]
        self._dispatch(outbound)

    def apply(self, sender_id: int, message: IncomingMessage) -> List[Outbound]:
        if isinstance(message, Chat):
            return self.state.chat(sender_id, message.to, message.text)
        if isinstance(message, ChallengeRequest):
            return self.state.challenge(sender_id, message.target)
        if isinstance(message, ChallengeResponse):
            return self.state.respond(sender_id, message.challenger, message.accepted)
        if isinstance(message, PlayCard):
            return self.state.play_card(sender_id, message.card)
        if isinstance(message, PickCard):
            return self.state.pick_card(sender_id, message.card)
        raise MessageUndecodable(f"unhandled message {message!r}")

    def _dispatch(self, outbound: List[Outbound]) -> None:
        for player_id, message in outbound:
            player = self.state.players.get(player_id)
            if player is None:
                logger.debug("no session for player %s, dropping %s", player_id, type(message).__name__)
                continue
            try:
                player.session.publish(message)
            except Exception:
                logger.exception("failed to publish %s to player %s", type(message).__name__, player_id)
