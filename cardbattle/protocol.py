# cardbattle/protocol.py
"""JSON text envelopes <-> domain messages."""

import json
from typing import Any, Dict

from pydantic import ValidationError

from .engine.errors import MessageUndecodable
from .engine.messages import (
    Challenge,
    ChallengeAccepted,
    Connected,
    Direct,
    Err,
    IncomingMessage,
    OutgoingMessage,
    PhaseUpdate,
    RoundResultMessage,
)
from .engine.models import (
    Challenging,
    Draw,
    EndState,
    GamePhase,
    Idle,
    InMatch,
    MatchEnded,
    NextRound,
    PlayerMatchState,
    RoundResult,
    Victory,
)
from .schemas import inbound_adapter


def decode(text: str) -> IncomingMessage:
    try:
        envelope = inbound_adapter.validate_json(text)
    except ValidationError as exc:
        raise MessageUndecodable(str(exc)) from exc
    return envelope.to_message()


def encode(message: OutgoingMessage) -> str:
    return json.dumps(message_to_dict(message), separators=(",", ":"), sort_keys=True)


def phase_to_dict(phase: GamePhase) -> Dict[str, Any]:
    if isinstance(phase, Idle):
        return {"type": "Idle"}
    if isinstance(phase, Challenging):
        return {"type": "Challenging", "target": phase.target_id}
    if isinstance(phase, InMatch):
        return {"type": "InMatch", "match": phase.match_id}
    raise TypeError(f"unknown phase {phase!r}")


def end_to_dict(end: EndState) -> Dict[str, Any]:
    if isinstance(end, Draw):
        return {"type": "Draw"}
    if isinstance(end, Victory):
        return {"type": "Victory", "winner": end.winner_id}
    raise TypeError(f"unknown end state {end!r}")


def own_state_to_dict(ps: PlayerMatchState) -> Dict[str, Any]:
    pending = ps.pending_reward_choice
    return {
        "hand": {"attacks": ps.hand.attacks, "counters": ps.hand.counters, "rests": ps.hand.rests},
        "chosen_card": ps.chosen_card.value if ps.chosen_card else None,
        "health": ps.health,
        "pending_reward_choice": [card.value for card in pending] if pending else None,
    }


def result_to_dict(result: RoundResult) -> Dict[str, Any]:
    if isinstance(result, MatchEnded):
        return {"type": "MatchEnded", "end": end_to_dict(result.end)}
    if isinstance(result, NextRound):
        return {
            "type": "NextRound",
            "you": own_state_to_dict(result.you),
            "opponent": {"card_count": result.opponent.card_count, "health": result.opponent.health},
        }
    raise TypeError(f"unknown round result {result!r}")


def message_to_dict(message: OutgoingMessage) -> Dict[str, Any]:
    if isinstance(message, Connected):
        return {"type": "Connected", "id": message.id}
    if isinstance(message, Err):
        return {"type": "Err", "text": message.text}
    if isinstance(message, PhaseUpdate):
        return {"type": "PhaseUpdate", "phase": phase_to_dict(message.phase)}
    if isinstance(message, Direct):
        return {"type": "Direct", "from": message.sender, "text": message.text}
    if isinstance(message, Challenge):
        return {"type": "Challenge", "from": message.sender}
    if isinstance(message, ChallengeAccepted):
        return {"type": "ChallengeAccepted"}
    if isinstance(message, RoundResultMessage):
        return {"type": "RoundResult", "result": result_to_dict(message.result)}
    raise TypeError(f"unknown outgoing message {message!r}")
