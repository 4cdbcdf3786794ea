# cardbattle/engine/messages.py
from dataclasses import dataclass
from typing import Union

from .models import Card, GamePhase, RoundResult


# --- client -> server ---

@dataclass(frozen=True)
class Chat:
    to: int
    text: str


@dataclass(frozen=True)
class ChallengeRequest:
    target: int


@dataclass(frozen=True)
class ChallengeResponse:
    challenger: int
    accepted: bool


@dataclass(frozen=True)
class PlayCard:
    card: Card


@dataclass(frozen=True)
class PickCard:
    card: Card


IncomingMessage = Union[Chat, ChallengeRequest, ChallengeResponse, PlayCard, PickCard]


# --- server -> client ---

@dataclass(frozen=True)
class Connected:
    id: int


@dataclass(frozen=True)
class Err:
    text: str


@dataclass(frozen=True)
class PhaseUpdate:
    phase: GamePhase


@dataclass(frozen=True)
class Direct:
    sender: int
    text: str


@dataclass(frozen=True)
class Challenge:
    sender: int


@dataclass(frozen=True)
class ChallengeAccepted:
    pass


@dataclass(frozen=True)
class RoundResultMessage:
    result: RoundResult


OutgoingMessage = Union[Connected, Err, PhaseUpdate, Direct, Challenge, ChallengeAccepted, RoundResultMessage]
