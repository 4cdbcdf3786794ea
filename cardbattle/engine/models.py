# cardbattle/engine/models.py
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from ..content.cards import CARDS


class Card(str, Enum):
    ATTACK = "Attack"
    COUNTER = "Counter"
    REST = "Rest"


@dataclass(frozen=True)
class CardChoice:
    """A deferred reward: the player later picks one of the options."""
    options: Tuple[Card, Card]


Reward = Union[Card, CardChoice]


@dataclass
class Hand:
    attacks: int = 0
    counters: int = 0
    rests: int = 0

    def count(self, card: Card) -> int:
        return getattr(self, CARDS[card.value]["hand_field"])

    def add(self, card: Card) -> None:
        field_name = CARDS[card.value]["hand_field"]
        setattr(self, field_name, getattr(self, field_name) + 1)

    def take(self, card: Card) -> None:
        field_name = CARDS[card.value]["hand_field"]
        current = getattr(self, field_name)
        if current <= 0:
            raise ValueError(f"no {card.value} left in hand")
        setattr(self, field_name, current - 1)

    def total(self) -> int:
        return self.attacks + self.counters + self.rests


@dataclass
class PlayerMatchState:
    player_id: int
    hand: Hand
    health: int
    chosen_card: Optional[Card] = None
    pending_reward_choice: Optional[List[Card]] = None

    def snapshot(self) -> "PlayerMatchState":
        pending = list(self.pending_reward_choice) if self.pending_reward_choice else None
        return replace(self, hand=replace(self.hand), pending_reward_choice=pending)


@dataclass(frozen=True)
class RedactedState:
    """What an opponent may see: never hand composition or chosen card."""
    card_count: int
    health: int


# --- match end states ---

@dataclass(frozen=True)
class Draw:
    pass


@dataclass(frozen=True)
class Victory:
    winner_id: int


EndState = Union[Draw, Victory]


# --- match states ---

@dataclass
class ResolvingRound:
    players: List[PlayerMatchState]        # exactly two, in match.player_ids order


@dataclass(frozen=True)
class Finished:
    player_ids: Tuple[int, int]
    end: EndState


MatchState = Union[ResolvingRound, Finished]


@dataclass
class Match:
    id: int
    player_ids: Tuple[int, int]
    state: MatchState
    round: int = 0


# --- player phases ---

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Challenging:
    target_id: int


@dataclass(frozen=True)
class InMatch:
    match_id: int


GamePhase = Union[Idle, Challenging, InMatch]


@dataclass
class Player:
    id: int
    session: Any                           # opaque handle to the owning session actor
    phase: GamePhase = field(default_factory=Idle)


# --- per-participant projections of a match ---

@dataclass(frozen=True)
class MatchEnded:
    end: EndState


@dataclass(frozen=True)
class NextRound:
    you: PlayerMatchState
    opponent: RedactedState


RoundResult = Union[MatchEnded, NextRound]
