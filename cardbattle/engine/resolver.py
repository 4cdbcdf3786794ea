# cardbattle/engine/resolver.py
from typing import Dict

from .errors import InvalidRequest
from .models import (
    Card,
    CardChoice,
    Draw,
    Finished,
    Hand,
    Match,
    MatchEnded,
    NextRound,
    PlayerMatchState,
    RedactedState,
    ResolvingRound,
    RoundResult,
    Victory,
)
from .rules import clamp, resolve
from ..content.balance import CAPS, DEFAULTS


def fresh_player_state(player_id: int) -> PlayerMatchState:
    return PlayerMatchState(
        player_id=player_id,
        hand=Hand(**DEFAULTS["hand"]),
        health=DEFAULTS["health"],
    )


def new_match(match_id: int, p1: int, p2: int) -> Match:
    if p1 == p2:
        raise InvalidRequest("a match needs two distinct players")
    return Match(
        id=match_id,
        player_ids=(p1, p2),
        state=ResolvingRound(players=[fresh_player_state(p1), fresh_player_state(p2)]),
    )


def resolving_state(match: Match) -> ResolvingRound:
    state = match.state
    if isinstance(state, Finished):
        raise InvalidRequest(f"match {match.id} has already concluded")
    if isinstance(state, ResolvingRound):
        return state
    raise TypeError(f"unknown match state {state!r}")


def participant(match: Match, player_id: int) -> PlayerMatchState:
    state = resolving_state(match)
    for ps in state.players:
        if ps.player_id == player_id:
            return ps
    raise InvalidRequest(f"player {player_id} is not part of match {match.id}")


def opponent_of(match: Match, player_id: int) -> int:
    p1, p2 = match.player_ids
    return p2 if player_id == p1 else p1


def ready_to_resolve(state: ResolvingRound) -> bool:
    return all(ps.chosen_card is not None for ps in state.players)


def play_card(match: Match, player_id: int, card: Card) -> bool:
    """
    Commits `card` for this round, refunding any earlier commit first.
    Returns True when the commit completed the round and it was resolved.
    """
    ps = participant(match, player_id)
    if ps.pending_reward_choice:
        raise InvalidRequest("pick a reward card before playing")

    available = ps.hand.count(card) + (1 if ps.chosen_card == card else 0)
    if available <= 0:
        raise InvalidRequest(f"no {card.value} cards left in hand")

    if ps.chosen_card is not None:
        ps.hand.add(ps.chosen_card)
        ps.chosen_card = None
    ps.hand.take(card)
    ps.chosen_card = card

    state = resolving_state(match)
    if ready_to_resolve(state):
        resolve_round(match)
        return True
    return False


def resolve_round(match: Match) -> None:
    """
    Reveals both commits simultaneously, applies health deltas and rewards,
    then moves the match to Finished if anybody dropped to 0 health.
    """
    state = resolving_state(match)
    first, second = state.players
    outcomes = [
        (first, resolve(first.chosen_card, second.chosen_card)),
        (second, resolve(second.chosen_card, first.chosen_card)),
    ]

    for ps, (delta, rewards) in outcomes:
        ps.chosen_card = None
        ps.health = clamp(ps.health + delta, CAPS["health_min"], CAPS["health_max"])
        for reward in rewards:
            if isinstance(reward, CardChoice):
                ps.pending_reward_choice = list(reward.options)
            else:
                ps.hand.add(reward)
    match.round += 1

    dead = [ps.player_id for ps in state.players if ps.health == 0]
    if len(dead) == 2:
        match.state = Finished(player_ids=match.player_ids, end=Draw())
    elif len(dead) == 1:
        match.state = Finished(player_ids=match.player_ids, end=Victory(winner_id=opponent_of(match, dead[0])))


def pick_card(match: Match, player_id: int, choice: Card) -> None:
    ps = participant(match, player_id)
    if not ps.pending_reward_choice:
        raise InvalidRequest("no reward choice is pending")
    if choice not in ps.pending_reward_choice:
        offered = ", ".join(card.value for card in ps.pending_reward_choice)
        raise InvalidRequest(f"{choice.value} is not among the offered rewards ({offered})")
    ps.pending_reward_choice = None
    ps.hand.add(choice)


def forfeit(match: Match, leaver_id: int) -> None:
    participant(match, leaver_id)
    match.state = Finished(player_ids=match.player_ids, end=Victory(winner_id=opponent_of(match, leaver_id)))


def redact(ps: PlayerMatchState) -> RedactedState:
    return RedactedState(card_count=ps.hand.total(), health=ps.health)


def get_round_results(match: Match) -> Dict[int, RoundResult]:
    """Per-participant view of the match, safe to send to that participant."""
    state = match.state
    if isinstance(state, Finished):
        return {pid: MatchEnded(end=state.end) for pid in state.player_ids}
    if isinstance(state, ResolvingRound):
        first, second = state.players
        return {
            first.player_id: NextRound(you=first.snapshot(), opponent=redact(second)),
            second.player_id: NextRound(you=second.snapshot(), opponent=redact(first)),
        }
    raise TypeError(f"unknown match state {state!r}")


def hand_total(ps: PlayerMatchState) -> int:
    return ps.hand.total() + (1 if ps.chosen_card is not None else 0)
