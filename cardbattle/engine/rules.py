# cardbattle/engine/rules.py
from typing import List, Tuple

from .models import Card, CardChoice, Reward
from ..content.cards import HEALTH_DELTA, REWARDS


def clamp(x: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, x))


def _reward_from_entry(entry) -> Reward:
    if isinstance(entry, list):
        first, second = entry
        return CardChoice(options=(Card(first), Card(second)))
    return Card(entry)


def resolve(own: Card, opponent: Card) -> Tuple[int, List[Reward]]:
    """
    Health delta and rewards earned by the side that played `own`
    against `opponent`. Pure: same inputs always give the same result.
    """
    delta = HEALTH_DELTA[own.value][opponent.value]
    rewards = [_reward_from_entry(entry) for entry in REWARDS[own.value][opponent.value]]
    return delta, rewards
