# cardbattle/state.py
import logging
from typing import Any, Dict, List, Tuple

from .engine import resolver
from .engine.errors import IdNotFound, InvalidRequest
from .engine.messages import (
    Challenge,
    ChallengeAccepted,
    Direct,
    OutgoingMessage,
    PhaseUpdate,
    RoundResultMessage,
)
from .engine.models import (
    Card,
    Challenging,
    Finished,
    GamePhase,
    Idle,
    InMatch,
    Match,
    Player,
)

logger = logging.getLogger(__name__)

# (recipient player id, message)
Outbound = Tuple[int, OutgoingMessage]


class GameState:
    """
    Players and matches, plus the phase rules that move players between them.

    Only the StateStore actor touches it, one event at a time.
    Every method validates before mutating and returns the notifications
    the change produced.
    """

    def __init__(self) -> None:
        self.players: Dict[int, Player] = {}
        self.matches: Dict[int, Match] = {}
        self._next_player_id = 0

    # --- lookups ---

    def get_player(self, player_id: int) -> Player:
        player = self.players.get(player_id)
        if player is None:
            raise IdNotFound("player", player_id)
        return player

    def get_match(self, match_id: int) -> Match:
        match = self.matches.get(match_id)
        if match is None:
            raise IdNotFound("match", match_id)
        return match

    def match_for(self, player_id: int) -> Match:
        phase = self.get_player(player_id).phase
        if not isinstance(phase, InMatch):
            raise InvalidRequest("not in a match")
        return self.get_match(phase.match_id)

    # --- lifecycle ---

    def add_player(self, session: Any) -> Player:
        player = Player(id=self._next_player_id, session=session, phase=Idle())
        self._next_player_id += 1
        self.players[player.id] = player
        return player

    def remove_player(self, player_id: int, forfeit: bool = False) -> List[Outbound]:
        player = self.players.pop(player_id, None)
        if player is None:
            return []
        if not forfeit or not isinstance(player.phase, InMatch):
            return []

        match = self.matches.get(player.phase.match_id)
        if match is None or isinstance(match.state, Finished):
            return []
        resolver.forfeit(match, player_id)
        logger.info("match %s forfeited by departing player %s", match.id, player_id)
        return self._match_updates(match)

    # --- challenge protocol ---

    def challenge(self, sender_id: int, target_id: int) -> List[Outbound]:
        sender = self.get_player(sender_id)
        if isinstance(sender.phase, Challenging):
            raise InvalidRequest(f"already challenging player {sender.phase.target_id}")
        if isinstance(sender.phase, InMatch):
            raise InvalidRequest("already in a match")
        if target_id == sender_id:
            raise InvalidRequest("cannot challenge yourself")
        self.get_player(target_id)

        sender.phase = Challenging(target_id=target_id)
        return [
            (sender_id, PhaseUpdate(phase=sender.phase)),
            (target_id, Challenge(sender=sender_id)),
        ]

    def respond(self, responder_id: int, challenger_id: int, accepted: bool) -> List[Outbound]:
        responder = self.get_player(responder_id)
        challenger = self.get_player(challenger_id)
        if challenger.phase != Challenging(target_id=responder_id):
            raise InvalidRequest(f"player {challenger_id} has not challenged you")

        if not accepted:
            challenger.phase = Idle()
            return [(challenger_id, PhaseUpdate(phase=challenger.phase))]

        if isinstance(responder.phase, InMatch):
            raise InvalidRequest("already in a match")

        match = resolver.new_match(len(self.matches), challenger_id, responder_id)
        self.matches[match.id] = match
        challenger.phase = InMatch(match_id=match.id)
        responder.phase = InMatch(match_id=match.id)
        logger.info("match %s started: %s vs %s", match.id, challenger_id, responder_id)

        outbound: List[Outbound] = [(challenger_id, ChallengeAccepted())]
        for pid in match.player_ids:
            outbound.append((pid, PhaseUpdate(phase=InMatch(match_id=match.id))))
        outbound.extend(self._match_updates(match))
        return outbound

    def chat(self, sender_id: int, to_id: int, text: str) -> List[Outbound]:
        self.get_player(to_id)
        return [(to_id, Direct(sender=sender_id, text=text))]

    # --- match actions ---

    def play_card(self, player_id: int, card: Card) -> List[Outbound]:
        match = self.match_for(player_id)
        resolved = resolver.play_card(match, player_id, card)
        if not resolved:
            results = resolver.get_round_results(match)
            return [(player_id, RoundResultMessage(result=results[player_id]))]
        return self._match_updates(match)

    def pick_card(self, player_id: int, card: Card) -> List[Outbound]:
        match = self.match_for(player_id)
        resolver.pick_card(match, player_id, card)
        results = resolver.get_round_results(match)
        return [(player_id, RoundResultMessage(result=results[player_id]))]

    def _match_updates(self, match: Match) -> List[Outbound]:
        outbound: List[Outbound] = [
            (pid, RoundResultMessage(result=result))
            for pid, result in resolver.get_round_results(match).items()
        ]
        if isinstance(match.state, Finished):
            logger.info("match %s finished after %s rounds: %s", match.id, match.round, match.state.end)
            for pid in match.player_ids:
                player = self.players.get(pid)
                if player is not None and player.phase == InMatch(match_id=match.id):
                    player.phase = Idle()
                    outbound.append((pid, PhaseUpdate(phase=player.phase)))
        return outbound

    def phase_of(self, player_id: int) -> GamePhase:
        return self.get_player(player_id).phase
