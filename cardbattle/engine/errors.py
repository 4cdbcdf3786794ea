# cardbattle/engine/errors.py
"""Errors raised by the engine and reported back to the acting player."""


class CardBattleError(Exception):
    """Base class for non-fatal rule and lookup failures."""


class IdNotFound(CardBattleError):
    """Raised when a player or match id does not exist."""

    def __init__(self, kind: str, ident: int):
        self.kind = kind
        self.ident = ident
        super().__init__(f"{kind} {ident} not found")


class InvalidRequest(CardBattleError):
    """Raised for any rule violation: wrong phase, concluded match, pending reward..."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"invalid request: {reason}")


class MessageUndecodable(CardBattleError):
    """Raised when an inbound payload is malformed or of an unknown type.

    The client only ever sees the generic text; ``detail`` keeps the parser's
    explanation for the server log.
    """

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__("could not decode message")
