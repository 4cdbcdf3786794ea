# cardbattle/schemas.py
"""Pydantic schemas for inbound client envelopes."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, StrictBool, StrictInt, TypeAdapter

from .engine.messages import Chat, ChallengeRequest, ChallengeResponse, PickCard, PlayCard
from .engine.models import Card


class ChatEnvelope(BaseModel):
    type: Literal["Chat"]
    to: StrictInt
    text: str

    def to_message(self) -> Chat:
        return Chat(to=self.to, text=self.text)


class ChallengeRequestEnvelope(BaseModel):
    type: Literal["ChallengeRequest"]
    target: StrictInt

    def to_message(self) -> ChallengeRequest:
        return ChallengeRequest(target=self.target)


class ChallengeResponseEnvelope(BaseModel):
    type: Literal["ChallengeResponse"]
    challenger: StrictInt
    accepted: StrictBool

    def to_message(self) -> ChallengeResponse:
        return ChallengeResponse(challenger=self.challenger, accepted=self.accepted)


class PlayCardEnvelope(BaseModel):
    type: Literal["PlayCard"]
    card: Card

    def to_message(self) -> PlayCard:
        return PlayCard(card=self.card)


class PickCardEnvelope(BaseModel):
    type: Literal["PickCard"]
    card: Card

    def to_message(self) -> PickCard:
        return PickCard(card=self.card)


InboundEnvelope = Annotated[
    Union[
        ChatEnvelope,
        ChallengeRequestEnvelope,
        ChallengeResponseEnvelope,
        PlayCardEnvelope,
        PickCardEnvelope,
    ],
    Field(discriminator="type"),
]

inbound_adapter: TypeAdapter[InboundEnvelope] = TypeAdapter(InboundEnvelope)
