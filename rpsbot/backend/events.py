"""Decoding of raw interaction payloads into typed events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from rpsbot.backend.catalog import choice_ids
from rpsbot.backend.errors import InvalidInteraction
from rpsbot.backend.protocol import ACCEPT_BUTTON_PREFIX, SELECT_CHOICE_PREFIX, InteractionType


class UserRef(BaseModel):
    id: str


class MemberRef(BaseModel):
    user: UserRef


class MessageRef(BaseModel):
    id: str


class InteractionPayload(BaseModel):
    type: int
    id: str | None = None
    token: str | None = None
    data: dict[str, Any] | None = None
    member: MemberRef | None = None
    user: UserRef | None = None
    message: MessageRef | None = None


@dataclass(frozen=True)
class Ping:
    pass


@dataclass(frozen=True)
class Greeting:
    pass


@dataclass(frozen=True)
class Challenge:
    session_id: str
    issuer_id: str
    choice_id: str


@dataclass(frozen=True)
class Accept:
    session_id: str
    participant_id: str
    interaction_token: str
    message_id: str


@dataclass(frozen=True)
class SubmitChoice:
    session_id: str
    participant_id: str
    choice_id: str
    interaction_token: str
    message_id: str


Event = Ping | Greeting | Challenge | Accept | SubmitChoice


def decode_event(payload: InteractionPayload) -> Event:
    if payload.type == InteractionType.PING:
        return Ping()
    if payload.type == InteractionType.APPLICATION_COMMAND:
        return _decode_command(payload)
    if payload.type == InteractionType.MESSAGE_COMPONENT:
        return _decode_component(payload)
    raise InvalidInteraction("unknown interaction type")


def _decode_command(payload: InteractionPayload) -> Event:
    data = payload.data or {}
    name = data.get("name")
    if name == "test":
        return Greeting()
    if name == "challenge" and payload.id:
        options = data.get("options") or []
        if not options or not isinstance(options[0], dict) or "value" not in options[0]:
            raise InvalidInteraction("challenge requires an object choice")
        return Challenge(
            session_id=payload.id,
            issuer_id=_user_id(payload),
            choice_id=_known_choice(options[0]["value"]),
        )
    raise InvalidInteraction("unknown command")


def _decode_component(payload: InteractionPayload) -> Event:
    data = payload.data or {}
    custom_id = str(data.get("custom_id", ""))
    if custom_id.startswith(ACCEPT_BUTTON_PREFIX):
        return Accept(
            session_id=custom_id.removeprefix(ACCEPT_BUTTON_PREFIX),
            participant_id=_user_id(payload),
            interaction_token=_token(payload),
            message_id=_message_id(payload),
        )
    if custom_id.startswith(SELECT_CHOICE_PREFIX):
        values = data.get("values") or []
        if not values:
            raise InvalidInteraction("select_choice requires a selected value")
        return SubmitChoice(
            session_id=custom_id.removeprefix(SELECT_CHOICE_PREFIX),
            participant_id=_user_id(payload),
            choice_id=_known_choice(values[0]),
            interaction_token=_token(payload),
            message_id=_message_id(payload),
        )
    raise InvalidInteraction("unknown component")


def _user_id(payload: InteractionPayload) -> str:
    # Guild interactions carry the user under member, DMs under user.
    if payload.member is not None:
        return payload.member.user.id
    if payload.user is not None:
        return payload.user.id
    raise InvalidInteraction("interaction has no user")


def _token(payload: InteractionPayload) -> str:
    if not payload.token:
        raise InvalidInteraction("interaction has no token")
    return payload.token


def _message_id(payload: InteractionPayload) -> str:
    if payload.message is None:
        raise InvalidInteraction("component interaction has no message")
    return payload.message.id


def _known_choice(value: Any) -> str:
    choice_id = str(value)
    if choice_id not in choice_ids():
        raise InvalidInteraction(f"unknown object choice {choice_id!r}")
    return choice_id
