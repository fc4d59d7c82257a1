"""Interaction wire constants and message builders."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Sequence

from rpsbot.backend.models import Choice

ACCEPT_BUTTON_PREFIX = "accept_button_"
SELECT_CHOICE_PREFIX = "select_choice_"


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_UPDATE_MESSAGE = 6


class ComponentType(IntEnum):
    ACTION_ROW = 1
    BUTTON = 2
    STRING_SELECT = 3


class ButtonStyle(IntEnum):
    PRIMARY = 1


EPHEMERAL_FLAG = 1 << 6


def pong() -> dict[str, Any]:
    return {"type": InteractionResponseType.PONG.value}


def acknowledge() -> dict[str, Any]:
    return {"type": InteractionResponseType.DEFERRED_UPDATE_MESSAGE.value}


def message(
    content: str,
    components: list[dict[str, Any]] | None = None,
    ephemeral: bool = False,
) -> dict[str, Any]:
    data: dict[str, Any] = {"content": content}
    if components is not None:
        data["components"] = components
    if ephemeral:
        data["flags"] = EPHEMERAL_FLAG
    return {"type": InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE.value, "data": data}


def button_row(custom_id: str, label: str) -> dict[str, Any]:
    return {
        "type": ComponentType.ACTION_ROW.value,
        "components": [
            {
                "type": ComponentType.BUTTON.value,
                "custom_id": custom_id,
                "label": label,
                "style": ButtonStyle.PRIMARY.value,
            }
        ],
    }


def select_option(choice: Choice) -> dict[str, Any]:
    return {"label": choice.label, "value": choice.id, "description": choice.description}


def select_row(custom_id: str, choices: Sequence[Choice]) -> dict[str, Any]:
    return {
        "type": ComponentType.ACTION_ROW.value,
        "components": [
            {
                "type": ComponentType.STRING_SELECT.value,
                "custom_id": custom_id,
                "options": [select_option(choice) for choice in choices],
            }
        ],
    }
