"""Domain models for challenge sessions and their results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Outcome(str, Enum):
    WIN = "win"
    LOSE = "lose"
    TIE = "tie"


@dataclass(frozen=True)
class Choice:
    id: str
    label: str
    description: str
    beats: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Participant:
    participant_id: str
    choice: str | None = None


@dataclass
class Session:
    session_id: str
    challenger: Participant
    responder: Participant | None = None
    created_at: float = 0.0

    @property
    def is_open(self) -> bool:
        return self.responder is None


@dataclass(frozen=True)
class Resolution:
    outcome: Outcome
    narrative: str
    winner_id: str | None
    loser_id: str | None


@dataclass(frozen=True)
class DeleteMessage:
    interaction_token: str
    message_id: str


@dataclass(frozen=True)
class EditMessage:
    interaction_token: str
    message_id: str
    payload: dict[str, Any]


FollowUp = DeleteMessage | EditMessage
