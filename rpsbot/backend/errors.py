"""Error types raised while handling interaction events."""

from __future__ import annotations


class RpsBotError(Exception):
    """Base class for game errors."""


class InvalidInteraction(RpsBotError):
    """Malformed or unknown command or interaction kind."""


class SessionNotFound(RpsBotError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"No open session for id {session_id!r}")
        self.session_id = session_id


class InvalidChoice(RpsBotError):
    def __init__(self, choice_id: str | None) -> None:
        super().__init__(f"Unknown choice {choice_id!r}")
        self.choice_id = choice_id


class DeliveryError(RpsBotError):
    """Outbound notification could not be delivered."""
