"""Backend package for the rock paper scissors interaction bot."""

from .catalog import CHOICES, beats, get_choice, list_options
from .config import Settings, configure_logging, load_settings
from .engine import resolve
from .errors import DeliveryError, InvalidChoice, InvalidInteraction, RpsBotError, SessionNotFound
from .lifecycle import GameController, Reply
from .store import InMemorySessionStore, SessionStore, create_store

__all__ = [
    "beats",
    "CHOICES",
    "configure_logging",
    "create_store",
    "DeliveryError",
    "GameController",
    "get_choice",
    "InMemorySessionStore",
    "InvalidChoice",
    "InvalidInteraction",
    "list_options",
    "load_settings",
    "Reply",
    "resolve",
    "RpsBotError",
    "SessionNotFound",
    "SessionStore",
    "Settings",
]
