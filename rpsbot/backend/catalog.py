"""Fixed catalog of selectable objects and the relation between them."""

from __future__ import annotations

import random
from rpsbot.backend.errors import InvalidChoice
from rpsbot.backend.models import Choice, Outcome


def _choice(choice_id: str, description: str, **beats: str) -> Choice:
    return Choice(id=choice_id, label=choice_id.capitalize(), description=description, beats=dict(beats))


CHOICES: tuple[Choice, ...] = (
    _choice(
        "rock",
        "sedimentary, igneous, or perhaps even metamorphic",
        virus="outwaits",
        computer="smashes",
        scissors="crushes",
    ),
    _choice("cowboy", "yeehaw~", scissors="puts away", wumpus="lassos", rock="steel-toe kicks"),
    _choice(
        "scissors",
        "careful ! sharp ! edges !!",
        paper="cuts",
        computer="cuts cord of",
        virus="cuts DNA of",
    ),
    _choice(
        "virus",
        "genetic mutation, malware, or something inbetween",
        cowboy="infects",
        computer="corrupts",
        wumpus="infects",
    ),
    _choice(
        "computer",
        "beep boop beep bzzrrhggggg",
        cowboy="overwhelms",
        paper="uninstalls firmware for",
        wumpus="deletes assets for",
    ),
    _choice(
        "wumpus",
        "the purple Discord fella",
        paper="draws picture on",
        rock="paints cute face on",
        scissors="admires own reflection in",
    ),
    _choice("paper", "versatile and iconic", virus="ignores", cowboy="gives papercut to", rock="covers"),
)

_BY_ID: dict[str, Choice] = {choice.id: choice for choice in CHOICES}


def choice_ids() -> list[str]:
    return [choice.id for choice in CHOICES]


def get_choice(choice_id: str | None) -> Choice:
    """Return the catalog entry for ``choice_id`` or raise ``InvalidChoice``."""
    if choice_id is None or choice_id not in _BY_ID:
        raise InvalidChoice(choice_id)
    return _BY_ID[choice_id]


def beats(a: str, b: str) -> Outcome:
    """Outcome of ``a`` against ``b`` from the perspective of ``a``."""
    first = get_choice(a)
    second = get_choice(b)
    if first.id == second.id:
        return Outcome.TIE
    if second.id in first.beats:
        return Outcome.WIN
    return Outcome.LOSE


def list_options(rng: random.Random | None = None) -> list[Choice]:
    """Return every choice in a freshly shuffled order."""
    options = list(CHOICES)
    (rng or random).shuffle(options)
    return options
