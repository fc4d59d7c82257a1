"""Result engine for a resolved challenge."""

from __future__ import annotations

from rpsbot.backend.catalog import beats, get_choice
from rpsbot.backend.errors import InvalidChoice
from rpsbot.backend.models import Outcome, Participant, Resolution


def resolve(challenger: Participant, responder: Participant) -> Resolution:
    """Compute the outcome for the challenger and a narrative naming both players."""
    if not challenger.choice:
        raise InvalidChoice(challenger.choice)
    if not responder.choice:
        raise InvalidChoice(responder.choice)

    outcome = beats(challenger.choice, responder.choice)
    if outcome is Outcome.TIE:
        return Resolution(
            outcome=outcome,
            narrative=(
                f"<@{challenger.participant_id}> and <@{responder.participant_id}> "
                f"draw with **{get_choice(challenger.choice).label}**"
            ),
            winner_id=None,
            loser_id=None,
        )

    winner, loser = (challenger, responder) if outcome is Outcome.WIN else (responder, challenger)
    return Resolution(
        outcome=outcome,
        narrative=_format_win(winner=winner, loser=loser),
        winner_id=winner.participant_id,
        loser_id=loser.participant_id,
    )


def _format_win(winner: Participant, loser: Participant) -> str:
    winning = get_choice(winner.choice)
    losing = get_choice(loser.choice)
    return (
        f"<@{winner.participant_id}>'s **{winning.label}** {winning.beats[losing.id]} "
        f"<@{loser.participant_id}>'s **{losing.label}**"
    )
