"""Session lifecycle controller for challenge, accept and choice events.

Each inbound event is handled in two steps. ``handle`` validates the event
against the session store and returns a ``Reply`` holding the primary
response. ``complete`` runs after that response has been delivered: it sends
the follow-up message edits/deletions and only then removes finalized
sessions from the store.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any

from rpsbot.backend import protocol
from rpsbot.backend.catalog import get_choice, list_options
from rpsbot.backend.engine import resolve
from rpsbot.backend.errors import DeliveryError, InvalidInteraction, SessionNotFound
from rpsbot.backend.events import Accept, Challenge, Event, Greeting, Ping, SubmitChoice
from rpsbot.backend.models import DeleteMessage, EditMessage, FollowUp, Participant
from rpsbot.backend.notifier import Notifier
from rpsbot.backend.store import SessionStore

logger = logging.getLogger(__name__)

EMOJIS = ["😭", "😄", "😌", "🤓", "😎", "😤", "🤖", "😶‍🌫️", "🌏", "📸", "💿", "👋", "🌊", "✨"]


@dataclass
class Reply:
    response: dict[str, Any]
    follow_ups: list[FollowUp] = field(default_factory=list)
    finalize: list[str] = field(default_factory=list)


class GameController:
    def __init__(
        self,
        store: SessionStore,
        rng: random.Random | None = None,
        strict_accept: bool = False,
    ) -> None:
        self.store = store
        self.rng = rng if rng is not None else random.Random()
        self.strict_accept = strict_accept

    def random_emoji(self) -> str:
        return self.rng.choice(EMOJIS)

    def handle(self, event: Event) -> Reply:
        if isinstance(event, Ping):
            return Reply(response=protocol.pong())
        if isinstance(event, Greeting):
            return Reply(response=protocol.message(f"hello world {self.random_emoji()}"))
        if isinstance(event, Challenge):
            return self._challenge(event)
        if isinstance(event, Accept):
            try:
                return self._accept(event)
            except SessionNotFound:
                return Reply(response=protocol.message("This challenge is no longer available.", ephemeral=True))
        if isinstance(event, SubmitChoice):
            return self._submit_choice(event)
        raise InvalidInteraction(f"unsupported event {type(event).__name__}")

    def _challenge(self, event: Challenge) -> Reply:
        self.store.sweep_expired()
        choice = get_choice(event.choice_id)
        self.store.create(
            event.session_id,
            Participant(participant_id=event.issuer_id, choice=choice.id),
        )
        logger.info("challenge_created session_id=%s challenger=%s", event.session_id, event.issuer_id)
        return Reply(
            response=protocol.message(
                f"Rock papers scissors challenge from <@{event.issuer_id}>",
                components=[
                    protocol.button_row(f"{protocol.ACCEPT_BUTTON_PREFIX}{event.session_id}", "Accept"),
                ],
            )
        )

    def _accept(self, event: Accept) -> Reply:
        if self.store.get(event.session_id) is None:
            logger.info("accept_without_session session_id=%s strict=%s", event.session_id, self.strict_accept)
            if self.strict_accept:
                raise SessionNotFound(event.session_id)
        return Reply(
            response=protocol.message(
                "What is your object of choice?",
                components=[
                    protocol.select_row(
                        f"{protocol.SELECT_CHOICE_PREFIX}{event.session_id}",
                        list_options(self.rng),
                    ),
                ],
                ephemeral=True,
            ),
            follow_ups=[DeleteMessage(interaction_token=event.interaction_token, message_id=event.message_id)],
        )

    def _submit_choice(self, event: SubmitChoice) -> Reply:
        responder = Participant(participant_id=event.participant_id, choice=event.choice_id)
        session = self.store.submit_response(event.session_id, responder)
        if session is None:
            logger.info("submission_dropped session_id=%s responder=%s", event.session_id, event.participant_id)
            return Reply(response=protocol.acknowledge())

        try:
            resolution = resolve(session.challenger, responder)
        except Exception:
            self.store.release(event.session_id)
            raise

        logger.info(
            "challenge_resolved session_id=%s outcome=%s winner=%s",
            event.session_id,
            resolution.outcome.value,
            resolution.winner_id,
        )
        return Reply(
            response=protocol.message(resolution.narrative),
            follow_ups=[
                EditMessage(
                    interaction_token=event.interaction_token,
                    message_id=event.message_id,
                    payload={"content": f"Nice choice {self.random_emoji()}", "components": []},
                )
            ],
            finalize=[event.session_id],
        )

    async def complete(self, reply: Reply, notifier: Notifier) -> None:
        """Deliver follow-ups, then drop finalized sessions regardless of delivery errors."""
        for follow_up in reply.follow_ups:
            try:
                if isinstance(follow_up, DeleteMessage):
                    await notifier.delete_message(follow_up.interaction_token, follow_up.message_id)
                else:
                    await notifier.edit_message(
                        follow_up.interaction_token,
                        follow_up.message_id,
                        follow_up.payload,
                    )
            except DeliveryError:
                logger.exception("follow_up_failed kind=%s", type(follow_up).__name__)
        for session_id in reply.finalize:
            if not self.store.remove_claimed(session_id):
                logger.info("finalize_skipped session_id=%s", session_id)
