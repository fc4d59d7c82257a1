"""FastAPI endpoint receiving platform interaction webhooks."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import BackgroundTasks, Depends, FastAPI, HTTPException, Request
from pydantic import ValidationError

from rpsbot.backend.config import Settings, configure_logging, load_settings
from rpsbot.backend.errors import InvalidInteraction
from rpsbot.backend.events import InteractionPayload, decode_event
from rpsbot.backend.lifecycle import GameController
from rpsbot.backend.notifier import DiscordNotifier, Notifier
from rpsbot.backend.security import RequestVerifier, make_verifier
from rpsbot.backend.store import create_store

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"


def _default_controller(settings: Settings) -> GameController:
    return GameController(
        store=create_store(
            ttl_seconds=settings.session_ttl_seconds,
            claim_lease_seconds=settings.claim_lease_seconds,
        ),
        strict_accept=settings.strict_accept,
    )


def _default_notifier(settings: Settings) -> Notifier:
    return DiscordNotifier(app_id=settings.app_id, api_base=settings.api_base, bot_token=settings.bot_token)


def _default_verifier(settings: Settings) -> RequestVerifier | None:
    if not settings.public_key:
        logger.warning("request_verification_disabled reason=no_public_key")
        return None
    return make_verifier(settings.public_key)


def create_app(
    controller: GameController | None = None,
    notifier: Notifier | None = None,
    verifier: RequestVerifier | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the app; ``verifier`` checks the raw body against the signature headers."""
    app_settings = settings if settings is not None else load_settings()
    game_controller = controller if controller is not None else _default_controller(app_settings)
    outbound = notifier if notifier is not None else _default_notifier(app_settings)
    request_verifier = verifier if verifier is not None else _default_verifier(app_settings)

    app = FastAPI(title="RPS Bot Interactions", version="0.1.0")
    app.state.controller = game_controller
    app.state.notifier = outbound

    def get_controller() -> GameController:
        return game_controller

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/interactions")
    async def interactions(
        request: Request,
        background_tasks: BackgroundTasks,
        local_controller: GameController = Depends(get_controller),
    ) -> dict[str, Any]:
        body = await request.body()
        if request_verifier is not None:
            signature = request.headers.get(SIGNATURE_HEADER, "")
            timestamp = request.headers.get(TIMESTAMP_HEADER, "")
            if not request_verifier(body, signature, timestamp):
                raise HTTPException(status_code=401, detail="invalid request signature")

        try:
            payload = InteractionPayload.model_validate_json(body)
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))

        try:
            reply = local_controller.handle(decode_event(payload))
        except InvalidInteraction as exc:
            logger.warning("interaction_rejected reason=%s type=%s", exc, payload.type)
            raise HTTPException(status_code=400, detail=str(exc))

        if reply.follow_ups or reply.finalize:
            background_tasks.add_task(local_controller.complete, reply, outbound)
        return reply.response

    return app


def main() -> None:
    import uvicorn

    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)


app = create_app()
