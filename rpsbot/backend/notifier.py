"""Outbound channel for editing and deleting previously sent messages."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from rpsbot.backend.errors import DeliveryError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0


class Notifier(Protocol):
    async def delete_message(self, interaction_token: str, message_id: str) -> None:
        """Delete a message created through the interaction webhook."""

    async def edit_message(self, interaction_token: str, message_id: str, payload: dict[str, Any]) -> None:
        """Replace the content of a message created through the interaction webhook."""


class DiscordNotifier:
    def __init__(
        self,
        app_id: str,
        api_base: str,
        bot_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.app_id = app_id
        self.api_base = api_base.rstrip("/")
        self.bot_token = bot_token
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"User-Agent": "rpsbot/0.1.0"}
        if self.bot_token:
            headers["Authorization"] = f"Bot {self.bot_token}"
        return httpx.AsyncClient(
            base_url=self.api_base,
            headers=headers,
            timeout=DEFAULT_TIMEOUT_S,
            transport=self._transport,
        )

    def _webhook_message_path(self, interaction_token: str, message_id: str) -> str:
        return f"/webhooks/{self.app_id}/{interaction_token}/messages/{message_id}"

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> httpx.Response:
        async with self._client() as client:
            try:
                response = await client.request(method, path, json=json)
            except httpx.HTTPError as exc:
                raise DeliveryError(f"{method} {path} failed: {exc}") from exc
        if response.is_error:
            raise DeliveryError(f"{method} {path} returned {response.status_code}: {response.text}")
        return response

    async def delete_message(self, interaction_token: str, message_id: str) -> None:
        await self._request("DELETE", self._webhook_message_path(interaction_token, message_id))

    async def edit_message(self, interaction_token: str, message_id: str, payload: dict[str, Any]) -> None:
        await self._request("PATCH", self._webhook_message_path(interaction_token, message_id), json=payload)

    async def install_command(self, command: dict[str, Any]) -> dict[str, Any]:
        response = await self._request("POST", f"/applications/{self.app_id}/commands", json=command)
        logger.info("command_installed name=%s status=%s", command.get("name"), response.status_code)
        return response.json()
