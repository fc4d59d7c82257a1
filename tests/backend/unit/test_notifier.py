import asyncio
import json

import httpx
import pytest

from rpsbot.backend.errors import DeliveryError
from rpsbot.backend.notifier import DiscordNotifier


def _notifier(handler, bot_token: str | None = None) -> DiscordNotifier:
    return DiscordNotifier(
        app_id="app-1",
        api_base="https://discord.test/api/v10/",
        bot_token=bot_token,
        transport=httpx.MockTransport(handler),
    )


def test_delete_message_targets_interaction_webhook() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    asyncio.run(_notifier(handler).delete_message("tok", "m1"))

    assert seen[0].method == "DELETE"
    assert seen[0].url == "https://discord.test/api/v10/webhooks/app-1/tok/messages/m1"
    assert "authorization" not in seen[0].headers


def test_edit_message_sends_json_payload() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "m1"})

    asyncio.run(_notifier(handler).edit_message("tok", "m1", {"content": "Nice choice", "components": []}))

    assert seen[0].method == "PATCH"
    assert json.loads(seen[0].content) == {"content": "Nice choice", "components": []}


def test_error_status_raises_delivery_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Unknown Message"})

    with pytest.raises(DeliveryError, match="404"):
        asyncio.run(_notifier(handler).delete_message("tok", "m1"))


def test_transport_error_raises_delivery_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(DeliveryError, match="unreachable"):
        asyncio.run(_notifier(handler).edit_message("tok", "m1", {}))


def test_install_command_uses_bot_authorization() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": "cmd-1", "name": "test"})

    created = asyncio.run(_notifier(handler, bot_token="secret").install_command({"name": "test"}))

    assert created == {"id": "cmd-1", "name": "test"}
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/api/v10/applications/app-1/commands"
    assert seen[0].headers["authorization"] == "Bot secret"
