"""Install the slash commands this bot answers to."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from rpsbot.backend.catalog import CHOICES
from rpsbot.backend.config import Settings, configure_logging, load_settings
from rpsbot.backend.notifier import DiscordNotifier

logger = logging.getLogger(__name__)

CHAT_INPUT = 1
STRING_OPTION = 3

TEST_COMMAND: dict[str, Any] = {
    "name": "test",
    "description": "Basic command",
    "type": CHAT_INPUT,
}

CHALLENGE_COMMAND: dict[str, Any] = {
    "name": "challenge",
    "description": "Challenge to a match of rock paper scissors",
    "type": CHAT_INPUT,
    "options": [
        {
            "type": STRING_OPTION,
            "name": "object",
            "description": "Pick your object",
            "required": True,
            "choices": [{"name": choice.label, "value": choice.id} for choice in CHOICES],
        }
    ],
}

ALL_COMMANDS: list[dict[str, Any]] = [TEST_COMMAND, CHALLENGE_COMMAND]


async def install_commands(notifier: DiscordNotifier, commands: list[dict[str, Any]] | None = None) -> list[dict[str, Any]]:
    installed: list[dict[str, Any]] = []
    for command in commands if commands is not None else ALL_COMMANDS:
        installed.append(await notifier.install_command(command))
    return installed


def notifier_from_settings(settings: Settings) -> DiscordNotifier:
    if not settings.app_id:
        raise RuntimeError("RPSBOT_APP_ID is required to install commands")
    if not settings.bot_token:
        raise RuntimeError("RPSBOT_BOT_TOKEN is required to install commands")
    return DiscordNotifier(app_id=settings.app_id, api_base=settings.api_base, bot_token=settings.bot_token)


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    notifier = notifier_from_settings(settings)
    installed = asyncio.run(install_commands(notifier))
    logger.info("commands_installed count=%s", len(installed))


if __name__ == "__main__":
    main()
