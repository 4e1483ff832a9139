"""
Telegram notification sink.

Delivers payout workflow messages to a user's Telegram chat.
Delivery failures are logged and never interrupt the workflow.
"""

import asyncio

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from loguru import logger

from app.config.constants import TELEGRAM_TIMEOUT


class TelegramNotificationSink:
    """Sends transient payout messages via a Telegram bot."""

    SUCCESS_PREFIX = "✅ "
    ERROR_PREFIX = "❌ "

    def __init__(self, bot: Bot, chat_id: int) -> None:
        """
        Initialize sink.

        Args:
            bot: Bot instance
            chat_id: Telegram chat of the user
        """
        self.bot = bot
        self.chat_id = chat_id

    async def success(self, message: str) -> None:
        await self._send(self.SUCCESS_PREFIX + message)

    async def error(self, message: str) -> None:
        await self._send(self.ERROR_PREFIX + message)

    async def _send(self, text: str) -> bool:
        """
        Send text to the user's chat.

        Returns:
            True if sent successfully
        """
        try:
            await asyncio.wait_for(
                self.bot.send_message(chat_id=self.chat_id, text=text),
                timeout=TELEGRAM_TIMEOUT,
            )
            return True
        except TelegramAPIError as e:
            logger.warning(
                f"Failed to notify chat {self.chat_id}: {e}"
            )
        except TimeoutError:
            logger.warning(
                f"Notification to chat {self.chat_id} timed out "
                f"after {TELEGRAM_TIMEOUT}s"
            )
        return False
