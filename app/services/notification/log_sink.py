"""Notification sink that only writes to the log."""

from loguru import logger


class LoggingNotificationSink:
    """Records payout messages in the log instead of showing them."""

    def __init__(self) -> None:
        self.logger = logger.bind(service="notifications")

    async def success(self, message: str) -> None:
        self.logger.info(f"[success] {message}")

    async def error(self, message: str) -> None:
        self.logger.warning(f"[error] {message}")
