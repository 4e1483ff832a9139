"""
Notification sink module.

Implementations of the payout workflow's notification boundary.

Structure:
- telegram.py: Sends messages to the user's Telegram chat
- log_sink.py: Writes messages to the log (headless use, tests)

Usage:
    from app.services.notification import TelegramNotificationSink

    notifier = TelegramNotificationSink(bot, chat_id)
    await notifier.error("Please select a payment method")
"""

from app.services.notification.log_sink import LoggingNotificationSink
from app.services.notification.telegram import TelegramNotificationSink


__all__ = ["LoggingNotificationSink", "TelegramNotificationSink"]
