"""System notifications delivered through Telegram"""
import logging
from typing import Optional

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError

from airalert.bot.keyboards.inline import get_alert_notification_keyboard
from airalert.core.models import AlertNotification, PersonalAlert
from airalert.core.ports import KeyValueStore

logger = logging.getLogger(__name__)

NOTIFICATION_KEY_PREFIX = "personal.alert.notification"


def _payload_key(notification_id: int) -> str:
    return f"{NOTIFICATION_KEY_PREFIX}.{notification_id}"


def _message_key(notification_id: int) -> str:
    return f"{NOTIFICATION_KEY_PREFIX}.{notification_id}.message"


class TelegramNotifications:
    """
    Notification facility for background delivery

    Each notification is a chat message with a button; the alert payload
    stays in the key/value store until the button hands it back. A
    notification replaces the previous one with the same id.
    """

    def __init__(self, bot: Bot, chat_id: int, store: KeyValueStore, lang: str = "en"):
        self.bot = bot
        self.chat_id = chat_id
        self.lang = lang
        self._store = store

    async def schedule(self, notification: AlertNotification):
        """
        Send a notification

        Args:
            notification: Notification with serialized alerts as payload
        """
        await self._remove_previous(notification.id)
        await self._store.save(_payload_key(notification.id), notification.payload)

        message = await self.bot.send_message(
            chat_id=self.chat_id,
            text=f"<b>{notification.title}</b>\n{notification.text}",
            parse_mode="HTML",
            reply_markup=get_alert_notification_keyboard(self.lang, notification.id)
        )
        await self._store.save(_message_key(notification.id), message.message_id)

    async def take_payload(self, notification_id: int) -> Optional[list[PersonalAlert]]:
        """
        Get the alerts carried by a notification

        Args:
            notification_id: Id from the clicked button

        Returns:
            Alerts, or None if the notification is unknown
        """
        payload = await self._store.load(_payload_key(notification_id))
        if payload is None:
            return None
        return [PersonalAlert.from_dict(item) for item in payload]

    async def _remove_previous(self, notification_id: int):
        message_id = await self._store.load(_message_key(notification_id))
        if message_id is None:
            return
        try:
            await self.bot.delete_message(chat_id=self.chat_id, message_id=message_id)
        except TelegramAPIError as e:
            # Already deleted by the user or too old to delete
            logger.debug(f"Could not delete previous notification {message_id}: {e}")
