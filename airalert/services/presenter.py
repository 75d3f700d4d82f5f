"""In-app presentation of personal alerts"""
import logging

from aiogram import Bot, html

from airalert.core.locales import get_text
from airalert.core.models import PersonalAlert
from airalert.utils.air_quality import get_index_category

logger = logging.getLogger(__name__)


def format_alerts_message(alerts: list[PersonalAlert], lang: str) -> str:
    """
    Format alerts into a localized message

    Args:
        alerts: Alerts to show
        lang: Language code (en/ru/kk)

    Returns:
        Message with HTML markup
    """
    if not alerts:
        return get_text(lang, "alerts_none")

    message_parts = [get_text(lang, "alerts_header"), ""]

    for alert in alerts:
        status_key, emoji = get_index_category(alert.index_category)
        message_parts.append(get_text(
            lang,
            "alerts_line",
            emoji=emoji,
            location=html.quote(alert.location_label),
            category=alert.index_category,
            status=get_text(lang, status_key),
        ))

    if any(alert.sensitive_group for alert in alerts):
        message_parts.append("")
        message_parts.append(get_text(lang, "alerts_sensitive_note"))

    return "\n".join(message_parts)


class ChatAlertPresenter:
    """Shows alerts in the user's chat"""

    def __init__(self, bot: Bot, chat_id: int, lang: str = "en"):
        self.bot = bot
        self.chat_id = chat_id
        self.lang = lang

    async def present_alerts(self, alerts: list[PersonalAlert]):
        await self.bot.send_message(
            chat_id=self.chat_id,
            text=format_alerts_message(alerts, self.lang),
            parse_mode="HTML"
        )
        logger.debug(f"Presented {len(alerts)} alert(s) to chat {self.chat_id}")
