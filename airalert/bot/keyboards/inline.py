"""Inline keyboards for personal alert notifications"""
from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton
from airalert.core.locales import get_text

SHOW_ALERTS_PREFIX = "alerts:show:"


def get_alert_notification_keyboard(lang: str, notification_id: int) -> InlineKeyboardMarkup:
    """
    Get inline keyboard for an alert notification

    Args:
        lang: Language code (en/ru/kk)
        notification_id: Notification whose payload the button opens

    Returns:
        InlineKeyboardMarkup with a single "show alerts" button
    """
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(
            text=get_text(lang, "alerts_show_button"),
            callback_data=f"{SHOW_ALERTS_PREFIX}{notification_id}"
        )]
    ])
