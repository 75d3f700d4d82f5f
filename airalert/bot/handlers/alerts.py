"""Handlers for personal alerts"""
import logging
from aiogram import Router, F
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message

from airalert.bot.keyboards.inline import SHOW_ALERTS_PREFIX
from airalert.core.locales import get_text
from airalert.services.engine import AlertEngine

router = Router()
logger = logging.getLogger(__name__)


@router.callback_query(F.data.startswith(SHOW_ALERTS_PREFIX))
async def handle_show_alerts(callback: CallbackQuery, engine: AlertEngine, lang: str, **kwargs):
    """
    Handle tap on an alert notification

    Hands the notification payload back to the in-app presenter
    """
    try:
        notification_id = int(callback.data[len(SHOW_ALERTS_PREFIX):])
    except ValueError:
        await callback.answer()
        return

    alerts = await engine.notifications.take_payload(notification_id)
    if alerts is None:
        await callback.answer(get_text(lang, "alerts_expired"), show_alert=True)
        return

    await engine.presenter.present_alerts(alerts)
    await callback.answer()


@router.message(F.location)
@router.edited_message(F.location)
async def handle_location(message: Message, engine: AlertEngine, lang: str, **kwargs):
    """
    Handle shared location (static or live)

    Live location updates arrive as edited messages and only refresh the
    position silently.
    """
    engine.positions.report(message.location.latitude, message.location.longitude)

    if message.edit_date is None:
        await message.answer(get_text(lang, "position_updated"))


@router.message(Command("alerts"))
async def cmd_alerts(message: Message, command: CommandObject, engine: AlertEngine, lang: str, **kwargs):
    """
    Handle /alerts [on|off]

    Without an argument shows the current alert settings
    """
    arg = (command.args or "").strip().lower()

    if arg == "on":
        await engine.controller.activate()
        await message.answer(get_text(lang, "alerts_activated"))
        return

    if arg == "off":
        await engine.controller.deactivate()
        await message.answer(get_text(lang, "alerts_deactivated"))
        return

    settings = await engine.settings.snapshot()
    await message.answer(
        get_text(
            lang,
            "alerts_status",
            state=engine.controller.state.name.lower(),
            level=settings.threshold_level,
            period=settings.period_minutes,
        ),
        parse_mode="HTML"
    )
