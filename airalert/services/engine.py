"""Wiring of the personal alert services"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

from aiogram import Bot
from sqlalchemy.ext.asyncio import AsyncEngine

from airalert.core.config import Settings
from airalert.db.database import create_session_factory, init_db
from airalert.services.alert_settings import AlertSettingsStore
from airalert.services.background_mode import BackgroundMode
from airalert.services.dispatcher import NotificationDispatcher
from airalert.services.evaluator import AlertEvaluator
from airalert.services.geocoding import NominatimReverseGeocoder
from airalert.services.index_lookup import HttpIndexLookupClient
from airalert.services.lifecycle import AlertLifecycleController
from airalert.services.notifications import TelegramNotifications
from airalert.services.position import ReportedPositionSource
from airalert.services.presenter import ChatAlertPresenter
from airalert.services.saved_locations import SavedLocationRepository
from airalert.utils.redis_client import RedisKeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class AlertEngine:
    """All long-lived alert components of one process"""

    settings: AlertSettingsStore
    host: BackgroundMode
    positions: ReportedPositionSource
    locations: SavedLocationRepository
    notifications: TelegramNotifications
    presenter: ChatAlertPresenter
    evaluator: AlertEvaluator
    controller: AlertLifecycleController
    store: Optional[RedisKeyValueStore] = None
    db_engine: Optional[AsyncEngine] = None
    _tasks: list = field(default_factory=list)

    async def start(self):
        """Create tables, start the lifecycle loop and restore activation"""
        if self.db_engine is not None:
            logger.info("Initializing database")
            await init_db(self.db_engine)

        self._tasks.append(asyncio.create_task(self.controller.run()))
        await self.controller.init()

    async def stop(self):
        """Cancel background work and close connections"""
        await self.controller.shutdown()

        for task in self._tasks:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._tasks.clear()

        if self.store is not None:
            await self.store.close()
        if self.db_engine is not None:
            await self.db_engine.dispose()


def build_alert_engine(settings: Settings, bot: Bot) -> AlertEngine:
    """
    Build the alert engine from settings

    Args:
        settings: Application settings
        bot: Telegram bot used for notifications and presentation

    Returns:
        Unstarted AlertEngine
    """
    lang = settings.DEFAULT_LANGUAGE

    store = RedisKeyValueStore(settings.REDIS_URL)
    db_engine, session_factory = create_session_factory(settings.DATABASE_URL)

    alert_settings = AlertSettingsStore(store)
    host = BackgroundMode()
    positions = ReportedPositionSource(
        enabled=settings.POSITION_TRACKING_ENABLED,
        max_age_seconds=settings.POSITION_MAX_AGE_SECONDS,
        timeout_seconds=settings.POSITION_TIMEOUT_SECONDS,
    )
    locations = SavedLocationRepository(session_factory)

    notifications = TelegramNotifications(bot, settings.ALERT_CHAT_ID, store, lang=lang)
    presenter = ChatAlertPresenter(bot, settings.ALERT_CHAT_ID, lang=lang)
    dispatcher = NotificationDispatcher(
        host,
        notifications,
        presenter,
        notify_empty=settings.ALERT_NOTIFY_EMPTY,
        lang=lang,
    )

    evaluator = AlertEvaluator(
        alert_settings,
        positions,
        locations,
        HttpIndexLookupClient(settings.INDEX_API_URL, timeout=settings.HTTP_TIMEOUT_SECONDS),
        NominatimReverseGeocoder(
            settings.GEOCODER_URL,
            settings.GEOCODER_USER_AGENT,
            language=lang,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        ),
        dispatcher,
        lang=lang,
    )
    controller = AlertLifecycleController(
        alert_settings,
        host,
        evaluator,
        single_flight=settings.ALERT_SINGLE_FLIGHT,
        lang=lang,
    )

    return AlertEngine(
        settings=alert_settings,
        host=host,
        positions=positions,
        locations=locations,
        notifications=notifications,
        presenter=presenter,
        evaluator=evaluator,
        controller=controller,
        store=store,
        db_engine=db_engine,
    )
