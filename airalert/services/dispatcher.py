"""Routes personal alerts to the notification channel or the app"""
import logging
from datetime import datetime
from typing import Callable

from airalert.core.locales import get_text
from airalert.core.models import AlertNotification, PersonalAlert
from airalert.core.ports import AlertPresenter, BackgroundHost, NotificationFacility

logger = logging.getLogger(__name__)

# Single notification slot, a new check replaces the previous notification
ALERT_NOTIFICATION_ID = 1


class NotificationDispatcher:
    """
    Delivers one check cycle's alerts through exactly one channel

    In background mode alerts go out as a system notification whose
    payload is the alert list; in the foreground they are presented in
    the app directly.
    """

    def __init__(
        self,
        host: BackgroundHost,
        notifications: NotificationFacility,
        presenter: AlertPresenter,
        notify_empty: bool = False,
        lang: str = "en",
        now: Callable[[], datetime] = datetime.now
    ):
        self._host = host
        self._notifications = notifications
        self._presenter = presenter
        self.notify_empty = notify_empty
        self.lang = lang
        self._now = now

    async def dispatch(self, alerts: list[PersonalAlert]):
        """
        Deliver alerts

        Args:
            alerts: Alerts of one check cycle (may be empty)
        """
        if not alerts and not self.notify_empty:
            logger.info("No personal alerts to deliver")
            return

        if self._host.is_active():
            notification = self.build_notification(alerts)
            await self._notifications.schedule(notification)
            logger.info(f"Scheduled alert notification with {len(alerts)} alert(s)")
        else:
            await self._presenter.present_alerts(alerts)
            logger.info(f"Presented {len(alerts)} alert(s) in app")

    def build_notification(self, alerts: list[PersonalAlert]) -> AlertNotification:
        checked_at = self._now().strftime("%H:%M:%S")
        return AlertNotification(
            id=ALERT_NOTIFICATION_ID,
            title=get_text(self.lang, "alerts_notification_title"),
            text=get_text(self.lang, "alerts_checked_at", time=checked_at),
            payload=[alert.to_dict() for alert in alerts],
        )
