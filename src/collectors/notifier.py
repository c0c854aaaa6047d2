"""Desktop notifications through ``notify-send``."""

from typing import Optional

from .commands import spawn_detached
from ..engine.connections import Urgency
from ..utils.logger import get_logger
from config.settings import settings

logger = get_logger(__name__)


class DesktopNotifier:
    """Fire-and-forget notifier; failures are logged and never raised."""

    def __init__(self, enabled: Optional[bool] = None):
        self.enabled = settings.get('notifications.enabled', True) if enabled is None else enabled

    def notify(self, title: str, body: str, urgency: Urgency = Urgency.NORMAL, icon: Optional[str] = None) -> None:
        if not self.enabled:
            logger.debug(f"Notifications disabled, dropping '{title}'")
            return

        args = ["notify-send", "-u", urgency.value]
        if icon:
            args += ["-i", icon]
        args += [title, body]

        if not spawn_detached(args):
            logger.warning(f"Notification not delivered: {title}")
