# app/prescription_client/notifications.py
import logging
from dataclasses import dataclass, field
from typing import List, Literal

logger = logging.getLogger(__name__)

VARIANT = Literal["default", "destructive"]


@dataclass
class Notification:
    title: str
    description: str
    variant: VARIANT = "default"


@dataclass
class Notifier:
    """Collects transient user-facing notifications (toasts)."""
    notifications: List[Notification] = field(default_factory=list)

    def notify(self, title: str, description: str, variant: VARIANT = "default") -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.notifications.append(notification)
        if variant == "destructive":
            logger.warning(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")
        return notification

    def success(self, title: str, description: str) -> Notification:
        return self.notify(title, description)

    def error(self, description: str, title: str = "Error") -> Notification:
        return self.notify(title, description, variant="destructive")

    @property
    def last(self):
        return self.notifications[-1] if self.notifications else None

    def clear(self):
        self.notifications.clear()
