import logging
from app.schemas.notification_schema import Notification

logger = logging.getLogger(__name__)


class Notifier:
    """Collects the user-facing notifications raised while handling one request."""

    def __init__(self):
        self.history: list[Notification] = []

    def success(self, description: str) -> Notification:
        notification = Notification(title="Success", description=description)
        logger.info(description)
        self.history.append(notification)
        return notification

    def error(self, description: str) -> Notification:
        notification = Notification(title="Error", description=description, variant="destructive")
        logger.warning(description)
        self.history.append(notification)
        return notification

    @property
    def last(self) -> Notification | None:
        return self.history[-1] if self.history else None


def get_notifier() -> Notifier:
    return Notifier()
