import logging
from datetime import datetime

from src.app.services.notifier import IPasswordResetNotifier

logger = logging.getLogger(__name__)


class LoggingPasswordResetNotifier(IPasswordResetNotifier):
    """
    Notifier that records the dispatch in the application log.

    Used until an email provider is wired up. The reset URL is not logged.
    """

    async def send_reset_link(self, email: str, reset_url: str, expires_at: datetime) -> None:
        logger.info(
            "Password reset link dispatched",
            extra={"context": {"email": email, "expires_at": expires_at.isoformat()}},
        )
