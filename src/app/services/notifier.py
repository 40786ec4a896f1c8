from abc import ABC, abstractmethod
from datetime import datetime


class IPasswordResetNotifier(ABC):
    """Delivers a password reset link to the account holder"""

    @abstractmethod
    async def send_reset_link(self, email: str, reset_url: str, expires_at: datetime) -> None:
        pass
