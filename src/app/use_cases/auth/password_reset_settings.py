from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class PasswordResetSettings:
    """
    Explicit configuration for the password reset flow.

    expose_reset_url: return the reset link in the response body instead of
        dispatching it through the notifier. Development only.
    """

    base_url: str
    token_ttl: timedelta = timedelta(hours=1)
    expose_reset_url: bool = False

    @classmethod
    def from_config(cls, config) -> "PasswordResetSettings":
        return cls(
            base_url=config.APP_BASE_URL,
            token_ttl=timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES),
            expose_reset_url=config.ENVIRONMENT == "development",
        )
