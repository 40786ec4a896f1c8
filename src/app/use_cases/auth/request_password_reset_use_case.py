"""
Request Password Reset Use Case

Issues a single-use, time-limited password reset token for an account
without revealing whether the account exists.
"""

import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from src.app.services.notifier import IPasswordResetNotifier
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return
from .dtos import RequestPasswordResetCommand, RequestPasswordResetResponse
from .password_reset_settings import PasswordResetSettings
from .reset_token import build_reset_url, generate_reset_token, hash_reset_token

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)
DEVELOPMENT_NOTE = "In production, this link would be sent via email"


def validation_error(exc: ValidationError) -> Error:
    details = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return Error("VALIDATION_ERROR", "Validation error", details=details)


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Email must be syntactically valid (VALIDATION_ERROR otherwise)
    - No email enumeration: unknown emails and accounts without a password
      get the same acknowledgment and cause no write
    - Token is 32 random bytes, stored as its SHA-256 digest
    - Token expires after settings.token_ttl (1 hour by default)
    - A new request overwrites any outstanding token for the account
    - Store failures surface as DEPENDENCY_ERROR with a generic message
    - Notifier failures are logged only, so the response still does not
      depend on whether the account exists
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: PasswordResetSettings,
        notifier: IPasswordResetNotifier,
    ):
        self.uow = uow
        self.settings = settings
        self.notifier = notifier

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Email address of the account to reset

        Returns:
            Result with the uniform acknowledgment, or Error

        Errors:
            - VALIDATION_ERROR: email is malformed
            - DEPENDENCY_ERROR: account store failed
        """
        try:
            RequestPasswordResetCommand(email=email)
        except ValidationError as exc:
            return Return.err(validation_error(exc))

        try:
            async with self.uow:
                # Exact match on the submitted address, not the normalized form
                user = await self.uow.users.get_by_email(email)

                # Same response whether or not an eligible account exists
                if user is None or not user.has_password():
                    return Return.ok(RequestPasswordResetResponse(message=RESET_REQUESTED_MESSAGE))

                email = user.email
                reset_token = generate_reset_token()
                expires_at = utcnow() + self.settings.token_ttl
                await self.uow.users.update_reset_token(
                    email, hash_reset_token(reset_token), expires_at
                )
                await self.uow.commit()
        except SQLAlchemyError:
            logger.exception("Password reset request failed")
            return Return.err(Error("DEPENDENCY_ERROR", "Failed to process request"))

        reset_url = build_reset_url(self.settings.base_url, reset_token)

        if self.settings.expose_reset_url:
            logger.info(
                "Password reset requested",
                extra={
                    "context": {
                        "email": email,
                        "reset_url": reset_url,
                        "expires_at": expires_at.isoformat(),
                    }
                },
            )
            return Return.ok(
                RequestPasswordResetResponse(
                    message=RESET_REQUESTED_MESSAGE,
                    reset_url=reset_url,
                    note=DEVELOPMENT_NOTE,
                )
            )

        try:
            await self.notifier.send_reset_link(email, reset_url, expires_at)
        except Exception:
            # The token is already stored; a retry supersedes it
            logger.exception("Failed to dispatch password reset link")

        return Return.ok(RequestPasswordResetResponse(message=RESET_REQUESTED_MESSAGE))
