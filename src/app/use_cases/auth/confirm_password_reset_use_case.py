"""
Confirm Password Reset Use Case

Consumes a password reset token and sets the new password.
"""

import logging

import bcrypt
from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return
from .dtos import ConfirmPasswordResetResponse
from .reset_token import hash_reset_token

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - Token is looked up by its SHA-256 digest
    - Superseded or already consumed tokens are no longer stored, so they are invalid
    - Expired tokens are cleared from the account and rejected
    - New password must be at least 8 characters
    - Password is hashed with bcrypt (cost factor 12)
    - Token fields are cleared together with the password update
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def _validate(self, token: str, password: str) -> Result[None]:
        details = []
        if not token:
            details.append({"field": "token", "message": "Reset token is required"})
        if len(password) < MIN_PASSWORD_LENGTH:
            details.append(
                {
                    "field": "password",
                    "message": f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                }
            )
        if details:
            return Return.err(Error("VALIDATION_ERROR", "Validation error", details=details))
        return Return.ok(None)

    async def execute(self, token: str, new_password: str) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from the reset link)
            new_password: New password to set

        Returns:
            Result with confirmation message, or Error

        Errors:
            - VALIDATION_ERROR: Missing token or password too short
            - INVALID_TOKEN: Token not found
            - TOKEN_EXPIRED: Token has expired
            - DEPENDENCY_ERROR: Account store failed
        """
        validation = self._validate(token, new_password)
        if validation.is_err():
            return validation

        try:
            async with self.uow:
                user = await self.uow.users.get_by_reset_token(hash_reset_token(token))

                if user is None or user.reset_token_expiry is None:
                    return Return.err(Error("INVALID_TOKEN", "Invalid or expired reset token"))

                if user.is_reset_token_expired(utcnow()):
                    await self.uow.users.update_reset_token(user.email, None, None)
                    await self.uow.commit()
                    return Return.err(
                        Error("TOKEN_EXPIRED", "Reset token has expired. Please request a new one.")
                    )

                email = user.email
                password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(12))

                user.password_hash = password_hash.decode()
                user.reset_token = None
                user.reset_token_expiry = None
                await self.uow.users.update(user)
                await self.uow.commit()
        except SQLAlchemyError:
            logger.exception("Failed to confirm password reset")
            return Return.err(Error("DEPENDENCY_ERROR", "Failed to reset password"))

        logger.info("Password reset successfully", extra={"context": {"email": email}})

        return Return.ok(
            ConfirmPasswordResetResponse(
                message="Password reset successfully. You can now sign in with your new password."
            )
        )
