"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the password reset flow.
"""

from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Command DTOs
# ============================================================================


class RequestPasswordResetCommand(BaseModel):
    """Validated intent to reset the password of the account with this email"""

    email: str

    @field_validator("email")
    @classmethod
    def check_email_syntax(cls, value: str) -> str:
        """
        Accept a bare addr-spec only. Display-name forms and surrounding
        whitespace are rejected, not normalized away, because the account
        lookup uses the submitted string as-is.
        """
        if value != value.strip():
            raise ValueError("Email address must not contain surrounding whitespace")
        try:
            parsed = validate_email(
                value,
                check_deliverability=False,
                globally_deliverable=False,
                test_environment=True,
            )
        except EmailNotValidError as exc:
            raise ValueError(f"Invalid email address: {exc}")
        if parsed.normalized.casefold() != value.casefold():
            raise ValueError("Invalid email address")
        return value


# ============================================================================
# Response DTOs
# ============================================================================


class RequestPasswordResetResponse(BaseModel):
    """
    Response for request password reset use case.

    reset_url and note are only populated in development mode.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str
    reset_url: Optional[str] = Field(default=None, alias="resetUrl")
    note: Optional[str] = None


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    message: str
