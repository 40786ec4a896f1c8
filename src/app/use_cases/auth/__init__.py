"""
Authentication Use Cases

Password reset business logic.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .password_reset_settings import PasswordResetSettings
from .dtos import (
    RequestPasswordResetCommand,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # Settings
    "PasswordResetSettings",
    # DTOs - Commands
    "RequestPasswordResetCommand",
    # DTOs - Responses
    "RequestPasswordResetResponse",
    "ConfirmPasswordResetResponse",
]
