from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.notifier import IPasswordResetNotifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    PasswordResetSettings,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
)
from src.depends import (
    get_password_reset_notifier,
    get_password_reset_settings,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class ForgotPasswordRequest(BaseModel):
    """
    Forgot password HTTP request payload

    The email format is checked by the use case so that malformed input is
    reported the same way whichever caller drives it.
    """

    email: str = Field(..., description="Email address of the account")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    response_model_exclude_none=True,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: PasswordResetSettings = Depends(get_password_reset_settings),
    notifier: IPasswordResetNotifier = Depends(get_password_reset_notifier),
):
    """
    Request Password Reset

    Issues a reset token for the account and acknowledges with the same
    message whether or not the account exists. In development mode the
    reset link is returned as resetUrl instead of being dispatched.

    Raises:
        - 400 Bad Request: Malformed email
        - 500 Internal Server Error: Account store unavailable
    """
    use_case = RequestPasswordResetUseCase(uow, settings, notifier)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    token: str = Field(..., description="Password reset token from the reset link")
    password: str = Field(..., description="New password (min 8 chars)")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password(
    request: ResetPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Confirm Password Reset

    Consumes the reset token and sets the new password.

    Raises:
        - 400 Bad Request: Validation failed, or token invalid, superseded, used or expired
        - 500 Internal Server Error: Account store unavailable
    """
    use_case = ConfirmPasswordResetUseCase(uow)
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "INVALID_TOKEN", "TOKEN_EXPIRED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
