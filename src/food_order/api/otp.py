"""Password-reset API router — one-time code issuance and verification.

Endpoints
---------
POST /api/send-otp        → email a reset code
POST /api/verify-otp      → check a reset code
POST /api/reset-password  → check a reset code and store the new password
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy.ext.asyncio import AsyncSession

from food_order.database.engine import get_session
from food_order.database.repository import UserRepository
from food_order.otp.manager import OtpManager, OtpOutcome

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["password-reset"])

# Shared OTP manager (in-memory singleton)
_otp_manager = OtpManager()


def get_otp_manager() -> OtpManager:
    """Dependency hook so tests can swap in their own manager."""
    return _otp_manager


# ── Request / response models ────────────────────────────

class SendOTPRequest(BaseModel):
    email: EmailStr


class VerifyOTPRequest(BaseModel):
    email: EmailStr
    otp: str


class ResetPasswordRequest(BaseModel):
    email: EmailStr
    otp: str
    new_password: str = Field(alias="newPassword", min_length=1)

    model_config = {"populate_by_name": True}


class ApiResponse(BaseModel):
    success: bool
    message: str | None = None


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse(success=False, message=message).model_dump(),
    )


# ── Endpoints ────────────────────────────────────────────

@router.post("/send-otp", response_model=ApiResponse, response_model_exclude_none=True)
async def send_otp(
    body: SendOTPRequest, otp_manager: OtpManager = Depends(get_otp_manager)
):
    """Email a fresh reset code to the given address."""
    if not await otp_manager.issue(body.email):
        return _failure(500, "Failed to send OTP")
    return ApiResponse(success=True)


@router.post("/verify-otp", response_model=ApiResponse, response_model_exclude_none=True)
async def verify_otp(
    body: VerifyOTPRequest, otp_manager: OtpManager = Depends(get_otp_manager)
):
    """Validate a reset code; the code is consumed on success."""
    outcome = await otp_manager.verify(body.email, body.otp)
    if outcome is not OtpOutcome.VERIFIED:
        return _failure(400, outcome.message)
    return ApiResponse(success=True)


@router.post("/reset-password", response_model=ApiResponse)
async def reset_password(
    body: ResetPasswordRequest,
    otp_manager: OtpManager = Depends(get_otp_manager),
    session: AsyncSession = Depends(get_session),
):
    """Replace the account password once the reset code checks out."""
    repo = UserRepository(session)
    user = await repo.find_by_email(body.email)
    if not user:
        return _failure(404, "No account found for this email")

    outcome = await otp_manager.verify(body.email, body.otp)
    if outcome is not OtpOutcome.VERIFIED:
        return _failure(400, outcome.message)

    await repo.update_password(body.email, body.new_password)
    logger.info("Password reset for user %s", user.id)
    return ApiResponse(success=True, message="Password updated successfully")
