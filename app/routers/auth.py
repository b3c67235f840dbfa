from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.models.user import User
from app.schemas.auth import (
    AuthSessionResponse,
    SendOtpRequest,
    SignupRequest,
    SignupResponse,
    UserResponse,
    VerifyOtpRequest,
)
from app.schemas.common import ApiResponse, MessageResponse
from app.services.auth import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(request: SignupRequest, db: Session = Depends(get_db)) -> dict:
    """Step 1: Create an unverified account and email a signup OTP"""
    user = await auth_service.signup(request, db)
    return {"user": user, "message": "Signup successful, OTP sent to email."}


@router.post("/verify-signup-otp", response_model=AuthSessionResponse)
async def verify_signup_otp(
    request: VerifyOtpRequest, db: Session = Depends(get_db)
) -> dict:
    """Step 2: Confirm the signup OTP and start a session"""
    user, token = auth_service.verify_otp(request, db)
    return {"user": user, "session_token": token}


@router.post("/send-otp", response_model=MessageResponse)
async def send_otp(request: SendOtpRequest, db: Session = Depends(get_db)) -> dict:
    """Email a login OTP; unknown addresses get an account on the fly"""
    await auth_service.send_otp(request, db)
    return {"message": "OTP sent"}


@router.post("/verify-otp", response_model=AuthSessionResponse)
async def verify_otp(request: VerifyOtpRequest, db: Session = Depends(get_db)) -> dict:
    user, token = auth_service.verify_otp(request, db)
    return {"user": user, "session_token": token}


@router.post("/logout", response_model=MessageResponse)
async def logout() -> dict:
    """Sessions are stateless JWTs; the client discards its token"""
    return {"message": "Logged out. Please delete your token on client."}


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_user_info(
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """Get current user information"""
    return {"data": current_user}
