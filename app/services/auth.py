# services/auth.py
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.decorator import db_exception
from app.core.hasher import CodeHasher
from app.core.security import jwt_manager
from app.models.otp_verification import OtpVerification
from app.models.user import User
from app.schemas.auth import SendOtpRequest, SignupRequest, VerifyOtpRequest
from app.utils.email import is_mail_configured, is_valid_email, send_otp_email

# Setup logging
logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: datetime) -> datetime:
    # sqlite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class OtpHelper:
    """Helper class for one-time code operations"""

    @staticmethod
    def generate_code(length: Optional[int] = None) -> str:
        length = length or settings.otp_length
        return "".join(secrets.choice("0123456789") for _ in range(length))

    @staticmethod
    def issue(db: Session, user: User) -> str:
        """Replace the user's pending codes with a fresh one; returns the plaintext"""
        code = OtpHelper.generate_code()

        db.query(OtpVerification).filter(OtpVerification.user_id == user.id).delete(
            synchronize_session=False
        )
        db.add(
            OtpVerification(
                user_id=user.id,
                otp_hash=CodeHasher.hash_code(code),
                expires_at=_utcnow() + timedelta(minutes=settings.otp_expire_minutes),
            )
        )
        db.commit()

        logger.info(f"OTP issued for user {user.id}")
        return code

    @staticmethod
    def find_valid(db: Session, user: User, code: str) -> Optional[OtpVerification]:
        """Newest unexpired OTP row matching ``code``, if any"""
        now = _utcnow()
        rows = (
            db.query(OtpVerification)
            .filter(OtpVerification.user_id == user.id)
            .order_by(OtpVerification.created_at.desc(), OtpVerification.id.desc())
            .all()
        )
        for row in rows:
            if _aware(row.expires_at) < now:
                continue
            if CodeHasher.check_code(code, row.otp_hash):
                return row
        return None


class AuthService:
    """Service class for OTP sign-up and sign-in"""

    # ==================== Sign Up ====================

    @db_exception
    def create_signup_user(self, request: SignupRequest, db: Session) -> User:
        email = (request.email or "").strip()
        firstname = (request.firstname or "").strip()
        lastname = (request.lastname or "").strip()
        if not email or not firstname or not lastname:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email, firstname, and lastname required",
            )
        if not is_valid_email(email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Valid email required",
            )

        if db.query(User.id).filter(User.email == email).first():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User already exists",
            )

        user = User(email=email, name=f"{firstname} {lastname}", is_verified=False)
        db.add(user)
        db.commit()
        db.refresh(user)

        logger.info(f"User {user.id} signed up")
        return user

    async def signup(self, request: SignupRequest, db: Session) -> User:
        """Create an unverified user and email a signup OTP"""
        user = self.create_signup_user(request, db)
        code = OtpHelper.issue(db, user)
        await send_otp_email(user.email, code, purpose="signup")
        return user

    # ==================== Send OTP ====================

    @db_exception
    def get_or_create_user(self, email: str, db: Session) -> User:
        user = db.query(User).filter(User.email == email).first()
        if user:
            return user

        user = User(email=email, name="OTPUser", address="Unknown", is_verified=False)
        db.add(user)
        db.commit()
        db.refresh(user)

        logger.info(f"User {user.id} created on first OTP request")
        return user

    async def send_otp(self, request: SendOtpRequest, db: Session) -> None:
        email = (request.email or "").strip()
        if not email or not is_valid_email(email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Valid email required",
            )

        user = self.get_or_create_user(email, db)
        code = OtpHelper.issue(db, user)

        sent = await send_otp_email(email, code, purpose="login")
        if not sent and is_mail_configured():
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Email send failed",
            )

    # ==================== Verify OTP ====================

    @db_exception
    def verify_otp(self, request: VerifyOtpRequest, db: Session) -> Tuple[User, str]:
        """Consume a valid OTP; returns the verified user and a session token"""
        email = (request.email or "").strip()
        code = (request.otp or "").strip()
        if not email or not code:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email and OTP required",
            )

        user = db.query(User).filter(User.email == email).first()
        if not user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User not found",
            )

        if not OtpHelper.find_valid(db, user, code):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid or expired OTP",
            )

        user.is_verified = True
        user.last_login = _utcnow()
        db.query(OtpVerification).filter(OtpVerification.user_id == user.id).delete(
            synchronize_session=False
        )
        db.commit()
        db.refresh(user)

        logger.info(f"User {user.id} verified via OTP")
        return user, jwt_manager.create_session_token(user)

    # ==================== Maintenance ====================

    @db_exception
    def purge_expired_otps(self, db: Session) -> int:
        """Delete every expired OTP row; returns how many were removed"""
        removed = (
            db.query(OtpVerification)
            .filter(OtpVerification.expires_at < _utcnow())
            .delete(synchronize_session=False)
        )
        db.commit()
        if removed:
            logger.info(f"Purged {removed} expired OTP codes")
        return removed


# Create service instance
auth_service = AuthService()
