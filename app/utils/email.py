# app/utils/email.py
"""
OTP delivery over SMTP using fastapi-mail.

When ``mail_username``/``mail_password`` are empty, sending is skipped and
logged so local development works without an SMTP account.
"""

import logging
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from app.core.config import settings

logger = logging.getLogger(__name__)

OTP_SUBJECTS = {
    "signup": "Your ThinkCyber Signup OTP",
    "login": "Your ThinkCyber Login OTP",
}


def is_valid_email(email: str) -> bool:
    """Syntax check only; no DNS lookups"""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_mail_configured() -> bool:
    return bool(settings.mail_username and settings.mail_password)


def get_mail_config() -> Optional[ConnectionConfig]:
    """Build the SMTP connection config, or None when SMTP is not configured"""
    if not is_mail_configured():
        return None

    return ConnectionConfig(
        MAIL_USERNAME=settings.mail_username,
        MAIL_PASSWORD=settings.mail_password,
        MAIL_FROM=settings.mail_from_address,
        MAIL_FROM_NAME=settings.mail_from_name,
        MAIL_PORT=settings.mail_port,
        MAIL_SERVER=settings.mail_host,
        MAIL_STARTTLS=settings.mail_starttls,
        MAIL_SSL_TLS=settings.mail_ssl_tls,
        USE_CREDENTIALS=True,
        VALIDATE_CERTS=True,
    )


def render_otp_body(otp: str, purpose: str) -> str:
    label = "signup OTP" if purpose == "signup" else "OTP"
    return (
        f"<p>Your {label} is: <b>{otp}</b><br>"
        f"This code is valid for {settings.otp_expire_minutes} minutes.</p>"
    )


async def send_otp_email(email: str, otp: str, purpose: str = "login") -> bool:
    """
    Send a one-time code to ``email``.

    Args:
        email: Recipient address
        otp: Plaintext code
        purpose: ``"signup"`` or ``"login"``; picks the subject line

    Returns:
        bool: True when the message was handed to the SMTP server
    """
    config = get_mail_config()
    if not config:
        logger.warning(f"SMTP not configured. OTP email to {email} skipped.")
        return False

    message = MessageSchema(
        subject=OTP_SUBJECTS.get(purpose, OTP_SUBJECTS["login"]),
        recipients=[email],
        body=render_otp_body(otp, purpose),
        subtype=MessageType.html,
    )

    try:
        await FastMail(config).send_message(message)
    except Exception as e:
        logger.error(f"Failed to send OTP email to {email}: {e}")
        return False

    logger.info(f"OTP email ({purpose}) sent to {email}")
    return True
