"""SMTP email sender for delivering OTP codes."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import anyio

from app.core.config import settings

logger = logging.getLogger(__name__)


def _build_message(email: str, otp_code: str) -> MIMEMultipart:
    message = MIMEMultipart()
    message["From"] = settings.FROM_EMAIL
    message["To"] = email
    message["Subject"] = "Your login code"

    body = f"""
    <div>
        <h2>Login code</h2>
        <p>Use the following one-time code to continue signing in:</p>
        <h3 style="color: #2563eb; font-size: 24px; text-align: center;">{otp_code}</h3>
        <p>The code expires in {settings.OTP_EXPIRE_SECONDS // 60} minutes.</p>
    </div>
    """
    message.attach(MIMEText(body, "html"))
    return message


async def send_otp_email(email: str, otp_code: str) -> tuple[bool, str | None]:
    """Send the OTP code to the provided email address via SMTP.

    The blocking SMTP conversation runs in a worker thread so the request
    handler is not blocked. Returns a success flag plus an optional error.
    """

    def _send() -> None:
        if not all([settings.SMTP_SERVER, settings.SMTP_USERNAME, settings.SMTP_PASSWORD, settings.FROM_EMAIL]):
            raise RuntimeError("SMTP settings are incomplete.")

        message = _build_message(email, otp_code)
        with smtplib.SMTP(settings.SMTP_SERVER, int(settings.SMTP_PORT), timeout=20) as server:
            server.ehlo()
            server.starttls()
            server.ehlo()
            server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
            server.send_message(message)

    try:
        await anyio.to_thread.run_sync(_send)
    except (OSError, RuntimeError) as exc:
        logger.warning("Failed to send OTP email to %s: %s", email, exc)
        return False, str(exc)
    logger.info("OTP email sent to %s", email)
    return True, None
