# app/utils/email_utils.py
import logging
import smtplib
from email.message import EmailMessage

from app.core.config import settings

logger = logging.getLogger(__name__)


def send_email(to_email: str, subject: str, body: str):
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.SMTP_USER
    msg["To"] = to_email
    msg.set_content(body)

    with smtplib.SMTP_SSL(settings.SMTP_SERVER, settings.SMTP_PORT) as smtp:
        smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        smtp.send_message(msg)


def booking_confirmation_body(booking: dict) -> str:
    lines = []
    for item in booking["services"]:
        service = item["service"]
        name = service["name"] if service else "(service removed)"
        lines.append(f"  - {name} x{item['quantity']}")
    return f"""Hi {booking['customer']['name']},

Your booking is {booking['status']}.

Date: {booking['booking_date'].isoformat()}
Time: {booking['booking_time']}
Services:
{chr(10).join(lines)}
Total: ${booking['total_price']:.2f}

Booking reference: {booking['id']}
"""


def send_booking_confirmation(booking: dict):
    """Background task; a failed send never affects the booking itself."""
    try:
        send_email(
            booking["customer"]["email"],
            "Your booking is confirmed",
            booking_confirmation_body(booking),
        )
    except (smtplib.SMTPException, OSError):
        logger.exception("Could not send confirmation for booking %s", booking["id"])
