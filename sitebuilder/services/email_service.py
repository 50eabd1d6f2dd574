import logging

from fastapi_mail import FastMail, MessageSchema, ConnectionConfig

from sitebuilder.config import (
    EMAIL_FROM,
    EMAIL_FROM_NAME,
    EMAIL_PORT,
    EMAIL_SERVER,
    EMAIL_SUPPRESS_SEND,
)

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self):
        try:
            self.config = ConnectionConfig(
                MAIL_USERNAME="",
                MAIL_PASSWORD="",
                MAIL_FROM=EMAIL_FROM,
                MAIL_PORT=EMAIL_PORT,
                MAIL_SERVER=EMAIL_SERVER,
                MAIL_FROM_NAME=EMAIL_FROM_NAME,
                MAIL_STARTTLS=False,
                MAIL_SSL_TLS=False,
                USE_CREDENTIALS=False,
                VALIDATE_CERTS=False,
                SUPPRESS_SEND=1 if EMAIL_SUPPRESS_SEND else 0,
            )
            self.mailer = FastMail(self.config)
        except Exception as e:
            raise Exception(f"Failed to initialize email service: {str(e)}")

    async def send_email(self, to_email: str, subject: str, body: str):
        """Send a plain text email"""
        message = MessageSchema(
            subject=subject,
            recipients=[to_email],
            body=body,
            subtype="plain",
        )
        await self.mailer.send_message(message)

    async def notify(self, to_email: str, subject: str, body: str) -> bool:
        """Send an email without failing the caller; returns whether it went out."""
        if not to_email:
            return False
        try:
            await self.send_email(to_email, subject, body)
            return True
        except Exception as e:
            logger.warning("Failed to send '%s' to %s: %s", subject, to_email, e)
            return False

    async def send_booking_confirmed_email(self, booking) -> bool:
        return await self.notify(
            booking.guest_email,
            f"✅ Booking Confirmed - {booking.booking_reference}",
            f"""Hello {booking.guest_name},

Your booking {booking.booking_reference} has been confirmed.

Confirmation number: {booking.confirmation_number}
Total: {booking.total_price:.2f} {booking.currency}

Best regards,
The Support Team""",
        )

    async def send_booking_cancelled_email(self, booking) -> bool:
        refund_line = (
            f"A refund of {booking.refund_amount:.2f} {booking.currency} will be processed."
            if booking.refund_eligible
            else f"A cancellation fee of {booking.cancellation_fee:.2f} {booking.currency} applies."
        )
        return await self.notify(
            booking.guest_email,
            f"❌ Booking Cancelled - {booking.booking_reference}",
            f"""Hello {booking.guest_name},

Your booking {booking.booking_reference} has been cancelled.

Reason: {booking.cancellation_reason or "Not specified"}
{refund_line}

If you did not request this cancellation, please contact our support team.

Best regards,
The Support Team""",
        )
