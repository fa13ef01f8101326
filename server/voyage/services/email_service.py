"""Booking notification emails sent through the Resend HTTP API."""

from html import escape
from typing import Optional

import httpx

from ..core.config import settings
from ..core.exceptions import EmailDeliveryError, ProblemDetailsException
from ..core.observability import get_logger, metrics_collector
from ..schemas.email import BookingEmailRequest, EmailDispatchResult

logger = get_logger(__name__)

ROW = (
    '<tr><td style="border: 1px solid #dee2e6; font-weight: bold; width: 40%;">{label}</td>'
    '<td style="border: 1px solid #dee2e6;">{value}</td></tr>'
)


def admin_email_html(booking: BookingEmailRequest) -> str:
    """HTML body of the back-office notification."""
    rows = [
        ("Customer Name", escape(booking.customer_name)),
        ("Email", f'<a href="mailto:{escape(booking.customer_email)}">{escape(booking.customer_email)}</a>'),
        ("Phone", escape(booking.customer_phone or "Not provided")),
        ("Tour", escape(booking.tour_name)),
        ("Travel Date", escape(booking.travel_date)),
        ("Number of Guests", str(booking.number_of_guests)),
    ]
    if booking.special_requests and booking.special_requests != "None":
        rows.append(("Special Requests", escape(booking.special_requests).replace("\n", "<br>")))

    table = "".join(ROW.format(label=label, value=value) for label, value in rows)
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: 'Segoe UI', Tahoma, sans-serif; background-color: #f4f4f4;">
  <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff;">
    <div style="background: #1a1a2e; padding: 30px; text-align: center;">
      <h1 style="color: #d4af37; margin: 0;">{escape(settings.company_name)}</h1>
      <p style="color: #ffffff;">New Booking Request</p>
    </div>
    <div style="padding: 30px;">
      <h2 style="color: #1a1a2e;">Booking Details</h2>
      <table width="100%" cellspacing="0" cellpadding="8" style="border-collapse: collapse;">{table}</table>
      <p style="margin-top: 30px; padding: 20px; background-color: #fff3cd; border-left: 4px solid #d4af37;">
        <strong>Action Required:</strong> Please respond to this inquiry within 24 hours.
      </p>
    </div>
  </div>
</body>
</html>"""


def customer_email_html(booking: BookingEmailRequest) -> str:
    """HTML body of the confirmation sent to the customer."""
    guests = f"{booking.number_of_guests} {'person' if booking.number_of_guests == 1 else 'people'}"
    company = escape(settings.company_name)
    tour = escape(booking.tour_name)
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: 'Segoe UI', Tahoma, sans-serif; background-color: #f4f4f4;">
  <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff;">
    <div style="background: #1a1a2e; padding: 40px; text-align: center;">
      <h1 style="color: #d4af37; margin: 0;">{company}</h1>
      <p style="color: #ffffff;">Your African Adventure Awaits!</p>
    </div>
    <div style="padding: 40px 30px;">
      <h2 style="color: #1a1a2e;">Jambo {escape(booking.customer_name)}!</h2>
      <p>Thank you for your booking request! We're thrilled that you've chosen {company}
        for your <strong style="color: #d4af37;">{tour}</strong> adventure.</p>
      <h3>Your Booking Summary</h3>
      <table width="100%" cellspacing="0" cellpadding="5">
        <tr><td>Tour:</td><td style="text-align: right;"><strong>{tour}</strong></td></tr>
        <tr><td>Travel Date:</td><td style="text-align: right;"><strong>{escape(booking.travel_date)}</strong></td></tr>
        <tr><td>Guests:</td><td style="text-align: right;"><strong>{guests}</strong></td></tr>
      </table>
      <h4>What Happens Next?</h4>
      <ol>
        <li>Our travel expert will review your request</li>
        <li>We'll contact you within 24 hours with details</li>
        <li>Once confirmed, you'll receive your itinerary</li>
        <li>Get ready for an unforgettable adventure!</li>
      </ol>
      <p><strong>Asante sana! (Thank you very much!)<br>The {company} Team</strong></p>
    </div>
    <div style="background-color: #1a1a2e; padding: 30px; text-align: center; color: #888;">
      {company}<br>Email: {escape(settings.admin_email)}<br>{escape(settings.company_website)}
    </div>
  </div>
</body>
</html>"""


class EmailService:
    """
    Sends the admin notification and the customer confirmation for a booking.

    A rejected message (non-2xx from the provider) is logged and reported in
    the result; it does not fail the call. Missing configuration or a
    transport failure raises ``EmailDeliveryError``.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    async def _send(self, client: httpx.AsyncClient, recipient: str, to: str, subject: str, html: str) -> bool:
        response = await client.post(
            settings.resend_api_url,
            headers={"Authorization": f"Bearer {settings.resend_api_key}"},
            json={
                "from": settings.email_from,
                "to": [to],
                "subject": subject,
                "html": html,
            },
        )

        sent = response.is_success
        metrics_collector.record_email(recipient, sent)
        if sent:
            logger.info("email_sent", recipient=recipient)
        else:
            logger.error(
                "email_rejected",
                recipient=recipient,
                status_code=response.status_code,
                body=response.text[:500],
            )
        return sent

    async def send_booking_emails(self, booking: BookingEmailRequest) -> EmailDispatchResult:
        """
        Send both booking emails.

        Raises:
            EmailDeliveryError: If no API key is configured or the provider is unreachable
        """
        if not settings.resend_api_key:
            logger.error("email_not_configured")
            raise EmailDeliveryError(detail="Email delivery is not configured: RESEND_API_KEY is empty")

        log = logger.with_context(tour_name=booking.tour_name)
        log.info("sending_booking_emails", guests=booking.number_of_guests)

        try:
            async with httpx.AsyncClient(
                transport=self.transport,
                timeout=settings.email_timeout_seconds,
            ) as client:
                admin_sent = await self._send(
                    client,
                    "admin",
                    settings.admin_email,
                    f"New Booking: {booking.tour_name} - {booking.customer_name}",
                    admin_email_html(booking),
                )
                customer_sent = await self._send(
                    client,
                    "customer",
                    booking.customer_email,
                    f"Booking Received - {booking.tour_name} | {settings.company_name}",
                    customer_email_html(booking),
                )
        except httpx.HTTPError as e:
            log.error("email_transport_failed", error=str(e))
            raise EmailDeliveryError(detail=f"Could not reach the email provider: {e}")

        message = "Emails sent successfully"
        if not (admin_sent and customer_sent):
            message = "Request received, but some notification emails could not be delivered"

        return EmailDispatchResult(
            success=True,
            message=message,
            admin_sent=admin_sent,
            customer_sent=customer_sent,
        )

    async def notify_in_background(self, booking: BookingEmailRequest) -> None:
        """Send booking emails after the response; failures are logged only."""
        try:
            await self.send_booking_emails(booking)
        except ProblemDetailsException as e:
            logger.warning("booking_notification_failed", error=e.detail)
        except Exception as e:
            logger.error("booking_notification_crashed", error=str(e), exc_info=True)


def get_email_service() -> EmailService:
    """FastAPI dependency providing the email service."""
    return EmailService()
