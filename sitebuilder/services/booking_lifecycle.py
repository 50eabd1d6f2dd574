"""
Booking state transitions.

Each function checks the transition's precondition against the booking's
current status, raises `DomainRuleError` naming the violated rule when it
does not hold, and otherwise mutates the booking in place. Persistence,
counters and notifications are left to `BookingService`.
"""

from datetime import datetime, timedelta
from typing import Optional

from sitebuilder.database.models.booking_model import Booking
from sitebuilder.enums.booking_status import BookingStatus, CancelledBy
from sitebuilder.enums.payment_status import PaymentStatus
from sitebuilder.exceptions.custom import DomainRuleError
from sitebuilder.utils.dates import as_utc, utcnow
from sitebuilder.utils.id_generator import generate_confirmation_number

REFUND_WINDOW = timedelta(hours=24)
LATE_CANCELLATION_FEE_RATE = 0.10

# None means cancelling from that status is allowed
CANCEL_RULES: dict[BookingStatus, Optional[tuple[str, str]]] = {
    BookingStatus.PENDING: None,
    BookingStatus.CONFIRMED: None,
    BookingStatus.CHECKED_IN: None,
    BookingStatus.COMPLETED: ("CANNOT_CANCEL_COMPLETED", "Cannot cancel completed booking"),
    BookingStatus.CANCELLED: ("ALREADY_CANCELLED", "Booking is already cancelled"),
    BookingStatus.REFUNDED: ("INVALID_STATUS", "Refunded bookings cannot be cancelled"),
}


def current_status(booking: Booking) -> BookingStatus:
    return BookingStatus(booking.status)


def service_date(booking: Booking) -> Optional[datetime]:
    """The date the booked service starts, whatever the category."""
    return as_utc(booking.check_in or booking.event_date or booking.appointment_date)


def confirm(booking: Booking, confirmed_by_id: int, now: Optional[datetime] = None) -> Booking:
    if current_status(booking) != BookingStatus.PENDING:
        raise DomainRuleError("Only pending bookings can be confirmed", code="INVALID_STATUS")

    booking.status = BookingStatus.CONFIRMED.value
    booking.confirmed_by_id = confirmed_by_id
    booking.confirmed_at = now or utcnow()
    booking.confirmation_number = generate_confirmation_number()
    return booking


def check_in(
    booking: Booking, actual_guests: Optional[int] = None, now: Optional[datetime] = None
) -> Booking:
    if current_status(booking) != BookingStatus.CONFIRMED:
        raise DomainRuleError("Only confirmed bookings can be checked in", code="INVALID_STATUS")

    booking.status = BookingStatus.CHECKED_IN.value
    booking.checked_in_at = now or utcnow()
    booking.actual_guests = actual_guests if actual_guests is not None else booking.guests
    return booking


def check_out(booking: Booking, now: Optional[datetime] = None) -> Booking:
    if booking.checked_in_at is None:
        raise DomainRuleError("Booking has not been checked in", code="NOT_CHECKED_IN")
    if current_status(booking) != BookingStatus.CHECKED_IN:
        raise DomainRuleError("Only checked-in bookings can be checked out", code="INVALID_STATUS")

    booking.status = BookingStatus.COMPLETED.value
    booking.checked_out_at = now or utcnow()
    return booking


def refund_terms(booking: Booking, now: datetime) -> tuple[bool, float, float]:
    """
    Returns (eligible, refund_amount, cancellation_fee).

    Cancelling more than 24 hours before the service date refunds the full
    amount. Later cancellations, or bookings without a date, are charged a
    10% fee and refund nothing.
    """
    amount = booking.payment_amount or booking.total_price or 0.0
    starts_at = service_date(booking)
    if starts_at is not None and starts_at - as_utc(now) > REFUND_WINDOW:
        return True, amount, 0.0
    return False, 0.0, round(amount * LATE_CANCELLATION_FEE_RATE, 2)


def cancel(
    booking: Booking,
    cancelled_by: CancelledBy,
    reason: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Booking:
    rule = CANCEL_RULES[current_status(booking)]
    if rule is not None:
        code, message = rule
        raise DomainRuleError(message, code=code)

    now = now or utcnow()
    eligible, refund_amount, fee = refund_terms(booking, now)

    booking.status = BookingStatus.CANCELLED.value
    booking.cancellation_reason = reason
    booking.cancelled_by = cancelled_by.value
    booking.cancelled_at = now
    booking.refund_eligible = eligible
    booking.refund_amount = refund_amount
    booking.cancellation_fee = fee
    return booking


def add_review(
    booking: Booking, rating: int, comment: Optional[str] = None, now: Optional[datetime] = None
) -> Booking:
    if current_status(booking) != BookingStatus.COMPLETED:
        raise DomainRuleError(
            "Only completed bookings can be reviewed", code="BOOKING_NOT_COMPLETED"
        )
    if booking.has_review:
        raise DomainRuleError("Booking has already been reviewed", code="ALREADY_REVIEWED")
    if not 1 <= rating <= 5:
        raise DomainRuleError("Rating must be between 1 and 5", code="INVALID_RATING")

    booking.review_rating = rating
    booking.review_comment = comment
    booking.reviewed_at = now or utcnow()
    return booking


def respond_to_review(booking: Booking, response: str, now: Optional[datetime] = None) -> Booking:
    if not booking.has_review:
        raise DomainRuleError("Booking has no review to respond to", code="NO_REVIEW")

    booking.review_response = response
    booking.review_responded_at = now or utcnow()
    return booking


def update_payment(
    booking: Booking,
    status: PaymentStatus,
    transaction_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Booking:
    booking.payment_status = status.value
    if transaction_id:
        booking.transaction_id = transaction_id
    if status == PaymentStatus.COMPLETED and booking.paid_at is None:
        booking.paid_at = now or utcnow()
    if status == PaymentStatus.REFUNDED and current_status(booking) == BookingStatus.CANCELLED:
        booking.status = BookingStatus.REFUNDED.value
    return booking
