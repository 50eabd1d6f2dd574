"""Unit tests for booking transitions and the running mean rating."""

from datetime import datetime, timedelta, timezone

import pytest

from sitebuilder.database.models import Booking, Vendor
from sitebuilder.enums.booking_status import BookingStatus, CancelledBy
from sitebuilder.enums.payment_status import PaymentStatus
from sitebuilder.exceptions.custom import DomainRuleError
from sitebuilder.services import booking_lifecycle
from sitebuilder.services.rating_service import apply_rating, running_mean

NOW = datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc)


def make_booking(status=BookingStatus.PENDING, **kwargs):
    defaults = dict(
        booking_reference="BKTEST000001",
        category="hotel",
        status=status.value,
        guests=2,
        total_price=1000.0,
        payment_amount=1000.0,
        payment_status=PaymentStatus.PENDING.value,
        check_in=NOW + timedelta(days=5),
    )
    defaults.update(kwargs)
    return Booking(**defaults)


def assert_rule(code, func, *args, **kwargs):
    with pytest.raises(DomainRuleError) as exc_info:
        func(*args, **kwargs)
    assert exc_info.value.code == code
    assert exc_info.value.status_code == 400


# --- confirm ---


def test_confirm_pending():
    booking = booking_lifecycle.confirm(make_booking(), confirmed_by_id=7, now=NOW)

    assert booking.status == BookingStatus.CONFIRMED.value
    assert booking.confirmed_by_id == 7
    assert booking.confirmed_at == NOW
    assert booking.confirmation_number.startswith("CNF")


@pytest.mark.parametrize("status", [s for s in BookingStatus if s != BookingStatus.PENDING])
def test_confirm_requires_pending(status):
    with pytest.raises(DomainRuleError) as exc_info:
        booking_lifecycle.confirm(make_booking(status), confirmed_by_id=1)
    assert exc_info.value.code == "INVALID_STATUS"
    assert exc_info.value.message == "Only pending bookings can be confirmed"


# --- check in / check out ---


def test_check_in_records_guests():
    booking = make_booking(BookingStatus.CONFIRMED)
    booking_lifecycle.check_in(booking, actual_guests=3, now=NOW)

    assert booking.status == BookingStatus.CHECKED_IN.value
    assert booking.checked_in_at == NOW
    assert booking.actual_guests == 3


def test_check_in_defaults_to_booked_guests():
    booking = booking_lifecycle.check_in(make_booking(BookingStatus.CONFIRMED))
    assert booking.actual_guests == 2


@pytest.mark.parametrize("status", [s for s in BookingStatus if s != BookingStatus.CONFIRMED])
def test_check_in_requires_confirmed(status):
    assert_rule("INVALID_STATUS", booking_lifecycle.check_in, make_booking(status))


def test_check_out_requires_check_in():
    assert_rule("NOT_CHECKED_IN", booking_lifecycle.check_out, make_booking(BookingStatus.PENDING))
    assert_rule("NOT_CHECKED_IN", booking_lifecycle.check_out, make_booking(BookingStatus.CONFIRMED))


def test_check_out_twice_is_rejected():
    booking = make_booking(BookingStatus.CONFIRMED)
    booking_lifecycle.check_in(booking, now=NOW)
    booking_lifecycle.check_out(booking, now=NOW + timedelta(days=2))

    assert booking.status == BookingStatus.COMPLETED.value
    assert booking.checked_out_at == NOW + timedelta(days=2)
    assert_rule("INVALID_STATUS", booking_lifecycle.check_out, booking)


# --- cancel ---


def test_cancel_rules_cover_every_status():
    assert set(booking_lifecycle.CANCEL_RULES) == set(BookingStatus)


@pytest.mark.parametrize(
    "status", [BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN]
)
def test_cancel_non_terminal(status):
    booking = booking_lifecycle.cancel(
        make_booking(status), CancelledBy.VENDOR, reason="Overbooked", now=NOW
    )

    assert booking.status == BookingStatus.CANCELLED.value
    assert booking.cancelled_by == "vendor"
    assert booking.cancellation_reason == "Overbooked"
    assert booking.cancelled_at == NOW


def test_cancel_completed_always_fails():
    assert_rule(
        "CANNOT_CANCEL_COMPLETED",
        booking_lifecycle.cancel,
        make_booking(BookingStatus.COMPLETED),
        CancelledBy.ADMIN,
    )


def test_cancel_twice_fails():
    booking = booking_lifecycle.cancel(make_booking(), CancelledBy.CUSTOMER, now=NOW)
    assert_rule("ALREADY_CANCELLED", booking_lifecycle.cancel, booking, CancelledBy.CUSTOMER)


def test_cancel_refunded_fails():
    assert_rule(
        "INVALID_STATUS",
        booking_lifecycle.cancel,
        make_booking(BookingStatus.REFUNDED),
        CancelledBy.ADMIN,
    )


def test_early_cancellation_is_fully_refunded():
    booking = booking_lifecycle.cancel(
        make_booking(check_in=NOW + timedelta(hours=25)), CancelledBy.CUSTOMER, now=NOW
    )
    assert booking.refund_eligible is True
    assert booking.refund_amount == 1000.0
    assert booking.cancellation_fee == 0.0


def test_late_cancellation_is_charged_a_fee():
    booking = booking_lifecycle.cancel(
        make_booking(check_in=NOW + timedelta(hours=23)), CancelledBy.CUSTOMER, now=NOW
    )
    assert booking.refund_eligible is False
    assert booking.refund_amount == 0.0
    assert booking.cancellation_fee == 100.0


def test_refund_window_uses_naive_dates_as_utc():
    booking = make_booking(check_in=(NOW + timedelta(days=3)).replace(tzinfo=None))
    eligible, amount, fee = booking_lifecycle.refund_terms(booking, NOW)
    assert (eligible, amount, fee) == (True, 1000.0, 0.0)


def test_refund_window_for_wedding_and_business_dates():
    wedding = make_booking(category="wedding", check_in=None, event_date=NOW + timedelta(days=30))
    business = make_booking(category="business", check_in=None, appointment_date=NOW + timedelta(hours=2))

    assert booking_lifecycle.refund_terms(wedding, NOW)[0] is True
    assert booking_lifecycle.refund_terms(business, NOW)[0] is False


# --- reviews ---


def test_review_requires_completed_booking():
    for status in BookingStatus:
        if status == BookingStatus.COMPLETED:
            continue
        assert_rule("BOOKING_NOT_COMPLETED", booking_lifecycle.add_review, make_booking(status), 5)


def test_second_review_is_rejected():
    booking = booking_lifecycle.add_review(
        make_booking(BookingStatus.COMPLETED), 4, "Lovely stay", now=NOW
    )
    assert booking.review_rating == 4
    assert booking.review_comment == "Lovely stay"
    assert booking.reviewed_at == NOW

    assert_rule("ALREADY_REVIEWED", booking_lifecycle.add_review, booking, 5)


@pytest.mark.parametrize("rating", [0, 6])
def test_review_rating_range(rating):
    assert_rule(
        "INVALID_RATING", booking_lifecycle.add_review, make_booking(BookingStatus.COMPLETED), rating
    )


def test_respond_to_review():
    booking = make_booking(BookingStatus.COMPLETED)
    assert_rule("NO_REVIEW", booking_lifecycle.respond_to_review, booking, "Thanks!")

    booking_lifecycle.add_review(booking, 5)
    booking_lifecycle.respond_to_review(booking, "Thanks!", now=NOW)
    assert booking.review_response == "Thanks!"
    assert booking.review_responded_at == NOW


# --- payment ---


def test_completed_payment_sets_paid_at():
    booking = booking_lifecycle.update_payment(
        make_booking(), PaymentStatus.COMPLETED, transaction_id="txn_1", now=NOW
    )
    assert booking.payment_status == "completed"
    assert booking.transaction_id == "txn_1"
    assert booking.paid_at == NOW


def test_refunding_a_cancelled_booking_marks_it_refunded():
    booking = booking_lifecycle.cancel(make_booking(), CancelledBy.CUSTOMER, now=NOW)
    booking_lifecycle.update_payment(booking, PaymentStatus.REFUNDED)
    assert booking.status == BookingStatus.REFUNDED.value

    active = booking_lifecycle.update_payment(make_booking(), PaymentStatus.REFUNDED)
    assert active.status == BookingStatus.PENDING.value


# --- running mean ---


def test_running_mean_matches_plain_average():
    average, count = 0.0, 0
    for rating in [5, 3, 4]:
        average = running_mean(average, count, rating)
        count += 1
    assert average == pytest.approx((5 + 3 + 4) / 3)
    assert average == pytest.approx(4.0)


def test_apply_rating_increments_count_by_one():
    vendor = Vendor(rating=0.0, review_count=0)
    for expected_count, rating in enumerate([5, 3, 4], start=1):
        apply_rating(vendor, rating)
        assert vendor.review_count == expected_count
    assert vendor.rating == pytest.approx(4.0)


def test_apply_rating_handles_unset_columns():
    vendor = Vendor()
    apply_rating(vendor, 4)
    assert vendor.rating == 4.0
    assert vendor.review_count == 1
