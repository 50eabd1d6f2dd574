from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from sitebuilder.database.init import get_db
from sitebuilder.database.models import User
from sitebuilder.enums.booking_status import BookingStatus
from sitebuilder.enums.business_category import BusinessCategory
from sitebuilder.responses.success import created_response, data_response, paginated_response
from sitebuilder.schemas.booking_schema import (
    BookingCancel,
    BookingCheckIn,
    BookingCreate,
    BookingFilter,
    BookingUpdate,
    PaymentUpdate,
    ReviewCreate,
    ReviewReply,
)
from sitebuilder.services.booking_service import SORT_FIELDS, BookingService
from sitebuilder.services.email_service import EmailService
from sitebuilder.services.tenant_service import resolve
from sitebuilder.utils.dependencies import get_current_user, vendor_required
from sitebuilder.utils.pagination import Pagination, pagination_params

router = APIRouter(prefix="/bookings", tags=["Bookings"])
booking_service = BookingService()
email_service = EmailService()


def booking_filters(
    status: Optional[BookingStatus] = None,
    category: Optional[BusinessCategory] = None,
    vendor_id: Optional[int] = None,
    user_id: Optional[int] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> BookingFilter:
    return BookingFilter(
        status=status,
        category=category,
        vendor_id=vendor_id,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
    )


def sort_params(
    sort_by: str = Query("created_at", pattern="^(" + "|".join(SORT_FIELDS) + ")$"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
) -> dict:
    return {"sort_by": sort_by, "sort_order": sort_order}


def listing(db, user, filters, pagination, sort, scope=None):
    bookings, total = booking_service.list_bookings(
        db,
        user,
        filters,
        skip=pagination.skip,
        limit=pagination.limit,
        scope=scope,
        **sort,
    )
    return paginated_response(
        [booking_service.format_booking_response(b) for b in bookings],
        pagination.page,
        pagination.limit,
        total,
        key="bookings",
    )


@router.post("")
def create_booking(
    payload: BookingCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a pending booking with a vendor.

    When the request resolves to a website (subdomain, custom domain or
    tenant header) the vendor must belong to it.
    """
    tenant = resolve(request, db)
    booking = booking_service.create_booking(db, payload, current_user, tenant)
    return created_response(
        booking_service.format_booking_response(booking), "Booking created successfully"
    )


@router.get("")
def list_bookings(
    filters: BookingFilter = Depends(booking_filters),
    pagination: Pagination = Depends(pagination_params),
    sort: dict = Depends(sort_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return listing(db, current_user, filters, pagination, sort)


@router.get("/my")
def list_my_bookings(
    filters: BookingFilter = Depends(booking_filters),
    pagination: Pagination = Depends(pagination_params),
    sort: dict = Depends(sort_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return listing(db, current_user, filters, pagination, sort, scope="customer")


@router.get("/vendor")
def list_vendor_bookings(
    filters: BookingFilter = Depends(booking_filters),
    pagination: Pagination = Depends(pagination_params),
    sort: dict = Depends(sort_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(vendor_required),
):
    return listing(db, current_user, filters, pagination, sort, scope="vendor")


@router.get("/{booking_id}")
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = booking_service.get_for_user(db, booking_id, current_user)
    return data_response(booking_service.format_booking_response(booking))


@router.put("/{booking_id}")
def update_booking(
    booking_id: int,
    payload: BookingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = booking_service.get_for_user(db, booking_id, current_user)
    booking = booking_service.update_booking(db, booking, payload, current_user)
    return data_response(
        booking_service.format_booking_response(booking), "Booking updated successfully"
    )


@router.patch("/{booking_id}/cancel")
async def cancel_booking(
    booking_id: int,
    payload: Optional[BookingCancel] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = booking_service.get_for_user(db, booking_id, current_user)
    booking = booking_service.cancel_booking(
        db, booking, current_user, reason=payload.reason if payload else None
    )
    await email_service.send_booking_cancelled_email(booking)
    return data_response(
        booking_service.format_booking_response(booking), "Booking cancelled successfully"
    )


@router.patch("/{booking_id}/confirm")
async def confirm_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = booking_service.get_for_vendor(db, booking_id, current_user)
    booking = booking_service.confirm_booking(db, booking, current_user)
    await email_service.send_booking_confirmed_email(booking)
    return data_response(
        booking_service.format_booking_response(booking), "Booking confirmed successfully"
    )


@router.patch("/{booking_id}/check-in")
def check_in_booking(
    booking_id: int,
    payload: Optional[BookingCheckIn] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = booking_service.get_for_vendor(db, booking_id, current_user)
    booking = booking_service.check_in_booking(
        db, booking, current_user, actual_guests=payload.actual_guests if payload else None
    )
    return data_response(
        booking_service.format_booking_response(booking), "Guest checked in successfully"
    )


@router.patch("/{booking_id}/check-out")
def check_out_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = booking_service.get_for_vendor(db, booking_id, current_user)
    booking = booking_service.check_out_booking(db, booking, current_user)
    return data_response(
        booking_service.format_booking_response(booking), "Guest checked out successfully"
    )


@router.post("/{booking_id}/review")
def add_review(
    booking_id: int,
    payload: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = booking_service.get_or_404(db, booking_id)
    booking = booking_service.add_review(
        db, booking, current_user, payload.rating, payload.comment
    )
    return created_response(
        booking_service.format_booking_response(booking), "Review added successfully"
    )


@router.post("/{booking_id}/review/reply")
def reply_to_review(
    booking_id: int,
    payload: ReviewReply,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = booking_service.get_for_vendor(db, booking_id, current_user)
    booking = booking_service.respond_to_review(db, booking, current_user, payload.response)
    return data_response(
        booking_service.format_booking_response(booking), "Review response saved"
    )


@router.patch("/{booking_id}/payment")
def update_payment(
    booking_id: int,
    payload: PaymentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = booking_service.get_for_vendor(db, booking_id, current_user)
    booking = booking_service.update_payment(db, booking, current_user, payload)
    return data_response(
        booking_service.format_booking_response(booking), "Payment updated successfully"
    )
