import logging
from typing import Any, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from sitebuilder.database.models import Booking, User, Vendor
from sitebuilder.enums.booking_status import CancelledBy
from sitebuilder.enums.business_category import BOOKABLE_CATEGORIES, BusinessCategory
from sitebuilder.enums.user_role import UserRole
from sitebuilder.exceptions.custom import NotFoundError, PermissionDenied, ValidationFailed
from sitebuilder.schemas.auth_schema import UserMinimumResponse
from sitebuilder.schemas.booking_schema import (
    BookingCreate,
    BookingFilter,
    BookingUpdate,
    PaymentUpdate,
)
from sitebuilder.schemas.vendor_schema import VendorMinimumResponse
from sitebuilder.services import booking_lifecycle
from sitebuilder.services.base_service import BaseService
from sitebuilder.services.hotel_service import HotelService
from sitebuilder.services.rating_service import apply_rating
from sitebuilder.services.tenant_service import TenantContext
from sitebuilder.services.vendor_service import VendorService
from sitebuilder.utils.dates import as_utc
from sitebuilder.utils.id_generator import generate_booking_reference
from sitebuilder.utils.permissions import (
    booking_customer,
    booking_vendor_owner,
    ensure_access,
    has_role,
    is_elevated,
    owns,
)

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    "created_at": Booking.created_at,
    "check_in": Booking.check_in,
    "event_date": Booking.event_date,
    "appointment_date": Booking.appointment_date,
    "total_price": Booking.total_price,
    "status": Booking.status,
}

REQUIRED_FIELDS = {
    BusinessCategory.HOTEL: ("hotel_id", "check_in", "check_out", "guests"),
    BusinessCategory.WEDDING: ("service_type", "event_date"),
    BusinessCategory.BUSINESS: ("appointment_date", "appointment_time"),
}


def validate_category_fields(payload: BookingCreate, vendor: Optional[Vendor] = None) -> list[dict]:
    """Collect every missing or inconsistent category field."""
    errors = []
    if payload.category not in BOOKABLE_CATEGORIES:
        errors.append(
            {"field": "category", "message": f"{payload.category.value} bookings are not supported"}
        )
        return errors

    if vendor is not None and vendor.category != payload.category.value:
        errors.append(
            {"field": "category", "message": "Booking category does not match the vendor category"}
        )

    for name in REQUIRED_FIELDS[payload.category]:
        if getattr(payload, name) is None:
            errors.append({"field": name, "message": f"{name} is required for {payload.category.value} bookings"})

    if payload.check_in and payload.check_out and as_utc(payload.check_out) <= as_utc(payload.check_in):
        errors.append({"field": "check_out", "message": "check_out must be after check_in"})

    return errors


def compute_total(payload: BookingCreate) -> float:
    if payload.total_price is not None:
        return payload.total_price
    total = payload.base_price + payload.taxes + payload.service_charges - payload.discount_amount
    return round(max(total, 0.0), 2)


class BookingService(BaseService):
    def __init__(self):
        super().__init__(Booking)
        self.vendor_service = VendorService()
        self.hotel_service = HotelService()

    def get_or_404(self, db: Session, booking_id: int) -> Booking:
        booking = self.get(db, booking_id)
        if not booking:
            raise NotFoundError("Booking not found", code="BOOKING_NOT_FOUND")
        return booking

    def get_for_user(self, db: Session, booking_id: int, user: User) -> Booking:
        """Booking visible to its customer, its vendor's owner or an admin."""
        booking = self.get_or_404(db, booking_id)
        ensure_access(user, booking, booking_customer, booking_vendor_owner)
        return booking

    def get_for_vendor(self, db: Session, booking_id: int, user: User) -> Booking:
        """Booking the caller may manage as vendor owner or admin."""
        booking = self.get_or_404(db, booking_id)
        ensure_access(
            user,
            booking,
            booking_vendor_owner,
            message="Only the vendor or an administrator can manage this booking",
        )
        return booking

    def create_booking(
        self,
        db: Session,
        payload: BookingCreate,
        user: User,
        tenant: Optional[TenantContext] = None,
    ) -> Booking:
        vendor = self.vendor_service.get(db, payload.vendor_id)
        if not vendor or (tenant is not None and vendor.website_id != tenant.website.id):
            raise NotFoundError("Vendor not found", code="VENDOR_NOT_FOUND")

        errors = validate_category_fields(payload, vendor)
        if errors:
            raise ValidationFailed(errors)

        hotel = None
        if payload.category == BusinessCategory.HOTEL:
            hotel = self.hotel_service.get(db, payload.hotel_id)
            if not hotel or hotel.vendor_id != vendor.id:
                raise NotFoundError("Hotel not found", code="HOTEL_NOT_FOUND")

        total = compute_total(payload)
        data = payload.model_dump(exclude={"guest", "total_price", "category", "payment_method"})
        booking = Booking(
            **data,
            booking_reference=generate_booking_reference(),
            user_id=user.id,
            category=payload.category.value,
            guest_name=payload.guest.name,
            guest_email=payload.guest.email,
            guest_phone=payload.guest.phone,
            total_price=total,
            payment_method=payload.payment_method.value,
            payment_amount=total,
        )

        # Booking and its counters are committed together
        try:
            db.add(booking)
            vendor.total_bookings = (vendor.total_bookings or 0) + 1
            if hotel is not None:
                hotel.total_bookings = (hotel.total_bookings or 0) + 1
            if vendor.website is not None:
                vendor.website.total_bookings = (vendor.website.total_bookings or 0) + 1
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(booking)

        logger.info(
            "Booking %s created by user %s for vendor %s", booking.booking_reference, user.id, vendor.id
        )
        return booking

    def list_bookings(
        self,
        db: Session,
        user: User,
        filters: Optional[BookingFilter] = None,
        skip: int = 0,
        limit: int = 10,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        scope: Optional[str] = None,
    ) -> Tuple[List[Booking], int]:
        """
        Bookings visible to `user`.

        Customers see their own bookings, vendors the bookings made with
        their vendor and admins everything. `scope` narrows the result to
        "customer" (bookings the caller made) or "vendor" (bookings made
        with the caller's vendor) regardless of role.
        """
        filters = filters or BookingFilter()
        query = db.query(Booking)

        if scope is None:
            if is_elevated(user):
                scope = "all"
            elif has_role(user, UserRole.VENDOR):
                scope = "vendor"
            else:
                scope = "customer"

        if scope == "customer":
            query = query.filter(Booking.user_id == user.id)
        elif scope == "vendor":
            vendor = self.vendor_service.get_by_owner(db, user.id)
            if vendor is None:
                return [], 0
            query = query.filter(Booking.vendor_id == vendor.id)
        else:
            if filters.user_id is not None:
                query = query.filter(Booking.user_id == filters.user_id)
            if filters.vendor_id is not None:
                query = query.filter(Booking.vendor_id == filters.vendor_id)

        if filters.status:
            query = query.filter(Booking.status == filters.status.value)
        if filters.category:
            query = query.filter(Booking.category == filters.category.value)

        starts_at = func.coalesce(Booking.check_in, Booking.event_date, Booking.appointment_date)
        if filters.start_date:
            query = query.filter(starts_at >= filters.start_date)
        if filters.end_date:
            query = query.filter(starts_at <= filters.end_date)

        column = SORT_FIELDS.get(sort_by, Booking.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()

        total = query.count()
        bookings = query.order_by(ordering, Booking.id.desc()).offset(skip).limit(limit).all()
        return bookings, total

    def update_booking(self, db: Session, booking: Booking, payload: BookingUpdate, user: User) -> Booking:
        updates = payload.model_dump(exclude_unset=True)
        if "vendor_notes" in updates and not (
            is_elevated(user) or owns(user, booking, booking_vendor_owner)
        ):
            raise PermissionDenied("Only the vendor can add vendor notes")

        if payload.guest is not None:
            booking.guest_name = payload.guest.name
            booking.guest_email = payload.guest.email
            booking.guest_phone = payload.guest.phone
        if "special_requests" in updates:
            booking.special_requests = payload.special_requests
        if "vendor_notes" in updates:
            booking.vendor_notes = payload.vendor_notes

        db.commit()
        db.refresh(booking)
        return booking

    def _save(self, db: Session, booking: Booking, event: str, user: User) -> Booking:
        db.commit()
        db.refresh(booking)
        logger.info("Booking %s %s by user %s", booking.booking_reference, event, user.id)
        return booking

    def confirm_booking(self, db: Session, booking: Booking, user: User) -> Booking:
        booking_lifecycle.confirm(booking, confirmed_by_id=user.id)
        return self._save(db, booking, "confirmed", user)

    def check_in_booking(
        self, db: Session, booking: Booking, user: User, actual_guests: Optional[int] = None
    ) -> Booking:
        booking_lifecycle.check_in(booking, actual_guests=actual_guests)
        return self._save(db, booking, "checked in", user)

    def check_out_booking(self, db: Session, booking: Booking, user: User) -> Booking:
        booking_lifecycle.check_out(booking)
        return self._save(db, booking, "checked out", user)

    def cancelled_by(self, booking: Booking, user: User) -> CancelledBy:
        if is_elevated(user):
            return CancelledBy.ADMIN
        if owns(user, booking, booking_vendor_owner):
            return CancelledBy.VENDOR
        return CancelledBy.CUSTOMER

    def cancel_booking(
        self, db: Session, booking: Booking, user: User, reason: Optional[str] = None
    ) -> Booking:
        booking_lifecycle.cancel(booking, self.cancelled_by(booking, user), reason=reason)
        return self._save(db, booking, "cancelled", user)

    def add_review(
        self, db: Session, booking: Booking, user: User, rating: int, comment: Optional[str] = None
    ) -> Booking:
        if not owns(user, booking, booking_customer):
            raise PermissionDenied("Only the customer who made the booking can review it")

        booking_lifecycle.add_review(booking, rating, comment)
        apply_rating(booking.vendor, rating)
        if booking.hotel is not None:
            apply_rating(booking.hotel, rating)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(booking)
        logger.info("Booking %s reviewed with rating %s", booking.booking_reference, rating)
        return booking

    def respond_to_review(self, db: Session, booking: Booking, user: User, response: str) -> Booking:
        booking_lifecycle.respond_to_review(booking, response)
        return self._save(db, booking, "review answered", user)

    def update_payment(self, db: Session, booking: Booking, user: User, payload: PaymentUpdate) -> Booking:
        booking_lifecycle.update_payment(booking, payload.status, payload.transaction_id)
        return self._save(db, booking, f"payment set to {payload.status.value}", user)

    def format_booking_response(self, booking: Booking) -> dict[str, Any]:
        response = {
            "id": booking.id,
            "booking_reference": booking.booking_reference,
            "category": booking.category,
            "status": booking.status,
            "customer": UserMinimumResponse.model_validate(booking.user).model_dump() if booking.user else None,
            "vendor": VendorMinimumResponse.model_validate(booking.vendor).model_dump() if booking.vendor else None,
            "guest": {
                "name": booking.guest_name,
                "email": booking.guest_email,
                "phone": booking.guest_phone,
            },
            "pricing": {
                "base_price": booking.base_price,
                "taxes": booking.taxes,
                "service_charges": booking.service_charges,
                "discount_amount": booking.discount_amount,
                "total_price": booking.total_price,
                "currency": booking.currency,
            },
            "payment": {
                "method": booking.payment_method,
                "status": booking.payment_status,
                "transaction_id": booking.transaction_id,
                "amount": booking.payment_amount,
                "paid_at": booking.paid_at,
            },
            "confirmation": {
                "confirmation_number": booking.confirmation_number,
                "confirmed_at": booking.confirmed_at,
                "confirmed_by_id": booking.confirmed_by_id,
            },
            "checked_in_at": booking.checked_in_at,
            "actual_guests": booking.actual_guests,
            "checked_out_at": booking.checked_out_at,
            "special_requests": booking.special_requests,
            "vendor_notes": booking.vendor_notes,
            "source": booking.source,
            "created_at": booking.created_at,
            "updated_at": booking.updated_at,
        }

        if booking.category == BusinessCategory.HOTEL.value:
            response["hotel_details"] = {
                "hotel_id": booking.hotel_id,
                "hotel_name": booking.hotel.name if booking.hotel else None,
                "room_name": booking.room_name,
                "room_type": booking.room_type,
                "check_in": booking.check_in,
                "check_out": booking.check_out,
                "guests": booking.guests,
            }
        elif booking.category == BusinessCategory.WEDDING.value:
            response["wedding_details"] = {
                "service_type": booking.service_type,
                "event_date": booking.event_date,
                "event_location": booking.event_location,
            }
        elif booking.category == BusinessCategory.BUSINESS.value:
            response["business_details"] = {
                "appointment_date": booking.appointment_date,
                "appointment_time": booking.appointment_time,
            }

        if booking.cancelled_at is not None:
            response["cancellation"] = {
                "reason": booking.cancellation_reason,
                "cancelled_by": booking.cancelled_by,
                "cancelled_at": booking.cancelled_at,
                "refund_eligible": booking.refund_eligible,
                "refund_amount": booking.refund_amount,
                "cancellation_fee": booking.cancellation_fee,
            }

        if booking.has_review:
            response["review"] = {
                "rating": booking.review_rating,
                "comment": booking.review_comment,
                "reviewed_at": booking.reviewed_at,
                "response": booking.review_response,
                "responded_at": booking.review_responded_at,
            }

        return response
