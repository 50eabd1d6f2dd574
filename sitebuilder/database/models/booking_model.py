from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Float, Boolean, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sitebuilder.database.init import Base
from sitebuilder.enums.booking_status import BookingStatus
from sitebuilder.enums.payment_status import PaymentStatus


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_user_status", "user_id", "status"),
        Index("ix_bookings_vendor_status", "vendor_id", "status"),
        Index("ix_bookings_category_status", "category", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    booking_reference = Column(String(32), unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    category = Column(String(20), nullable=False)

    # Hotel
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=True, index=True)
    room_name = Column(String(100), nullable=True)
    room_type = Column(String(50), nullable=True)
    check_in = Column(DateTime(timezone=True), nullable=True, index=True)
    check_out = Column(DateTime(timezone=True), nullable=True, index=True)
    guests = Column(Integer, nullable=True)

    # Wedding
    service_type = Column(String(100), nullable=True)
    event_date = Column(DateTime(timezone=True), nullable=True, index=True)
    event_location = Column(String(255), nullable=True)

    # Business services
    appointment_date = Column(DateTime(timezone=True), nullable=True, index=True)
    appointment_time = Column(String(20), nullable=True)

    guest_name = Column(String(100), nullable=False)
    guest_email = Column(String(100), nullable=False)
    guest_phone = Column(String(20), nullable=False)
    special_requests = Column(Text, nullable=True)
    vendor_notes = Column(Text, nullable=True)

    base_price = Column(Float, nullable=False)
    taxes = Column(Float, default=0.0, nullable=False)
    service_charges = Column(Float, default=0.0, nullable=False)
    discount_amount = Column(Float, default=0.0, nullable=False)
    total_price = Column(Float, nullable=False)
    currency = Column(String(3), default="INR", nullable=False)

    payment_method = Column(String(20), nullable=False)
    payment_status = Column(String(20), default=PaymentStatus.PENDING.value, nullable=False)
    transaction_id = Column(String(100), nullable=True)
    payment_amount = Column(Float, nullable=False)
    paid_at = Column(DateTime(timezone=True), nullable=True)

    status = Column(String(20), default=BookingStatus.PENDING.value, nullable=False)
    confirmation_number = Column(String(32), nullable=True, index=True)
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    confirmed_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    actual_guests = Column(Integer, nullable=True)
    checked_out_at = Column(DateTime(timezone=True), nullable=True)

    cancellation_reason = Column(String(500), nullable=True)
    cancelled_by = Column(String(20), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    refund_eligible = Column(Boolean, nullable=True)
    refund_amount = Column(Float, nullable=True)
    cancellation_fee = Column(Float, nullable=True)

    review_rating = Column(Integer, nullable=True)
    review_comment = Column(String(1000), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    review_response = Column(String(500), nullable=True)
    review_responded_at = Column(DateTime(timezone=True), nullable=True)

    source = Column(String(20), default="website", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="bookings", foreign_keys=[user_id])
    confirmed_by = relationship("User", foreign_keys=[confirmed_by_id])
    vendor = relationship("Vendor", back_populates="bookings")
    hotel = relationship("Hotel")

    @property
    def has_review(self) -> bool:
        return self.review_rating is not None
