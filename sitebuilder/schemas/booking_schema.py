from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from sitebuilder.enums.booking_status import BookingStatus
from sitebuilder.enums.business_category import BusinessCategory
from sitebuilder.enums.payment_method import PaymentMethod
from sitebuilder.enums.payment_status import PaymentStatus

PHONE_REGEX = r"^\+?[1-9]\d{0,15}$"


class GuestInfo(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(pattern=PHONE_REGEX)


class BookingCreate(BaseModel):
    vendor_id: int
    category: BusinessCategory
    guest: GuestInfo

    # Hotel
    hotel_id: Optional[int] = None
    room_name: Optional[str] = Field(default=None, max_length=100)
    room_type: Optional[str] = Field(default=None, max_length=50)
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    guests: Optional[int] = Field(default=None, ge=1, le=50)

    # Wedding
    service_type: Optional[str] = Field(default=None, max_length=100)
    event_date: Optional[datetime] = None
    event_location: Optional[str] = Field(default=None, max_length=255)

    # Business services
    appointment_date: Optional[datetime] = None
    appointment_time: Optional[str] = Field(default=None, max_length=20)

    base_price: float = Field(ge=0)
    taxes: float = Field(default=0, ge=0)
    service_charges: float = Field(default=0, ge=0)
    discount_amount: float = Field(default=0, ge=0)
    total_price: Optional[float] = Field(default=None, ge=0)
    currency: str = Field(default="INR", min_length=3, max_length=3)
    payment_method: PaymentMethod
    special_requests: Optional[str] = Field(default=None, max_length=1000)
    source: str = "website"


class BookingUpdate(BaseModel):
    guest: Optional[GuestInfo] = None
    special_requests: Optional[str] = Field(default=None, max_length=1000)
    vendor_notes: Optional[str] = Field(default=None, max_length=1000)


class BookingCancel(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=500)


class BookingCheckIn(BaseModel):
    actual_guests: Optional[int] = Field(default=None, ge=0)


class ReviewCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=1000)


class ReviewReply(BaseModel):
    response: str = Field(min_length=1, max_length=500)


class PaymentUpdate(BaseModel):
    status: PaymentStatus
    transaction_id: Optional[str] = Field(default=None, max_length=100)


class BookingFilter(BaseModel):
    status: Optional[BookingStatus] = None
    category: Optional[BusinessCategory] = None
    vendor_id: Optional[int] = None
    user_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
