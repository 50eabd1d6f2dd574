from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from sitebuilder.enums.business_category import BusinessCategory
from sitebuilder.enums.vendor_status import VendorStatus


class VendorBase(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    category: BusinessCategory
    description: Optional[str] = Field(default=None, max_length=2000)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    city: Optional[str] = Field(default=None, max_length=100)


class VendorCreate(VendorBase):
    website_id: Optional[int] = None


class VendorUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    city: Optional[str] = Field(default=None, max_length=100)
    website_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("Name cannot be null")
        return value


class VendorStatusUpdate(BaseModel):
    status: VendorStatus


class VendorResponse(VendorBase):
    id: int
    slug: str
    owner_id: int
    website_id: Optional[int] = None
    status: VendorStatus
    rating: float
    review_count: int
    total_bookings: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class VendorMinimumResponse(BaseModel):
    id: int
    name: str
    slug: str
    category: BusinessCategory

    model_config = ConfigDict(from_attributes=True)
