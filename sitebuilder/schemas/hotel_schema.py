from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class HotelCreate(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    vendor_id: Optional[int] = None
    city: Optional[str] = Field(default=None, max_length=100)
    address: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    star_rating: Optional[int] = Field(default=None, ge=1, le=5)


class HotelResponse(BaseModel):
    id: int
    vendor_id: int
    name: str
    city: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    star_rating: Optional[int] = None
    rating: float
    review_count: int
    total_bookings: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
