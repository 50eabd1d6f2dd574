from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional
from datetime import datetime

from sitebuilder.enums.business_category import BusinessCategory
from sitebuilder.enums.website_status import WebsiteStatus
from .auth_schema import UserMinimumResponse

SLUG_REGEX = r"^[a-z0-9-]+$"
DOMAIN_REGEX = r"^[a-z0-9.-]+\.[a-z]{2,}$"


class WebsiteCreate(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    type: BusinessCategory
    description: Optional[str] = Field(default=None, max_length=500)
    slug: Optional[str] = Field(default=None, min_length=3, max_length=50, pattern=SLUG_REGEX)
    custom_domain: Optional[str] = Field(default=None, max_length=255, pattern=DOMAIN_REGEX)
    settings: Optional[dict[str, Any]] = None


class WebsiteUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    slug: Optional[str] = Field(default=None, min_length=3, max_length=50, pattern=SLUG_REGEX)
    custom_domain: Optional[str] = Field(default=None, max_length=255, pattern=DOMAIN_REGEX)

    @field_validator("name", "slug")
    @classmethod
    def not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class WebsiteSettingsUpdate(BaseModel):
    settings: dict[str, Any]


class WebsiteStatusUpdate(BaseModel):
    status: WebsiteStatus


class WebsiteResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    type: BusinessCategory
    status: WebsiteStatus
    owner: Optional[UserMinimumResponse] = None
    custom_domain: Optional[str] = None
    custom_domain_verified: bool = False
    subdomain: Optional[str] = None
    settings: dict[str, Any] = {}
    url: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WebsiteAnalyticsResponse(BaseModel):
    views: int
    unique_visitors: int
    total_bookings: int
    last_visit_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

