from pydantic import BaseModel
from typing import Any, Optional

from sitebuilder.enums.business_category import BusinessCategory
from .auth_schema import UserMinimumResponse
from .website_schema import WebsiteResponse


class TenantResponse(BaseModel):
    slug: str
    type: BusinessCategory
    owner: Optional[UserMinimumResponse] = None
    settings: dict[str, Any] = {}
    is_active: bool
    website: WebsiteResponse
