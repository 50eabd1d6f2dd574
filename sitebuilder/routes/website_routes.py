from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sitebuilder.database.init import get_db
from sitebuilder.database.models import User, Website
from sitebuilder.enums.business_category import BusinessCategory
from sitebuilder.enums.website_status import WebsiteStatus
from sitebuilder.exceptions.custom import NotFoundError, ValidationFailed
from sitebuilder.responses.success import (
    created_response,
    data_response,
    empty_response,
    paginated_response,
)
from sitebuilder.schemas.website_schema import (
    WebsiteAnalyticsResponse,
    WebsiteCreate,
    WebsiteResponse,
    WebsiteSettingsUpdate,
    WebsiteStatusUpdate,
    WebsiteUpdate,
)
from sitebuilder.services.website_service import WebsiteService, website_url
from sitebuilder.utils.dependencies import admin_required, get_current_user
from sitebuilder.utils.pagination import Pagination, pagination_params
from sitebuilder.utils.slug import is_valid_slug

router = APIRouter(prefix="/websites", tags=["Websites"])
website_service = WebsiteService()


def to_response(website: Website) -> WebsiteResponse:
    response = WebsiteResponse.model_validate(website)
    response.url = website_url(website)
    return response


@router.post("")
def create_website(
    payload: WebsiteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    website = website_service.create_website(db, payload, current_user)
    return created_response(to_response(website), "Website created successfully")


@router.get("")
def list_websites(
    type: Optional[BusinessCategory] = None,
    status: Optional[WebsiteStatus] = None,
    search: Optional[str] = Query(None, max_length=100),
    pagination: Pagination = Depends(pagination_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Own websites; administrators see every website."""
    websites, total = website_service.list_websites(
        db,
        current_user,
        skip=pagination.skip,
        limit=pagination.limit,
        type=type.value if type else None,
        status=status.value if status else None,
        search=search,
    )
    return paginated_response(
        [to_response(w) for w in websites], pagination.page, pagination.limit, total, key="websites"
    )


@router.get("/check-slug/{slug}")
def check_slug(slug: str, db: Session = Depends(get_db)):
    if not is_valid_slug(slug):
        raise ValidationFailed(
            [{"field": "slug", "message": "Slug must be 3-50 lowercase letters, digits or hyphens"}]
        )
    return data_response({"slug": slug, "available": not website_service.slug_exists(db, slug)})


@router.get("/public/{slug}")
def get_public_website(slug: str, db: Session = Depends(get_db)):
    website = website_service.get_by_slug(db, slug)
    if not website:
        raise NotFoundError("Website not found", code="WEBSITE_NOT_FOUND")
    website_service.record_visit(db, website)
    return data_response(to_response(website))


@router.get("/{website_id}")
def get_website(
    website_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    website = website_service.get_owned(db, website_id, current_user)
    return data_response(to_response(website))


@router.put("/{website_id}")
def update_website(
    website_id: int,
    payload: WebsiteUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    website = website_service.get_owned(db, website_id, current_user)
    website = website_service.update_website(db, website, payload)
    return data_response(to_response(website), "Website updated successfully")


@router.patch("/{website_id}/settings")
def update_website_settings(
    website_id: int,
    payload: WebsiteSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    website = website_service.get_owned(db, website_id, current_user)
    website = website_service.update_settings(db, website, payload.settings)
    return data_response(to_response(website), "Settings updated successfully")


@router.patch("/{website_id}/status")
def update_website_status(
    website_id: int,
    payload: WebsiteStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    website = website_service.get_owned(db, website_id, current_user)
    website = website_service.update_status(db, website, payload.status, current_user)
    return data_response(to_response(website), f"Website status set to {payload.status.value}")


@router.post("/{website_id}/verify-domain")
def verify_website_domain(
    website_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    website = website_service.get(db, website_id)
    if not website:
        raise NotFoundError("Website not found", code="WEBSITE_NOT_FOUND")
    website = website_service.verify_domain(db, website)
    return data_response(to_response(website), "Custom domain verified")


@router.get("/{website_id}/analytics")
def get_website_analytics(
    website_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    website = website_service.get_owned(db, website_id, current_user)
    return data_response(WebsiteAnalyticsResponse.model_validate(website))


@router.delete("/{website_id}")
def delete_website(
    website_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    website = website_service.get_owned(db, website_id, current_user)
    website_service.delete_website(db, website)
    return empty_response()
