import copy
import logging
from typing import Any, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from sitebuilder.config import PLATFORM_DOMAIN
from sitebuilder.database.models import User, Website
from sitebuilder.enums.website_status import WebsiteStatus
from sitebuilder.exceptions.custom import ConflictError, NotFoundError, PermissionDenied
from sitebuilder.schemas.website_schema import WebsiteCreate, WebsiteUpdate
from sitebuilder.services.base_service import BaseService
from sitebuilder.utils.dates import utcnow
from sitebuilder.utils.permissions import ensure_access, is_elevated, website_owner
from sitebuilder.utils.slug import unique_slug

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "theme": {
        "template": "default",
        "primaryColor": "#3B82F6",
        "secondaryColor": "#64748B",
        "fontFamily": "Inter",
    },
    "contact": {},
    "features": {
        "booking": True,
        "payments": False,
        "reviews": True,
        "blog": False,
        "newsletter": False,
        "analytics": True,
    },
}


def merge_settings(current: dict, updates: dict) -> dict:
    """Recursively merge `updates` into a copy of `current`."""
    merged = copy.deepcopy(current or {})
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


def website_url(website: Website) -> str:
    if website.custom_domain and website.custom_domain_verified:
        return f"https://{website.custom_domain}"
    if website.subdomain:
        return f"https://{website.subdomain}.{PLATFORM_DOMAIN}"
    return f"https://{PLATFORM_DOMAIN}/{website.slug}"


class WebsiteService(BaseService):
    def __init__(self):
        super().__init__(Website)

    def slug_exists(self, db: Session, slug: str, exclude_id: Optional[int] = None) -> bool:
        query = db.query(Website.id).filter(Website.slug == slug)
        if exclude_id is not None:
            query = query.filter(Website.id != exclude_id)
        return query.first() is not None

    def get_by_slug(self, db: Session, slug: str, active_only: bool = True) -> Optional[Website]:
        query = db.query(Website).filter(Website.slug == slug)
        if active_only:
            query = query.filter(Website.status == WebsiteStatus.ACTIVE.value)
        return query.first()

    def get_by_domain(self, db: Session, domain: str) -> Optional[Website]:
        """Active website whose verified custom domain is `domain`."""
        return (
            db.query(Website)
            .filter(
                Website.custom_domain == domain,
                Website.custom_domain_verified.is_(True),
                Website.status == WebsiteStatus.ACTIVE.value,
            )
            .first()
        )

    def get_owned(self, db: Session, website_id: int, user: User) -> Website:
        website = self.get(db, website_id)
        if not website:
            raise NotFoundError("Website not found", code="WEBSITE_NOT_FOUND")
        ensure_access(user, website, website_owner)
        return website

    def list_websites(
        self,
        db: Session,
        user: User,
        skip: int = 0,
        limit: int = 10,
        type: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Website], int]:
        query = db.query(Website)
        if not is_elevated(user):
            query = query.filter(Website.owner_id == user.id)
        if type:
            query = query.filter(Website.type == type)
        if status:
            query = query.filter(Website.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Website.name.ilike(pattern),
                    Website.description.ilike(pattern),
                    Website.slug.ilike(pattern),
                )
            )
        total = query.count()
        websites = query.order_by(Website.created_at.desc(), Website.id.desc()).offset(skip).limit(limit).all()
        return websites, total

    def create_website(self, db: Session, payload: WebsiteCreate, owner: User) -> Website:
        if payload.slug:
            if self.slug_exists(db, payload.slug):
                raise ConflictError("Website slug is already taken", code="SLUG_TAKEN")
            slug = payload.slug
        else:
            slug = unique_slug(payload.name, lambda candidate: self.slug_exists(db, candidate))

        settings = merge_settings(DEFAULT_SETTINGS, {"title": payload.name})
        if payload.settings:
            settings = merge_settings(settings, payload.settings)

        website = Website(
            name=payload.name,
            slug=slug,
            subdomain=slug,
            description=payload.description,
            type=payload.type.value,
            owner_id=owner.id,
            status=WebsiteStatus.DRAFT.value,
            custom_domain=payload.custom_domain,
            settings=settings,
        )
        website = self.create(db, website)
        logger.info("Website %s created by user %s", website.slug, owner.id)
        return website

    def update_website(self, db: Session, website: Website, payload: WebsiteUpdate) -> Website:
        updates = payload.model_dump(exclude_unset=True)

        new_slug = updates.get("slug")
        if new_slug and new_slug != website.slug:
            # Public URLs and subdomains depend on the slug once published
            if website.published_at is not None:
                raise ConflictError(
                    "Slug cannot be changed after the website has been published",
                    code="SLUG_IMMUTABLE",
                )
            if self.slug_exists(db, new_slug, exclude_id=website.id):
                raise ConflictError("Website slug is already taken", code="SLUG_TAKEN")
            if website.subdomain == website.slug:
                website.subdomain = new_slug

        if "custom_domain" in updates and updates["custom_domain"] != website.custom_domain:
            website.custom_domain_verified = False

        for key, value in updates.items():
            setattr(website, key, value)
        db.commit()
        db.refresh(website)
        return website

    def update_settings(self, db: Session, website: Website, settings: dict[str, Any]) -> Website:
        website.settings = merge_settings(website.settings, settings)
        db.commit()
        db.refresh(website)
        return website

    def update_status(
        self, db: Session, website: Website, status: WebsiteStatus, user: User
    ) -> Website:
        if status == WebsiteStatus.SUSPENDED and not is_elevated(user):
            raise PermissionDenied("Only administrators can suspend a website")
        if website.status == WebsiteStatus.SUSPENDED.value and not is_elevated(user):
            raise PermissionDenied("Suspended websites can only be reinstated by an administrator")

        website.status = status.value
        if status == WebsiteStatus.ACTIVE and website.published_at is None:
            website.published_at = utcnow()
        db.commit()
        db.refresh(website)
        logger.info("Website %s status set to %s by user %s", website.slug, status.value, user.id)
        return website

    def verify_domain(self, db: Session, website: Website) -> Website:
        if not website.custom_domain:
            raise ConflictError("Website has no custom domain", code="NO_CUSTOM_DOMAIN")
        website.custom_domain_verified = True
        db.commit()
        db.refresh(website)
        return website

    def record_visit(self, db: Session, website: Website, is_unique: bool = False) -> None:
        website.views = (website.views or 0) + 1
        if is_unique:
            website.unique_visitors = (website.unique_visitors or 0) + 1
        website.last_visit_at = utcnow()
        db.commit()

    def delete_website(self, db: Session, website: Website) -> None:
        for vendor in website.vendors:
            vendor.website_id = None
        self.delete(db, website)
        logger.info("Website %s deleted", website.slug)
