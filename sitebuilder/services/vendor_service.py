import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from sitebuilder.database.models import User, Vendor, Website
from sitebuilder.enums.vendor_status import VendorStatus
from sitebuilder.exceptions.custom import ConflictError, NotFoundError
from sitebuilder.schemas.vendor_schema import VendorCreate, VendorUpdate
from sitebuilder.services.base_service import BaseService
from sitebuilder.utils.permissions import ensure_access, vendor_owner, website_owner
from sitebuilder.utils.slug import unique_slug

logger = logging.getLogger(__name__)


class VendorService(BaseService):
    def __init__(self):
        super().__init__(Vendor)

    def get_or_404(self, db: Session, vendor_id: int, include_deleted: bool = False) -> Vendor:
        vendor = self.get(db, vendor_id, include_deleted=include_deleted)
        if not vendor:
            raise NotFoundError("Vendor not found", code="VENDOR_NOT_FOUND")
        return vendor

    def get_by_owner(self, db: Session, owner_id: int, include_deleted: bool = False) -> Optional[Vendor]:
        return self.query(db, include_deleted).filter(Vendor.owner_id == owner_id).first()

    def slug_exists(self, db: Session, slug: str) -> bool:
        # Deleted vendors keep their slug
        return self.query(db, include_deleted=True).filter(Vendor.slug == slug).first() is not None

    def _check_website(self, db: Session, website_id: int, user: User) -> Website:
        website = db.query(Website).filter(Website.id == website_id).first()
        if not website:
            raise NotFoundError("Website not found", code="WEBSITE_NOT_FOUND")
        ensure_access(user, website, website_owner, message="You can only link vendors to your own websites")
        return website

    def list_vendors(
        self,
        db: Session,
        skip: int = 0,
        limit: int = 10,
        category: Optional[str] = None,
        status: Optional[str] = None,
        website_id: Optional[int] = None,
        include_deleted: bool = False,
    ) -> Tuple[List[Vendor], int]:
        query = self.query(db, include_deleted)
        if category:
            query = query.filter(Vendor.category == category)
        if status:
            query = query.filter(Vendor.status == status)
        if website_id is not None:
            query = query.filter(Vendor.website_id == website_id)
        total = query.count()
        vendors = query.order_by(Vendor.created_at.desc(), Vendor.id.desc()).offset(skip).limit(limit).all()
        return vendors, total

    def create_vendor(self, db: Session, payload: VendorCreate, user: User) -> Vendor:
        if self.get_by_owner(db, user.id, include_deleted=True):
            raise ConflictError("You already have a vendor profile", code="VENDOR_EXISTS")
        if payload.website_id is not None:
            self._check_website(db, payload.website_id, user)

        data = payload.model_dump()
        data["category"] = payload.category.value
        vendor = Vendor(
            **data,
            owner_id=user.id,
            slug=unique_slug(payload.name, lambda candidate: self.slug_exists(db, candidate)),
            status=VendorStatus.PENDING.value,
        )
        vendor = self.create(db, vendor)
        logger.info("Vendor %s created for user %s", vendor.slug, user.id)
        return vendor

    def update_vendor(self, db: Session, vendor: Vendor, payload: VendorUpdate, user: User) -> Vendor:
        updates = payload.model_dump(exclude_unset=True)
        if updates.get("website_id") is not None:
            self._check_website(db, updates["website_id"], user)
        for key, value in updates.items():
            setattr(vendor, key, value)
        db.commit()
        db.refresh(vendor)
        return vendor

    def get_owned(self, db: Session, vendor_id: int, user: User) -> Vendor:
        vendor = self.get_or_404(db, vendor_id)
        ensure_access(user, vendor, vendor_owner, message="You do not own this vendor")
        return vendor

    def set_status(self, db: Session, vendor: Vendor, status: VendorStatus) -> Vendor:
        vendor.status = status.value
        db.commit()
        db.refresh(vendor)
        logger.info("Vendor %s status set to %s", vendor.slug, status.value)
        return vendor
