from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from sitebuilder.database.models import Hotel, User, Vendor
from sitebuilder.exceptions.custom import NotFoundError, ValidationFailed
from sitebuilder.schemas.hotel_schema import HotelCreate
from sitebuilder.services.base_service import BaseService
from sitebuilder.services.vendor_service import VendorService
from sitebuilder.utils.permissions import ensure_access, vendor_owner, is_elevated


class HotelService(BaseService):
    def __init__(self):
        super().__init__(Hotel)
        self.vendor_service = VendorService()

    def get_or_404(self, db: Session, hotel_id: int, include_deleted: bool = False) -> Hotel:
        hotel = self.get(db, hotel_id, include_deleted=include_deleted)
        if not hotel:
            raise NotFoundError("Hotel not found", code="HOTEL_NOT_FOUND")
        return hotel

    def list_hotels(
        self,
        db: Session,
        skip: int = 0,
        limit: int = 10,
        vendor_id: Optional[int] = None,
        website_id: Optional[int] = None,
        city: Optional[str] = None,
    ) -> Tuple[List[Hotel], int]:
        query = self.query(db)
        if vendor_id is not None:
            query = query.filter(Hotel.vendor_id == vendor_id)
        if website_id is not None:
            query = query.join(Vendor).filter(
                Vendor.website_id == website_id, Vendor.is_deleted.is_(False)
            )
        if city:
            query = query.filter(Hotel.city.ilike(f"%{city}%"))
        total = query.count()
        hotels = query.order_by(Hotel.created_at.desc(), Hotel.id.desc()).offset(skip).limit(limit).all()
        return hotels, total

    def create_hotel(self, db: Session, payload: HotelCreate, user: User) -> Hotel:
        if payload.vendor_id is not None:
            vendor = self.vendor_service.get_or_404(db, payload.vendor_id)
        elif is_elevated(user):
            raise ValidationFailed([{"field": "vendor_id", "message": "vendor_id is required"}])
        else:
            vendor = self.vendor_service.get_by_owner(db, user.id)
            if not vendor:
                raise NotFoundError("You do not have a vendor profile", code="VENDOR_NOT_FOUND")

        ensure_access(user, vendor, vendor_owner, message="You can only add hotels to your own vendor")

        hotel = Hotel(**payload.model_dump(exclude={"vendor_id"}), vendor_id=vendor.id)
        return self.create(db, hotel)
