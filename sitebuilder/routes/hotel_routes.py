from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sitebuilder.database.init import get_db
from sitebuilder.database.models import User
from sitebuilder.responses.success import created_response, data_response, paginated_response
from sitebuilder.schemas.hotel_schema import HotelCreate, HotelResponse
from sitebuilder.services.hotel_service import HotelService
from sitebuilder.utils.dependencies import vendor_required
from sitebuilder.utils.pagination import Pagination, pagination_params

router = APIRouter(prefix="/hotels", tags=["Hotels"])
hotel_service = HotelService()


@router.post("")
def create_hotel(
    payload: HotelCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(vendor_required),
):
    hotel = hotel_service.create_hotel(db, payload, current_user)
    return created_response(HotelResponse.model_validate(hotel), "Hotel created successfully")


@router.get("")
def list_hotels(
    vendor_id: Optional[int] = None,
    city: Optional[str] = None,
    pagination: Pagination = Depends(pagination_params),
    db: Session = Depends(get_db),
):
    hotels, total = hotel_service.list_hotels(
        db, skip=pagination.skip, limit=pagination.limit, vendor_id=vendor_id, city=city
    )
    return paginated_response(
        [HotelResponse.model_validate(h) for h in hotels],
        pagination.page,
        pagination.limit,
        total,
        key="hotels",
    )


@router.get("/{hotel_id}")
def get_hotel(hotel_id: int, db: Session = Depends(get_db)):
    hotel = hotel_service.get_or_404(db, hotel_id)
    return data_response(HotelResponse.model_validate(hotel))
