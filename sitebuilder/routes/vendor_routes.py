from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sitebuilder.database.init import get_db
from sitebuilder.database.models import User
from sitebuilder.enums.business_category import BusinessCategory
from sitebuilder.enums.vendor_status import VendorStatus
from sitebuilder.exceptions.custom import NotFoundError
from sitebuilder.responses.success import (
    created_response,
    data_response,
    empty_response,
    paginated_response,
)
from sitebuilder.schemas.vendor_schema import (
    VendorCreate,
    VendorResponse,
    VendorStatusUpdate,
    VendorUpdate,
)
from sitebuilder.services.vendor_service import VendorService
from sitebuilder.utils.dependencies import (
    admin_required,
    get_current_user,
    get_optional_user,
    vendor_required,
)
from sitebuilder.utils.pagination import Pagination, pagination_params
from sitebuilder.utils.permissions import is_elevated

router = APIRouter(prefix="/vendors", tags=["Vendors"])
vendor_service = VendorService()


@router.post("")
def create_vendor(
    payload: VendorCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(vendor_required),
):
    vendor = vendor_service.create_vendor(db, payload, current_user)
    return created_response(VendorResponse.model_validate(vendor), "Vendor created successfully")


@router.get("")
def list_vendors(
    category: Optional[BusinessCategory] = None,
    status: Optional[VendorStatus] = None,
    website_id: Optional[int] = None,
    include_deleted: bool = False,
    pagination: Pagination = Depends(pagination_params),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    vendors, total = vendor_service.list_vendors(
        db,
        skip=pagination.skip,
        limit=pagination.limit,
        category=category.value if category else None,
        status=status.value if status else None,
        website_id=website_id,
        # Deleted vendors are only listed for administrators
        include_deleted=include_deleted and is_elevated(current_user),
    )
    return paginated_response(
        [VendorResponse.model_validate(v) for v in vendors],
        pagination.page,
        pagination.limit,
        total,
        key="vendors",
    )


@router.get("/me")
def get_my_vendor(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    vendor = vendor_service.get_by_owner(db, current_user.id)
    if not vendor:
        raise NotFoundError("You do not have a vendor profile", code="VENDOR_NOT_FOUND")
    return data_response(VendorResponse.model_validate(vendor))


@router.get("/{vendor_id}")
def get_vendor(vendor_id: int, db: Session = Depends(get_db)):
    vendor = vendor_service.get_or_404(db, vendor_id)
    return data_response(VendorResponse.model_validate(vendor))


@router.put("/{vendor_id}")
def update_vendor(
    vendor_id: int,
    payload: VendorUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    vendor = vendor_service.get_owned(db, vendor_id, current_user)
    vendor = vendor_service.update_vendor(db, vendor, payload, current_user)
    return data_response(VendorResponse.model_validate(vendor), "Vendor updated successfully")


@router.patch("/{vendor_id}/status")
def update_vendor_status(
    vendor_id: int,
    payload: VendorStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    vendor = vendor_service.get_or_404(db, vendor_id)
    vendor = vendor_service.set_status(db, vendor, payload.status)
    return data_response(VendorResponse.model_validate(vendor), f"Vendor status set to {payload.status.value}")


@router.delete("/{vendor_id}")
def delete_vendor(
    vendor_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    vendor = vendor_service.get_owned(db, vendor_id, current_user)
    vendor_service.delete(db, vendor)
    return empty_response()
