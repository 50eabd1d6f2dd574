from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sitebuilder.database.init import get_db
from sitebuilder.enums.business_category import BusinessCategory
from sitebuilder.enums.vendor_status import VendorStatus
from sitebuilder.responses.success import data_response, paginated_response
from sitebuilder.schemas.auth_schema import UserMinimumResponse
from sitebuilder.schemas.hotel_schema import HotelResponse
from sitebuilder.schemas.tenant_schema import TenantResponse
from sitebuilder.schemas.vendor_schema import VendorResponse
from sitebuilder.schemas.website_schema import WebsiteSettingsUpdate
from sitebuilder.services.hotel_service import HotelService
from sitebuilder.services.tenant_service import TenantContext
from sitebuilder.services.vendor_service import VendorService
from sitebuilder.services.website_service import WebsiteService
from sitebuilder.utils.pagination import Pagination, pagination_params
from sitebuilder.utils.tenancy import require_tenant, require_tenant_owner, require_tenant_type
from .website_routes import to_response

router = APIRouter(prefix="/site", tags=["Site"])
website_service = WebsiteService()
vendor_service = VendorService()
hotel_service = HotelService()


def tenant_payload(tenant: TenantContext) -> TenantResponse:
    return TenantResponse(
        slug=tenant.slug,
        type=tenant.type,
        owner=UserMinimumResponse.model_validate(tenant.website.owner) if tenant.website.owner else None,
        settings=tenant.settings,
        is_active=tenant.is_active,
        website=to_response(tenant.website),
    )


@router.get("")
def get_current_site(tenant: TenantContext = Depends(require_tenant)):
    """Site resolved from the Host subdomain, custom domain or tenant header."""
    return data_response(tenant_payload(tenant))


@router.get("/{slug}")
def get_site(tenant: TenantContext = Depends(require_tenant)):
    return data_response(tenant_payload(tenant))


@router.get("/{slug}/vendors")
def list_site_vendors(
    tenant: TenantContext = Depends(require_tenant),
    pagination: Pagination = Depends(pagination_params),
    db: Session = Depends(get_db),
):
    vendors, total = vendor_service.list_vendors(
        db,
        skip=pagination.skip,
        limit=pagination.limit,
        status=VendorStatus.ACTIVE.value,
        website_id=tenant.website.id,
    )
    return paginated_response(
        [VendorResponse.model_validate(v) for v in vendors],
        pagination.page,
        pagination.limit,
        total,
        key="vendors",
    )


@router.get("/{slug}/hotels")
def list_site_hotels(
    tenant: TenantContext = Depends(require_tenant_type(BusinessCategory.HOTEL)),
    pagination: Pagination = Depends(pagination_params),
    db: Session = Depends(get_db),
):
    hotels, total = hotel_service.list_hotels(
        db, skip=pagination.skip, limit=pagination.limit, website_id=tenant.website.id
    )
    return paginated_response(
        [HotelResponse.model_validate(h) for h in hotels],
        pagination.page,
        pagination.limit,
        total,
        key="hotels",
    )


@router.patch("/{slug}/settings")
def update_site_settings(
    payload: WebsiteSettingsUpdate,
    tenant: TenantContext = Depends(require_tenant_owner),
    db: Session = Depends(get_db),
):
    website = website_service.update_settings(db, tenant.website, payload.settings)
    return data_response(to_response(website), "Settings updated successfully")
