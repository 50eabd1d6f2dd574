from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from sitebuilder.database.init import get_db
from sitebuilder.database.models.user_model import User
from sitebuilder.enums.business_category import BusinessCategory
from sitebuilder.exceptions.custom import DomainRuleError, NotFoundError
from sitebuilder.services import tenant_service
from sitebuilder.services.tenant_service import TenantContext
from sitebuilder.utils.dependencies import get_current_user
from sitebuilder.utils.permissions import ensure_access, website_owner


def resolve_tenant(request: Request, db: Session = Depends(get_db)) -> Optional[TenantContext]:
    tenant = tenant_service.resolve(request, db)
    request.state.tenant = tenant
    return tenant


def require_tenant(tenant: Optional[TenantContext] = Depends(resolve_tenant)) -> TenantContext:
    if tenant is None or not tenant.is_active:
        raise NotFoundError("Website not found or inactive.", code="TENANT_NOT_FOUND")
    return tenant


def require_tenant_type(*types: BusinessCategory):
    """Dependency factory: the resolved tenant must be one of `types`."""
    allowed = {t.value for t in types}

    def checker(tenant: TenantContext = Depends(require_tenant)) -> TenantContext:
        if tenant.type not in allowed:
            raise DomainRuleError(
                f"This endpoint is only available for {', '.join(sorted(allowed))} websites",
                code="INVALID_TENANT_TYPE",
            )
        return tenant

    return checker


def require_tenant_owner(
    current_user: User = Depends(get_current_user),
    tenant: TenantContext = Depends(require_tenant),
) -> TenantContext:
    ensure_access(
        current_user,
        tenant.website,
        website_owner,
        message="Only the website owner can perform this action",
    )
    return tenant
