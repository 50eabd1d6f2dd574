"""
Ownership checks shared by every mutating endpoint.

A resource is accessible to a user when one of the supplied accessor
functions returns that user's id, or when the user holds an elevated role.
"""

from typing import Any, Callable, Iterable, Optional

from sitebuilder.database.models.user_model import User
from sitebuilder.enums.user_role import ELEVATED_ROLES, UserRole
from sitebuilder.exceptions.custom import PermissionDenied

OwnerAccessor = Callable[[Any], Optional[int]]


def has_role(user: Optional[User], *roles: UserRole) -> bool:
    return user is not None and user.role in {role.value for role in roles}


def is_elevated(user: Optional[User], elevated_roles: Iterable[UserRole] = ELEVATED_ROLES) -> bool:
    return has_role(user, *elevated_roles)


def owns(user: Optional[User], resource: Any, accessor: OwnerAccessor) -> bool:
    if user is None or resource is None:
        return False
    owner_id = accessor(resource)
    return owner_id is not None and owner_id == user.id


def can_access(
    user: Optional[User],
    resource: Any,
    *accessors: OwnerAccessor,
    elevated_roles: Iterable[UserRole] = ELEVATED_ROLES,
) -> bool:
    if is_elevated(user, elevated_roles):
        return True
    return any(owns(user, resource, accessor) for accessor in accessors)


def ensure_access(
    user: Optional[User],
    resource: Any,
    *accessors: OwnerAccessor,
    elevated_roles: Iterable[UserRole] = ELEVATED_ROLES,
    message: str = "Access denied",
) -> None:
    if not can_access(user, resource, *accessors, elevated_roles=elevated_roles):
        raise PermissionDenied(message)


# Accessors for the resources in this app
def website_owner(website) -> Optional[int]:
    return website.owner_id


def vendor_owner(vendor) -> Optional[int]:
    return vendor.owner_id


def booking_customer(booking) -> Optional[int]:
    return booking.user_id


def booking_vendor_owner(booking) -> Optional[int]:
    return booking.vendor.owner_id if booking.vendor else None
