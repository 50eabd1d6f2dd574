from enum import Enum


class UserRole(str, Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    def __str__(self):
        return self.value


ELEVATED_ROLES = (UserRole.ADMIN, UserRole.SUPER_ADMIN)
