from enum import Enum


class BusinessCategory(str, Enum):
    """Verticals a website or vendor can belong to"""

    HOTEL = "hotel"
    ECOMMERCE = "ecommerce"
    WEDDING = "wedding"
    AUTOMOBILE = "automobile"
    BUSINESS = "business"

    def __str__(self):
        return self.value


# Categories that take bookings
BOOKABLE_CATEGORIES = (
    BusinessCategory.HOTEL,
    BusinessCategory.WEDDING,
    BusinessCategory.BUSINESS,
)
