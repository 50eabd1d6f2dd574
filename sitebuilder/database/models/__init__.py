from .user_model import User
from .website_model import Website
from .vendor_model import Vendor
from .hotel_model import Hotel
from .booking_model import Booking

__all__ = ["User", "Website", "Vendor", "Hotel", "Booking"]
