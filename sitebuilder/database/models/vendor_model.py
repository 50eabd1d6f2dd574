from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sitebuilder.database.init import Base
from sitebuilder.enums.vendor_status import VendorStatus


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    website_id = Column(Integer, ForeignKey("websites.id"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(120), unique=True, index=True, nullable=False)
    category = Column(String(20), nullable=False, index=True)
    status = Column(String(20), default=VendorStatus.PENDING.value, nullable=False, index=True)
    description = Column(String(2000), nullable=True)
    email = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    city = Column(String(100), nullable=True, index=True)

    rating = Column(Float, default=0.0, nullable=False)
    review_count = Column(Integer, default=0, nullable=False)
    total_bookings = Column(Integer, default=0, nullable=False)

    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    owner = relationship("User", back_populates="vendor")
    website = relationship("Website", back_populates="vendors")
    hotels = relationship("Hotel", back_populates="vendor")
    bookings = relationship("Booking", back_populates="vendor")
