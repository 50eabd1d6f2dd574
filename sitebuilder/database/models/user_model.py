from sitebuilder.database.init import Base
from sitebuilder.enums.user_role import UserRole

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    phone = Column(String(20), nullable=True)
    hashed_password = Column(String(100), nullable=False)
    role = Column(String(20), default=UserRole.CUSTOMER.value, nullable=False, index=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    websites = relationship("Website", back_populates="owner", cascade="all, delete-orphan")
    vendor = relationship("Vendor", back_populates="owner", uselist=False)
    bookings = relationship(
        "Booking", back_populates="user", foreign_keys="Booking.user_id"
    )
