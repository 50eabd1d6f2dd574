from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sitebuilder.database.init import Base
from sitebuilder.enums.website_status import WebsiteStatus


class Website(Base):
    """A vendor's storefront; the unit of tenancy."""

    __tablename__ = "websites"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(50), unique=True, index=True, nullable=False)
    description = Column(String(500), nullable=True)
    type = Column(String(20), nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), default=WebsiteStatus.DRAFT.value, nullable=False, index=True)

    custom_domain = Column(String(255), nullable=True, index=True)
    custom_domain_verified = Column(Boolean, default=False)
    subdomain = Column(String(50), nullable=True, index=True)

    settings = Column(JSON, nullable=False, default=dict)

    views = Column(Integer, default=0, nullable=False)
    unique_visitors = Column(Integer, default=0, nullable=False)
    last_visit_at = Column(DateTime(timezone=True), nullable=True)
    total_bookings = Column(Integer, default=0, nullable=False)

    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    owner = relationship("User", back_populates="websites")
    vendors = relationship("Vendor", back_populates="website")

    @property
    def is_active(self) -> bool:
        return self.status == WebsiteStatus.ACTIVE.value
