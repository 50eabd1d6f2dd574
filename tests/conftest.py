import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["EMAIL_SUPPRESS_SEND"] = "true"
os.environ["DEBUG"] = "false"

from datetime import datetime, timedelta, timezone

import httpx
import pytest
from httpx import ASGITransport

from sitebuilder.database.init import Base, SessionLocal, engine
from sitebuilder.database.models import Hotel, User, Vendor, Website
from sitebuilder.enums.user_role import UserRole
from sitebuilder.enums.vendor_status import VendorStatus
from sitebuilder.enums.website_status import WebsiteStatus
from sitebuilder.utils.dependencies import create_access_token, hash_password

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
async def client():
    from sitebuilder.main import app

    async with httpx.AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


def make_user(db, email, role=UserRole.CUSTOMER, name="Test User", is_active=True):
    user = User(
        name=name,
        email=email,
        role=role.value,
        hashed_password=hash_password(PASSWORD),
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


def make_website(db, owner, slug, type="hotel", status=WebsiteStatus.ACTIVE, **kwargs):
    website = Website(
        name=slug.replace("-", " ").title(),
        slug=slug,
        subdomain=slug,
        type=type,
        owner_id=owner.id,
        status=status.value,
        settings={"title": slug, "theme": {"primaryColor": "#000000"}},
        **kwargs,
    )
    db.add(website)
    db.commit()
    db.refresh(website)
    return website


def make_vendor(db, owner, website=None, category="hotel", slug=None):
    vendor = Vendor(
        owner_id=owner.id,
        website_id=website.id if website else None,
        name="Acme Hospitality",
        slug=slug or f"vendor-{owner.id}",
        category=category,
        status=VendorStatus.ACTIVE.value,
    )
    db.add(vendor)
    db.commit()
    db.refresh(vendor)
    return vendor


def make_hotel(db, vendor, name="Acme Grand"):
    hotel = Hotel(vendor_id=vendor.id, name=name, city="Goa", star_rating=4)
    db.add(hotel)
    db.commit()
    db.refresh(hotel)
    return hotel


def hotel_booking_payload(vendor_id, hotel_id, days_ahead=10, **overrides):
    check_in = datetime.now(timezone.utc) + timedelta(days=days_ahead)
    payload = {
        "vendor_id": vendor_id,
        "category": "hotel",
        "hotel_id": hotel_id,
        "room_name": "Sea View Deluxe",
        "room_type": "deluxe",
        "check_in": check_in.isoformat(),
        "check_out": (check_in + timedelta(days=2)).isoformat(),
        "guests": 2,
        "guest": {"name": "Jane Guest", "email": "jane@acme.io", "phone": "+919876543210"},
        "base_price": 5000,
        "taxes": 900,
        "service_charges": 100,
        "discount_amount": 500,
        "payment_method": "card",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def customer(db):
    return make_user(db, "customer@acme.io", name="Jane Guest")


@pytest.fixture
def owner(db):
    return make_user(db, "owner@acme.io", role=UserRole.VENDOR, name="Olivia Owner")


@pytest.fixture
def admin(db):
    return make_user(db, "admin@acme.io", role=UserRole.ADMIN, name="Ada Admin")


@pytest.fixture
def acme(db, owner):
    """An active hotel website with one vendor and one hotel."""
    website = make_website(db, owner, "acme-hotel")
    vendor = make_vendor(db, owner, website)
    hotel = make_hotel(db, vendor)
    return {"website": website, "vendor": vendor, "hotel": hotel}
