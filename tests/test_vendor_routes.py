"""API tests for vendors and hotels."""

from sitebuilder.database.models import Vendor
from sitebuilder.enums.user_role import UserRole
from tests.conftest import auth, make_user, make_website


async def test_create_vendor(client, db, owner):
    website = make_website(db, owner, "acme-hotel")
    response = await client.post(
        "/vendors",
        json={"name": "Acme Hospitality", "category": "hotel", "website_id": website.id},
        headers=auth(owner),
    )
    data = response.json()["data"]

    assert response.status_code == 201
    assert data["slug"] == "acme-hospitality"
    assert data["status"] == "pending"
    assert data["owner_id"] == owner.id
    assert data["website_id"] == website.id

    again = await client.post(
        "/vendors", json={"name": "Second", "category": "hotel"}, headers=auth(owner)
    )
    assert again.status_code == 409
    assert again.json()["code"] == "VENDOR_EXISTS"


async def test_customers_cannot_create_vendors(client, customer):
    response = await client.post(
        "/vendors", json={"name": "Jane Co", "category": "business"}, headers=auth(customer)
    )
    assert response.status_code == 403
    assert response.json()["code"] == "INSUFFICIENT_ROLE"


async def test_vendor_cannot_link_foreign_website(client, db, owner):
    stranger = make_user(db, "stranger@acme.io")
    foreign = make_website(db, stranger, "stranger-site")

    response = await client.post(
        "/vendors",
        json={"name": "Acme Hospitality", "category": "hotel", "website_id": foreign.id},
        headers=auth(owner),
    )
    assert response.status_code == 403


async def test_soft_delete_hides_vendor(client, db, owner, admin, acme):
    vendor_id = acme["vendor"].id
    path = f"/vendors/{vendor_id}"

    assert (await client.delete(path, headers=auth(owner))).status_code == 204

    assert (await client.get(path)).status_code == 404
    assert (await client.get("/vendors")).json()["data"]["pagination"]["total"] == 0

    # Row is retained
    db.expire_all()
    assert db.query(Vendor).filter(Vendor.id == vendor_id).one().is_deleted is True

    with_deleted = await client.get("/vendors", params={"include_deleted": True}, headers=auth(admin))
    assert with_deleted.json()["data"]["pagination"]["total"] == 1

    anonymous = await client.get("/vendors", params={"include_deleted": True})
    assert anonymous.json()["data"]["pagination"]["total"] == 0


async def test_vendor_update_and_status(client, db, owner, admin, acme):
    path = f"/vendors/{acme['vendor'].id}"
    other = make_user(db, "other@acme.io", role=UserRole.VENDOR)

    assert (await client.put(path, json={"city": "Pune"}, headers=auth(other))).status_code == 403

    updated = await client.put(path, json={"city": "Pune"}, headers=auth(owner))
    assert updated.json()["data"]["city"] == "Pune"

    denied = await client.patch(f"{path}/status", json={"status": "suspended"}, headers=auth(owner))
    assert denied.status_code == 403

    suspended = await client.patch(f"{path}/status", json={"status": "suspended"}, headers=auth(admin))
    assert suspended.json()["data"]["status"] == "suspended"


async def test_vendor_update_rejects_null_name(client, owner, acme):
    path = f"/vendors/{acme['vendor'].id}"

    response = await client.put(path, json={"name": None}, headers=auth(owner))
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert response.json()["details"]["errors"][0]["field"] == "name"

    current = await client.get(path)
    assert current.json()["data"]["name"] == acme["vendor"].name


async def test_my_vendor(client, owner, customer, acme):
    mine = await client.get("/vendors/me", headers=auth(owner))
    assert mine.json()["data"]["id"] == acme["vendor"].id

    none = await client.get("/vendors/me", headers=auth(customer))
    assert none.status_code == 404


async def test_hotels(client, db, owner, customer, acme):
    created = await client.post(
        "/hotels", json={"name": "Acme Beach", "city": "Goa", "star_rating": 5}, headers=auth(owner)
    )
    assert created.status_code == 201
    assert created.json()["data"]["vendor_id"] == acme["vendor"].id

    listed = await client.get("/hotels", params={"vendor_id": acme["vendor"].id})
    assert listed.json()["data"]["pagination"]["total"] == 2

    fetched = await client.get(f"/hotels/{acme['hotel'].id}")
    assert fetched.json()["data"]["name"] == "Acme Grand"

    assert (await client.get("/hotels/999999")).json()["code"] == "HOTEL_NOT_FOUND"
    assert (await client.post("/hotels", json={"name": "Nope"}, headers=auth(customer))).status_code == 403


async def test_hotel_for_foreign_vendor_is_denied(client, db, acme):
    rival = make_user(db, "rival@acme.io", role=UserRole.VENDOR)
    response = await client.post(
        "/hotels", json={"name": "Sneaky Inn", "vendor_id": acme["vendor"].id}, headers=auth(rival)
    )
    assert response.status_code == 403
