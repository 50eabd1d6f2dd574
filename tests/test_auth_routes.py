"""API tests for signup, signin and token handling."""

from datetime import timedelta

from sitebuilder.config import AUTH_COOKIE_NAME
from sitebuilder.utils.dependencies import create_access_token
from tests.conftest import PASSWORD, auth, make_user


async def test_signup_and_me(client):
    response = await client.post(
        "/auth/signup",
        json={"name": "Jane Guest", "email": "Jane@Acme.io", "password": "secret123"},
    )
    body = response.json()
    assert response.status_code == 201
    assert body["status"] == "success"
    assert body["data"]["user"]["email"] == "jane@acme.io"
    assert body["data"]["user"]["role"] == "customer"
    assert AUTH_COOKIE_NAME in response.headers["set-cookie"]

    token = body["data"]["access_token"]
    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["email"] == "jane@acme.io"


async def test_signup_rejects_duplicates_and_elevated_roles(client, customer):
    duplicate = await client.post(
        "/auth/signup",
        json={"name": "Again", "email": "customer@acme.io", "password": "secret123"},
    )
    assert duplicate.status_code == 409

    admin = await client.post(
        "/auth/signup",
        json={"name": "Sneaky", "email": "sneaky@acme.io", "password": "secret123", "role": "admin"},
    )
    assert admin.status_code == 400
    assert admin.json()["details"]["errors"][0]["field"] == "role"


async def test_signin(client, customer):
    ok = await client.post("/auth/signin", json={"email": "customer@acme.io", "password": PASSWORD})
    assert ok.status_code == 200
    assert ok.json()["data"]["user"]["id"] == customer.id

    wrong = await client.post("/auth/signin", json={"email": "customer@acme.io", "password": "nope"})
    assert wrong.status_code == 401
    assert wrong.json()["code"] == "INVALID_CREDENTIALS"


async def test_token_from_cookie(client, customer):
    token = create_access_token(customer)
    response = await client.get("/auth/me", headers={"Cookie": f"{AUTH_COOKIE_NAME}={token}"})
    assert response.status_code == 200
    assert response.json()["data"]["id"] == customer.id


async def test_token_errors(client, db, customer):
    missing = await client.get("/auth/me")
    assert missing.status_code == 401
    assert missing.json()["code"] == "NO_TOKEN"

    invalid = await client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert invalid.json()["code"] == "INVALID_TOKEN"

    expired_token = create_access_token(customer, expires_delta=timedelta(minutes=-5))
    expired = await client.get("/auth/me", headers={"Authorization": f"Bearer {expired_token}"})
    assert expired.status_code == 401
    assert expired.json()["code"] == "TOKEN_EXPIRED"

    inactive = make_user(db, "inactive@acme.io", is_active=False)
    blocked = await client.get("/auth/me", headers=auth(inactive))
    assert blocked.status_code == 403
    assert blocked.json()["code"] == "ACCOUNT_INACTIVE"


async def test_update_profile(client, customer):
    response = await client.patch("/auth/me", json={"name": "Jane Q. Guest"}, headers=auth(customer))
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Jane Q. Guest"


async def test_signout_clears_cookie(client):
    response = await client.post("/auth/signout")
    assert response.status_code == 200
    assert AUTH_COOKIE_NAME in response.headers["set-cookie"]
