"""Tests for the error envelope and the exception handlers."""

import pytest
from fastapi import FastAPI
import httpx
from httpx import ASGITransport

from sitebuilder.exceptions.custom import ConflictError, ValidationFailed
from sitebuilder.exceptions.handlers import register_exception_handlers
from tests.conftest import auth


@pytest.fixture
async def failing_client():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/conflict")
    def conflict():
        raise ConflictError("Slug is taken", code="SLUG_TAKEN", details={"slug": "acme"})

    @app.get("/invalid")
    def invalid():
        raise ValidationFailed([{"field": "a", "message": "bad"}, {"field": "b", "message": "worse"}])

    @app.get("/boom")
    def boom():
        raise RuntimeError("secret database password")

    async with httpx.AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


async def test_app_error_envelope(failing_client):
    response = await failing_client.get("/conflict")
    assert response.status_code == 409
    assert response.json() == {
        "statusCode": 409,
        "status": "error",
        "message": "Slug is taken",
        "code": "SLUG_TAKEN",
        "details": {"slug": "acme"},
    }


async def test_validation_failed_lists_every_error(failing_client):
    body = (await failing_client.get("/invalid")).json()
    assert body["code"] == "VALIDATION_ERROR"
    assert [e["field"] for e in body["details"]["errors"]] == ["a", "b"]


async def test_unexpected_errors_hide_details(failing_client):
    response = await failing_client.get("/boom")
    body = response.json()
    assert response.status_code == 500
    assert body["code"] == "INTERNAL_ERROR"
    assert "secret" not in response.text
    assert "details" not in body


async def test_request_validation_is_aggregated(client, customer):
    response = await client.post(
        "/bookings",
        json={"vendor_id": "abc", "category": "spaceship", "guest": {"email": "nope"}},
        headers=auth(customer),
    )
    body = response.json()
    fields = {error["field"] for error in body["details"]["errors"]}

    assert response.status_code == 400
    assert body["status"] == "error"
    assert body["statusCode"] == 400
    assert {"vendor_id", "category", "guest.email", "guest.name", "base_price"} <= fields


async def test_unknown_route(client):
    response = await client.get("/nowhere")
    assert response.status_code == 404
    assert response.json()["code"] == "ROUTE_NOT_FOUND"


async def test_success_envelope(client, customer):
    body = (await client.get("/auth/me", headers=auth(customer))).json()
    assert body["status"] == "success"
    assert body["statusCode"] == 200
    assert "message" in body
    assert body["data"]["id"] == customer.id
