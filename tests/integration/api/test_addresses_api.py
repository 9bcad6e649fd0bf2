"""Integration tests for the addresses endpoints."""

import pytest
from httpx import AsyncClient

from deliverybase.domain.entities import Coordinates

ADDRESS_PAYLOAD = {"address": "Av. 6 de Diciembre N24-253", "city": "Quito", "country": "Ecuador"}


@pytest.mark.asyncio
async def test_create_address(client: AsyncClient, customer, auth_headers):
    res = await client.post(
        "/api/v1/addresses", json=ADDRESS_PAYLOAD, headers=auth_headers(customer)
    )

    assert res.status_code == 201
    data = res.json()
    assert data["city"] == "Quito"
    assert "longitude" not in data


@pytest.mark.asyncio
async def test_create_address_for_another_user(
    client: AsyncClient, admin_user, customer, auth_headers
):
    headers = auth_headers(admin_user)

    res = await client.post(
        "/api/v1/addresses",
        json={**ADDRESS_PAYLOAD, "user_id": customer.id},
        headers=headers,
    )
    assert res.status_code == 201

    res = await client.get(f"/api/v1/addresses/user/{customer.id}", headers=headers)
    assert [address["address"] for address in res.json()] == [ADDRESS_PAYLOAD["address"]]

    res = await client.get(f"/api/v1/addresses/user/{admin_user.id}", headers=headers)
    assert res.json() == []


@pytest.mark.asyncio
async def test_create_address_for_unknown_user(client: AsyncClient, admin_user, auth_headers):
    res = await client.post(
        "/api/v1/addresses",
        json={**ADDRESS_PAYLOAD, "user_id": 9999},
        headers=auth_headers(admin_user),
    )

    assert res.status_code == 404


@pytest.mark.asyncio
async def test_address_limit(client: AsyncClient, customer, make_address, auth_headers):
    for _ in range(3):
        await make_address(customer)

    res = await client.post(
        "/api/v1/addresses", json=ADDRESS_PAYLOAD, headers=auth_headers(customer)
    )

    assert res.status_code == 409
    assert res.json()["error"] == "conflict"


@pytest.mark.asyncio
async def test_edit_and_delete_address(client: AsyncClient, customer, make_address, auth_headers):
    address = await make_address(customer)
    headers = auth_headers(customer)

    res = await client.put(
        f"/api/v1/addresses/{address.id}",
        json={**ADDRESS_PAYLOAD, "city": "Cuenca"},
        headers=headers,
    )
    assert res.status_code == 200
    assert res.json()["city"] == "Cuenca"

    res = await client.delete(f"/api/v1/addresses/{address.id}", headers=headers)
    assert res.status_code == 200

    res = await client.get(f"/api/v1/addresses/{address.id}", headers=headers)
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_addresses_for_user(client: AsyncClient, customer, make_address, auth_headers):
    await make_address(customer)
    await make_address(customer)

    res = await client.get(f"/api/v1/addresses/user/{customer.id}", headers=auth_headers(customer))

    assert res.status_code == 200
    assert len(res.json()) == 2


@pytest.mark.asyncio
async def test_delivery_addresses_include_coordinates(
    client: AsyncClient, admin_user, courier, make_address, auth_headers
):
    await make_address(admin_user, coordinates=Coordinates(-78.4912, -0.1865), delivery=True)
    await make_address(courier)

    res = await client.get("/api/v1/addresses/delivery", headers=auth_headers(courier))

    assert res.status_code == 200
    data = res.json()
    assert len(data) == 1
    assert data[0]["longitude"] == -78.4912
    assert data[0]["latitude"] == -0.1865


@pytest.mark.asyncio
async def test_delivery_addresses_require_permission(
    client: AsyncClient, customer, auth_headers
):
    res = await client.get("/api/v1/addresses/delivery", headers=auth_headers(customer))

    assert res.status_code == 409
