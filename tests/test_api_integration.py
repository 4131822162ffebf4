from __future__ import annotations

import uuid
from decimal import Decimal

import pytest


async def _create_city(api_client, name: str = "Tashkent") -> dict:
    response = await api_client.post("/api/cities", json={"name": name})
    assert response.status_code == 200
    return response.json()["data"]


async def _create_client(api_client, city_id: str, name: str = "Ali", **extra) -> dict:
    response = await api_client.post("/api/clients", json={"city_id": city_id, "name": name, **extra})
    assert response.status_code == 200
    return response.json()["data"]


@pytest.mark.asyncio
async def test_ledger_flow_and_summary(api_client) -> None:
    city = await _create_city(api_client)
    client = await _create_client(api_client, city["id"], phone="+998901234567")

    debt = await api_client.post(
        f"/api/clients/{client['id']}/ledger",
        json={"type": "DEBT_ADD", "amount": "120000", "currency": "UZS", "note": "Delivery of flour"},
    )
    payment = await api_client.post(
        f"/api/clients/{client['id']}/ledger",
        json={"type": "PAYMENT", "amount": "4", "currency": "USD", "note": "cash"},
    )
    note = await api_client.post(
        f"/api/clients/{client['id']}/ledger",
        json={"type": "NOTE", "note": "promised the rest on friday"},
    )
    assert debt.status_code == 200
    assert payment.status_code == 200
    assert note.status_code == 200
    assert Decimal(payment.json()["data"]["amount"]) == Decimal("-4")
    assert Decimal(note.json()["data"]["amount"]) == Decimal("0")

    ledger = await api_client.get(f"/api/clients/{client['id']}/ledger")
    assert ledger.status_code == 200
    assert len(ledger.json()["data"]) == 3

    summary = await api_client.get(f"/api/clients/{client['id']}/summary?currency=RUB")
    assert summary.status_code == 200
    body = summary.json()
    assert body["ok"] is True
    data = body["data"]
    assert Decimal(data["balance_usd"]) == Decimal("6")
    assert Decimal(data["balance"]) == Decimal("600")
    assert data["balance_text"] == "600.00 RUB"
    assert data["total_count"] == 3
    assert Decimal(data["totals"]["debts"]) == Decimal("10")
    assert Decimal(data["totals"]["payments"]) == Decimal("-4")

    filtered = await api_client.get(f"/api/clients/{client['id']}/summary?q=DELIV&type=DEBT_ADD")
    filtered_data = filtered.json()["data"]
    assert [entry["note"] for entry in filtered_data["entries"]] == ["Delivery of flour"]
    assert filtered_data["display_currency"] == "USD"


@pytest.mark.asyncio
async def test_update_and_delete_ledger_entry(api_client) -> None:
    city = await _create_city(api_client)
    client = await _create_client(api_client, city["id"])
    created = await api_client.post(
        f"/api/clients/{client['id']}/ledger",
        json={"type": "DEBT_ADD", "amount": "50", "note": "goods"},
    )
    entry_id = created.json()["data"]["id"]

    updated = await api_client.patch(f"/api/ledger/{entry_id}", json={"type": "PAYMENT"})
    assert updated.status_code == 200
    assert updated.json()["data"]["type"] == "PAYMENT"
    assert Decimal(updated.json()["data"]["amount"]) == Decimal("-50")

    deleted = await api_client.delete(f"/api/ledger/{entry_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"ok": True}

    missing = await api_client.delete(f"/api/ledger/{entry_id}")
    assert missing.status_code == 404
    assert missing.json()["error"] == "NotFound"


@pytest.mark.asyncio
async def test_city_lifecycle_and_client_listing(api_client) -> None:
    city = await _create_city(api_client, "Samarkand")
    ali = await _create_client(api_client, city["id"], "Ali")
    await _create_client(api_client, city["id"], "Bobur", phone="+998907776655")

    duplicate = await api_client.post("/api/cities", json={"name": "samarkand"})
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "Conflict"

    renamed = await api_client.patch(f"/api/cities/{city['id']}", json={"name": "Samarqand"})
    assert renamed.json()["data"]["name"] == "Samarqand"

    search = await api_client.get(f"/api/cities/{city['id']}/clients?search=7776")
    assert [row["name"] for row in search.json()["data"]] == ["Bobur"]

    blocked = await api_client.delete(f"/api/cities/{city['id']}")
    assert blocked.status_code == 400
    assert blocked.json()["ok"] is False
    assert blocked.json()["error"] == "CityHasClients"

    archived = await api_client.delete(f"/api/clients/{ali['id']}")
    assert archived.json()["data"]["archived"] is True

    listed = await api_client.get(f"/api/cities/{city['id']}/clients")
    assert [row["name"] for row in listed.json()["data"]] == ["Bobur"]

    cleared = await api_client.patch(f"/api/clients/{ali['id']}", json={"phone": None, "tags": ["vip"]})
    assert cleared.json()["data"]["phone"] is None
    assert cleared.json()["data"]["tags"] == ["vip"]


@pytest.mark.asyncio
async def test_exchange_rate_endpoints(api_client) -> None:
    current = await api_client.get("/api/exchange-rate")
    assert current.status_code == 200
    assert Decimal(current.json()["data"]["usd_to_uzs"]) == Decimal("12000")

    updated = await api_client.put(
        "/api/exchange-rate",
        json={"usd_to_uzs": "12650", "usd_to_rub": "92.5", "updated_by": "owner"},
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["updated_by"] == "owner"

    rejected = await api_client.put("/api/exchange-rate", json={"usd_to_uzs": "0", "usd_to_rub": "92.5"})
    assert rejected.status_code == 400
    assert rejected.json()["error"] == "ValidationError"

    history = await api_client.get("/api/exchange-rate/history")
    rows = history.json()["data"]
    assert len(rows) == 2
    assert Decimal(rows[0]["usd_to_uzs"]) == Decimal("12650")


@pytest.mark.asyncio
async def test_validation_and_not_found_envelopes(api_client) -> None:
    bad_id = await api_client.get("/api/clients/not-a-uuid/ledger")
    assert bad_id.status_code == 400
    assert bad_id.json()["ok"] is False
    assert bad_id.json()["error"] == "ValidationError"
    assert bad_id.json()["details"]

    unknown_client = await api_client.get(f"/api/clients/{uuid.uuid4()}/summary")
    assert unknown_client.status_code == 404
    assert unknown_client.json() == {
        "ok": False,
        "error": "NotFound",
        "message": unknown_client.json()["message"],
    }

    bad_type = await api_client.post(
        f"/api/clients/{uuid.uuid4()}/ledger",
        json={"type": "LOAN", "amount": "1", "note": "x"},
    )
    assert bad_type.status_code == 400

    bad_currency = await api_client.get(f"/api/clients/{uuid.uuid4()}/summary?currency=EUR")
    assert bad_currency.status_code == 400

    unknown_city = await api_client.post("/api/clients", json={"city_id": str(uuid.uuid4()), "name": "Ali"})
    assert unknown_city.status_code == 404


@pytest.mark.asyncio
async def test_blank_client_names_are_rejected(api_client) -> None:
    city = await _create_city(api_client)

    blank = await api_client.post("/api/clients", json={"city_id": city["id"], "name": "   "})
    assert blank.status_code == 400
    assert blank.json()["error"] == "ValidationError"

    client = await _create_client(api_client, city["id"], "  Ali  ")
    assert client["name"] == "Ali"

    renamed = await api_client.patch(f"/api/clients/{client['id']}", json={"name": "  "})
    assert renamed.status_code == 400

    listed = await api_client.get(f"/api/cities/{city['id']}/clients")
    assert [row["name"] for row in listed.json()["data"]] == ["Ali"]


@pytest.mark.asyncio
async def test_amounts_beyond_storage_precision_are_rejected(api_client) -> None:
    city = await _create_city(api_client)
    client = await _create_client(api_client, city["id"])

    too_large = await api_client.post(
        f"/api/clients/{client['id']}/ledger",
        json={"type": "DEBT_ADD", "amount": "99999999999999999", "note": "huge"},
    )
    assert too_large.status_code == 400
    assert too_large.json()["error"] == "ValidationError"

    too_precise = await api_client.put(
        "/api/exchange-rate", json={"usd_to_uzs": "12000.000000001", "usd_to_rub": "100"}
    )
    assert too_precise.status_code == 400

    ledger = await api_client.get(f"/api/clients/{client['id']}/ledger")
    assert ledger.json()["data"] == []


@pytest.mark.asyncio
async def test_deleting_city_keeps_archived_client_ledger(api_client) -> None:
    city = await _create_city(api_client, "Bukhara")
    client = await _create_client(api_client, city["id"])
    await api_client.post(
        f"/api/clients/{client['id']}/ledger",
        json={"type": "DEBT_ADD", "amount": "5", "note": "old debt"},
    )
    await api_client.delete(f"/api/clients/{client['id']}")

    deleted = await api_client.delete(f"/api/cities/{city['id']}")
    assert deleted.status_code == 200
    assert deleted.json() == {"ok": True}

    ledger = await api_client.get(f"/api/clients/{client['id']}/ledger")
    assert ledger.status_code == 200
    assert [entry["note"] for entry in ledger.json()["data"]] == ["old debt"]

    summary = await api_client.get(f"/api/clients/{client['id']}/summary")
    assert Decimal(summary.json()["data"]["balance_usd"]) == Decimal("5")
