import pytest

from poi_api.db.models import AddressRecord, OpeningHoursRecord, PoiRecord
from poi_api.repositories.poi import PoiRepository
from poi_api.api.deps import get_poi_repository
from poi_api.main import app

BASE = "/v1/pois"


async def create(client, payload):
    resp = await client.post(f"{BASE}/", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_root_banner(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "POI API is running"}


async def test_health(client):
    resp = await client.get("/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"db_ok": True}


async def test_crud_poi(client, poi_payload, address_payload, opening_hours_payload):
    # CREATE: scalar fields only
    data = await create(client, poi_payload)
    poi_id = data["id"]
    assert set(data) == {"id", "name", "status", "createdAt", "updatedAt"}
    assert data["status"] == "ONLINE"

    # GET: fully hydrated
    resp = await client.get(f"{BASE}/{poi_id}")
    assert resp.status_code == 200
    poi = resp.json()
    assert poi["name"] == poi_payload["name"]
    assert {k: poi["address"][k] for k in address_payload} == address_payload
    assert [
        {k: h[k] for k in ("dayOfWeek", "openTime", "closeTime", "isClosed")}
        for h in poi["openingHours"]
    ] == opening_hours_payload
    assert poi["pumps"] == []

    # UPDATE
    resp = await client.put(f"{BASE}/{poi_id}", json={"name": "Aral Nord"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Aral Nord"
    assert resp.json()["address"] == poi["address"]

    # STATUS
    resp = await client.patch(f"{BASE}/{poi_id}/status", json={"status": "MAINTENANCE"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "MAINTENANCE"

    # DELETE
    resp = await client.delete(f"{BASE}/{poi_id}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "POI deleted successfully"}

    # GET after delete
    resp = await client.get(f"{BASE}/{poi_id}")
    assert resp.status_code == 404
    assert resp.json() == {"error": f"POI with ID {poi_id} not found"}


async def test_create_validation_error(client, count_rows):
    resp = await client.post(f"{BASE}/", json={"name": "Esso", "status": "CLOSED"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Validation failed"
    assert body["details"] == [
        {"field": "status", "message": "Status must be one of: ONLINE, OFFLINE, MAINTENANCE"}
    ]
    assert await count_rows(PoiRecord) == 0


async def test_create_without_body(client):
    resp = await client.post(f"{BASE}/")
    assert resp.status_code == 400


async def test_malformed_json(client):
    resp = await client.post(
        f"{BASE}/", content=b"{not json", headers={"content-type": "application/json"}
    )
    assert resp.status_code == 400


async def test_create_persistence_failure_is_generic(client, session_factory, poi_payload, count_rows):
    class BrokenAddressRepository(PoiRepository):
        def _build_address(self, poi_id, address):
            record = super()._build_address(poi_id, address)
            record.city = None
            return record

    app.dependency_overrides[get_poi_repository] = lambda: BrokenAddressRepository(session_factory)

    resp = await client.post(f"{BASE}/", json=poi_payload)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to create POI"}
    assert await count_rows(PoiRecord) == 0
    assert await count_rows(OpeningHoursRecord) == 0


@pytest.mark.parametrize(
    "method, path, body",
    [
        ("get", "/missing", None),
        ("put", "/missing", {"name": "x"}),
        ("delete", "/missing", None),
        ("patch", "/missing/status", {"status": "OFFLINE"}),
    ],
)
async def test_missing_poi_is_404(client, method, path, body):
    kwargs = {"json": body} if body is not None else {}
    resp = await client.request(method.upper(), f"{BASE}{path}", **kwargs)
    assert resp.status_code == 404
    assert resp.json() == {"error": "POI with ID missing not found"}


async def test_invalid_update_is_400_and_changes_nothing(client, poi_payload):
    poi_id = (await create(client, poi_payload))["id"]

    resp = await client.put(
        f"{BASE}/{poi_id}",
        json={"name": "Renamed", "openingHours": [{"dayOfWeek": "MONDAY", "openTime": "8:00", "closeTime": "20:00", "isClosed": False}]},
    )

    assert resp.status_code == 400
    assert resp.json()["details"] == [
        {"field": "openingHours.0.openTime", "message": "Open time must be in HH:MM format"}
    ]
    assert (await client.get(f"{BASE}/{poi_id}")).json()["name"] == poi_payload["name"]


async def test_invalid_status_patch(client, poi_payload):
    poi_id = (await create(client, poi_payload))["id"]
    resp = await client.patch(f"{BASE}/{poi_id}/status", json={"status": "BROKEN"})
    assert resp.status_code == 400


async def test_update_address_and_hours(client, address_payload, count_rows):
    poi_id = (await create(client, {"name": "Jet", "status": "OFFLINE"}))["id"]

    new_hours = [{"dayOfWeek": "FRIDAY", "openTime": "06:30", "closeTime": "23:00", "isClosed": False}]
    resp = await client.put(
        f"{BASE}/{poi_id}", json={"address": address_payload, "openingHours": new_hours}
    )

    assert resp.status_code == 200
    poi = resp.json()
    assert poi["status"] == "OFFLINE"
    assert poi["address"]["zipCode"] == "10115"
    assert len(poi["openingHours"]) == 1
    assert poi["openingHours"][0]["dayOfWeek"] == "FRIDAY"

    resp = await client.put(f"{BASE}/{poi_id}", json={"address": dict(address_payload, houseNumber="7")})
    assert resp.json()["address"]["houseNumber"] == "7"
    assert await count_rows(AddressRecord, poi_id=poi_id) == 1


async def test_update_with_empty_hours_keeps_schedule(client, poi_payload):
    poi_id = (await create(client, poi_payload))["id"]

    resp = await client.put(f"{BASE}/{poi_id}", json={"openingHours": []})

    assert resp.status_code == 200
    assert len(resp.json()["openingHours"]) == len(poi_payload["openingHours"])


async def test_list_pagination(client):
    for i in range(25):
        await create(client, {"name": f"Station {i}", "status": "ONLINE"})

    resp = await client.get(f"{BASE}/", params={"limit": 10, "page": 3})
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["data"]) == 5
    assert body["pagination"] == {"page": 3, "limit": 10, "total": 25, "pages": 3}
    assert body["data"][0]["openingHours"] == []
    assert body["data"][0]["address"] is None

    resp = await client.get(f"{BASE}/", params={"page": 100})
    assert resp.status_code == 200
    assert resp.json()["data"] == []
    assert resp.json()["pagination"] == {"page": 100, "limit": 10, "total": 25, "pages": 3}


async def test_list_huge_page_number(client, poi_payload):
    await create(client, poi_payload)

    resp = await client.get(f"{BASE}/", params={"page": "10000000000000000000"})

    assert resp.status_code == 200
    assert resp.json()["data"] == []
    assert resp.json()["pagination"]["total"] == 1


async def test_create_with_null_address_is_400(client, count_rows):
    resp = await client.post(f"{BASE}/", json={"name": "Esso", "status": "ONLINE", "address": None})
    assert resp.status_code == 400
    assert resp.json()["details"] == [{"field": "address", "message": "Field may not be null"}]
    assert await count_rows(PoiRecord) == 0


@pytest.mark.parametrize(
    "query, expected",
    [
        ("", (1, 10)),
        ("?page=abc&limit=xyz", (1, 10)),
        ("?page=0&limit=-5", (1, 10)),
        ("?page=2&limit=3", (2, 3)),
    ],
)
async def test_list_query_defaults(client, query, expected):
    resp = await client.get(f"{BASE}/{query}")
    assert resp.status_code == 200
    pagination = resp.json()["pagination"]
    assert (pagination["page"], pagination["limit"]) == expected
    assert pagination["total"] == 0
    assert pagination["pages"] == 0


async def test_delete_cascades(client, poi_payload, seed_pumps, count_rows):
    poi_id = (await create(client, poi_payload))["id"]
    await seed_pumps(poi_id)
    assert len((await client.get(f"{BASE}/{poi_id}")).json()["pumps"]) == 2

    resp = await client.delete(f"{BASE}/{poi_id}")
    assert resp.status_code == 200

    assert (await client.get(f"{BASE}/{poi_id}")).status_code == 404
    assert await count_rows(AddressRecord) == 0
    assert await count_rows(OpeningHoursRecord) == 0
