from __future__ import annotations

import uuid

import pytest

from app.tests.utils import create_profile, create_record


@pytest.mark.asyncio
async def test_records_require_profile(client):
    response = await client.get("/api/records")
    assert response.status_code == 404
    response = await client.post("/api/records", json={"type": "food", "title": "Bibimbap"})
    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [0, 6])
async def test_rating_out_of_range_is_rejected(client, rating):
    await create_profile(client)

    response = await client.post("/api/records", json={"type": "food", "title": "Soup", "rating": rating})
    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"

    listing = (await client.get("/api/records")).json()
    assert listing["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_create_and_fetch_record(client):
    await create_profile(client)
    created = await create_record(
        client,
        description="Stone bowl",
        tags=["#korean", "rice", "rice"],
        location="Jongno",
        date="2024-01-15",
        metadata={"price": 12000},
    )

    assert created["tags"] == ["#korean", "rice"]
    assert created["date"] == "2024-01-15"

    response = await client.get(f"/api/records/{created['id']}")
    assert response.status_code == 200
    record = response.json()
    assert record["title"] == "Bibimbap"
    assert record["metadata"] == {"price": 12000}


@pytest.mark.asyncio
async def test_missing_record_returns_404(client):
    await create_profile(client)
    response = await client.get(f"/api/records/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"error": "Record not found"}


@pytest.mark.asyncio
async def test_list_records_filters_and_paginates(client):
    await create_profile(client)
    await create_record(client, title="Older", date="2024-01-01")
    await create_record(client, title="Newer", date="2024-02-01")
    await create_record(client, type="exercise", title="Run", date="2024-03-01")

    food = (await client.get("/api/records", params={"type": "food"})).json()
    assert [record["title"] for record in food["records"]] == ["Newer", "Older"]
    assert food["pagination"] == {"total": 2, "limit": 20, "offset": 0}

    page = (await client.get("/api/records", params={"limit": 1, "offset": 1})).json()
    assert [record["title"] for record in page["records"]] == ["Newer"]
    assert page["pagination"]["total"] == 3


@pytest.mark.asyncio
async def test_update_record_replaces_tags_and_keeps_other_fields(client):
    await create_profile(client)
    created = await create_record(client, tags=["a", "b"], description="first")

    response = await client.patch(f"/api/records/{created['id']}", json={"tags": ["c"], "rating": 3})
    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["tags"] == ["c"]
    assert updated["rating"] == 3
    assert updated["description"] == "first"


@pytest.mark.asyncio
async def test_delete_record(client):
    await create_profile(client)
    created = await create_record(client)

    response = await client.delete(f"/api/records/{created['id']}")
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert (await client.get(f"/api/records/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_stats_summary(client):
    await create_profile(client)
    await create_record(client, title="One", rating=5, tags=["a", "b"])
    await create_record(client, type="travel", title="Two", rating=4, tags=["a", "b", "c"])
    await create_record(client, type="exercise", title="Three", rating=None, tags=["b", "a"])

    response = await client.get("/api/records/stats/summary")
    assert response.status_code == 200
    stats = response.json()
    assert stats["totalRecords"] == 3
    assert stats["byType"] == {"food": 1, "travel": 1, "exercise": 1, "other": 0}
    assert stats["averageRating"] == 4.5
    assert stats["topTags"] == [
        {"tag": "a", "count": 3},
        {"tag": "b", "count": 3},
        {"tag": "c", "count": 1},
    ]


@pytest.mark.asyncio
async def test_stats_with_no_records(client):
    await create_profile(client)
    stats = (await client.get("/api/records/stats/summary")).json()
    assert stats["totalRecords"] == 0
    assert stats["averageRating"] == 0
    assert stats["topTags"] == []


@pytest.mark.asyncio
async def test_whitespace_only_title_is_rejected(client):
    await create_profile(client)
    response = await client.post("/api/records", json={"type": "food", "title": "   "})
    assert response.status_code == 422

    created = await create_record(client)
    response = await client.patch(f"/api/records/{created['id']}", json={"title": "  "})
    assert response.status_code == 422
    assert (await client.get(f"/api/records/{created['id']}")).json()["title"] == "Bibimbap"


@pytest.mark.asyncio
async def test_overlong_tag_is_rejected(client):
    await create_profile(client)
    response = await client.post("/api/records", json={"type": "food", "title": "Soup", "tags": ["x" * 65]})
    assert response.status_code == 422
    assert (await client.get("/api/records")).json()["pagination"]["total"] == 0
