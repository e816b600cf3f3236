"""
WorshipDeck Backend - API Integration Tests
============================================

What:  End-to-end HTTP tests through the full middleware and handler stack.
How:   HTTPX AsyncClient over ASGITransport; each test gets a fresh SQLite
       file (see conftest.py).

What we test:
    ✅ POST /songs: 200 with song_id, 409 near-duplicate, 400 missing field,
       500 with the store's message
    ✅ Song list/search/fetch/delete shapes
    ✅ Presentation + slide flow, raw text from /slide/{randomId}
    ✅ Psalm bulk import, range lookups and guarded wipe
    ✅ Health probes and X-Request-ID propagation
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from app.services.song_service import song_service


class TestSongEndpoints:

    @pytest.mark.asyncio
    async def test_create_song(self, test_client, sample_song_payload):
        response = await test_client.post("/songs", json=sample_song_payload)

        assert response.status_code == 200
        assert isinstance(response.json()["song_id"], int)

    @pytest.mark.asyncio
    async def test_near_duplicate_is_409(self, test_client, sample_song_payload):
        await test_client.post("/songs", json=sample_song_payload)

        response = await test_client.post(
            "/songs", json={**sample_song_payload, "song_name": "Amazing Grase"}
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "conflict"
        assert body["message"] == "A similar song already exists"
        assert body["details"]["similar_to"] == "Amazing Grace"

        listing = await test_client.get("/songs")
        assert len(listing.json()) == 1

    @pytest.mark.asyncio
    async def test_dissimilar_song_is_accepted(self, test_client, sample_song_payload):
        await test_client.post("/songs", json=sample_song_payload)

        response = await test_client.post(
            "/songs", json={**sample_song_payload, "song_name": "How Great Thou Art"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_missing_field_is_400(self, test_client, sample_song_payload):
        payload = dict(sample_song_payload)
        del payload["stanzas"]

        response = await test_client.post("/songs", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Missing required fields"
        assert body["details"]["fields"] == ["stanzas"]

    @pytest.mark.asyncio
    async def test_storage_failure_is_500_with_cause(self, test_client, sample_song_payload):
        failure = OperationalError("SELECT", {}, Exception("database is locked"))
        with patch.object(song_service, "list_all_names", AsyncMock(side_effect=failure)):
            response = await test_client.post("/songs", json=sample_song_payload)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "database_error"
        assert body["message"] == "database is locked"

    @pytest.mark.asyncio
    async def test_list_search_and_fetch(self, test_client, sample_song_payload):
        created = await test_client.post("/songs", json=sample_song_payload)
        song_id = created.json()["song_id"]

        listing = await test_client.get("/songs")
        assert listing.json() == [{"song_id": song_id, "song_name": "Amazing Grace"}]

        search = await test_client.get("/songs", params={"name": "grace"})
        assert search.json()[0]["stanzas"] == sample_song_payload["stanzas"]

        fetched = await test_client.get(f"/songs/{song_id}")
        assert fetched.json()["main_stanza"] == sample_song_payload["main_stanza"]

    @pytest.mark.asyncio
    async def test_update_and_delete(self, test_client, sample_song_payload):
        created = await test_client.post("/songs", json=sample_song_payload)
        song_id = created.json()["song_id"]

        updated = await test_client.put(
            f"/songs/{song_id}", json={**sample_song_payload, "song_name": "Amazing Grace (Chris Tomlin)"}
        )
        assert updated.json() == {"message": "Song updated"}

        deleted = await test_client.delete(f"/songs/{song_id}")
        assert deleted.json() == {"message": "Song deleted successfully."}

        missing = await test_client.get(f"/songs/{song_id}")
        assert missing.status_code == 404
        assert missing.json()["message"] == "Song not found"

    @pytest.mark.asyncio
    async def test_delete_by_name(self, test_client, sample_song_payload):
        await test_client.post("/songs", json=sample_song_payload)

        response = await test_client.delete("/songs/by-name/AMAZING GRACE")
        assert response.status_code == 200

        again = await test_client.delete("/songs/by-name/AMAZING GRACE")
        assert again.status_code == 404


class TestPresentationEndpoints:

    @pytest.mark.asyncio
    async def test_slide_lifecycle(self, test_client):
        init = await test_client.post(
            "/presentations",
            json={"presentationName": "Sunday", "createdDateTime": "2024-01-14T09:00:00Z"},
        )
        assert init.status_code == 201

        for random_id in ("s1", "s2"):
            added = await test_client.post(
                "/presentations/slide",
                json={
                    "presentationName": "Sunday",
                    "randomId": random_id,
                    "slideData": f'{{"id": "{random_id}"}}',
                },
            )
            assert added.status_code == 201

        names = await test_client.get("/presentations")
        assert names.json() == ["Sunday"]

        slides = await test_client.get("/presentations/Sunday/slides")
        body = slides.json()
        assert [s["randomId"] for s in body] == ["s1", "s2"]
        assert "createdDateTime" in body[0]

        updated = await test_client.put(
            "/presentations/slide",
            json={"presentationName": "Sunday", "randomId": "s1", "slideData": "plain"},
        )
        assert updated.json() == {"message": "Slide updated."}

        raw = await test_client.get("/slide/s1")
        assert raw.status_code == 200
        assert raw.headers["content-type"].startswith("text/plain")
        assert raw.text == "plain"

        removed = await test_client.delete("/presentations/slide/Sunday/s2")
        assert removed.json() == {"message": 'Slide with ID "s2" deleted.'}

        wiped = await test_client.delete("/presentations/Sunday")
        assert wiped.json() == {"message": 'Deleted 1 slide(s) from presentation "Sunday".'}

    @pytest.mark.asyncio
    async def test_init_without_name_is_400(self, test_client):
        response = await test_client.post(
            "/presentations", json={"createdDateTime": "2024-01-14T09:00:00Z"}
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_slide_is_404(self, test_client):
        response = await test_client.get("/slide/nope")
        assert response.status_code == 404


class TestPsalmEndpoints:

    @pytest.mark.asyncio
    async def test_bulk_and_range(self, test_client):
        verses = [
            {"chapter": 23, "verse": n, "telugu": f"t{n}", "english": f"e{n}"}
            for n in range(1, 7)
        ]
        bulk = await test_client.post("/psalms/bulk", json=verses)
        assert bulk.json() == {"message": "Verses inserted successfully."}

        ranged = await test_client.get("/psalms/23/range", params={"start": 2, "end": 3})
        assert [v["verse"] for v in ranged.json()] == [2, 3]

        single = await test_client.get("/psalms/23/4")
        assert single.json()["english"] == "e4"

        chapter = await test_client.get("/psalms/23")
        assert len(chapter.json()) == 6

    @pytest.mark.asyncio
    async def test_range_without_bounds_is_400(self, test_client):
        response = await test_client.get("/psalms/23/range")
        assert response.status_code == 400
        assert response.json()["message"] == "Provide start and end verse numbers."

    @pytest.mark.asyncio
    async def test_empty_bulk_is_400(self, test_client):
        response = await test_client.post("/psalms/bulk", json=[])
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_update_delete(self, test_client):
        created = await test_client.post(
            "/psalms", json={"chapter": 1, "verse": 1, "telugu": "t", "english": "e"}
        )
        psalm_id = created.json()["id"]

        updated = await test_client.put(
            f"/psalms/{psalm_id}",
            json={"chapter": 1, "verse": 1, "telugu": "t", "english": "Blessed is the man"},
        )
        assert updated.json() == {"message": "Psalm updated."}

        deleted = await test_client.delete(f"/psalms/{psalm_id}")
        assert deleted.status_code == 200

        missing = await test_client.get("/psalms/1/1")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_all_needs_confirm(self, test_client):
        await test_client.post(
            "/psalms", json={"chapter": 1, "verse": 1, "telugu": "t", "english": "e"}
        )

        refused = await test_client.delete("/psalms")
        assert refused.status_code == 400

        confirmed = await test_client.delete("/psalms", params={"confirm": "yes"})
        assert confirmed.json() == {"message": "All 1 verses deleted."}


class TestHealthAndMiddleware:

    @pytest.mark.asyncio
    async def test_ping(self, test_client):
        response = await test_client.get("/ping")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_health_with_database(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_without_database_is_503(self):
        from app.main import create_app

        app = create_app()
        app.state.database = MagicMock(ping=AsyncMock(side_effect=OSError("unable to open")))
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/ping")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_is_propagated_to_errors(self, test_client):
        response = await test_client.get("/songs/999", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"
