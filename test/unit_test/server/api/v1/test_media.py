"""Unit tests for audio progress and offline content."""

from __future__ import annotations

import json

import pytest

from bibliafs.server.api.v1.media import audio_completed


@pytest.mark.parametrize(
    "current,duration,explicit,expected",
    [(10, 100, None, False), (100, 100, None, True), (120, 100, False, True), (5, 0, None, False), (5, 0, True, True)],
)
def test_audio_completed(current, duration, explicit, expected):
    assert audio_completed(current, duration, explicit) is expected


class TestAudioProgress:
    async def test_progress_is_one_row_per_chapter(self, client, token_for):
        headers = token_for("u1")
        body = {"book": "jo", "chapter": 3, "current_time": 30, "duration": 300}

        first = await client.post("/api/audio/progress", json=body, headers=headers)
        second = await client.post("/api/audio/progress", json={**body, "current_time": 300}, headers=headers)

        assert first.json()["is_completed"] is False
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["is_completed"] is True
        assert len((await client.get("/api/audio/progress", headers=headers)).json()) == 1

    async def test_chapter_lookup(self, client, token_for):
        headers = token_for("u1")
        await client.post(
            "/api/audio/progress", json={"book": "sl", "chapter": 23, "current_time": 12.5, "duration": 90}, headers=headers
        )

        found = await client.get("/api/audio/progress/sl/23", headers=headers)
        other_version = await client.get("/api/audio/progress/sl/23", params={"version": "acf"}, headers=headers)

        assert found.json()["current_time"] == 12.5
        assert other_version.json() is None


class TestOfflineContent:
    async def test_size_defaults_to_encoded_content(self, client, token_for):
        content = {"verses": [{"number": 1, "text": "No princípio"}]}

        response = await client.post(
            "/api/offline/content", json={"book": "gn", "chapter": 1, "content": content}, headers=token_for("u1")
        )

        assert response.status_code == 200
        assert response.json()["size_bytes"] == len(json.dumps(content, ensure_ascii=False).encode("utf-8"))

    async def test_delete_one_and_clear_all(self, client, token_for):
        headers = token_for("u1")
        saved = (await client.post("/api/offline/content", json={"book": "gn", "chapter": 1}, headers=headers)).json()
        await client.post("/api/offline/content", json={"book": "gn", "chapter": 2}, headers=headers)

        assert (await client.delete(f"/api/offline/content/{saved['id']}", headers=token_for("u2"))).status_code == 404
        assert (await client.delete(f"/api/offline/content/{saved['id']}", headers=headers)).status_code == 204
        assert len((await client.get("/api/offline/content", headers=headers)).json()) == 1

        assert (await client.delete("/api/offline/content", headers=headers)).status_code == 204
        assert (await client.get("/api/offline/content", headers=headers)).json() == []
