"""Unit tests for mark-read rewards, achievements and the level summary."""

from __future__ import annotations

from bibliafs.gamification.seeds import ACHIEVEMENT_SEEDS
from bibliafs.gamification.service import ALREADY_READ_TODAY


class TestMarkRead:
    async def test_book_and_chapter_are_required(self, client, token_for):
        response = await client.post("/api/bible/mark-read", json={"book": "jo"}, headers=token_for("u1"))

        assert response.status_code == 400

    async def test_first_reading_of_the_day_is_rewarded_once(self, client, token_for):
        headers = token_for("u1")

        first = await client.post("/api/bible/mark-read", json={"book": "jo", "chapter": 1}, headers=headers)
        second = await client.post("/api/bible/mark-read", json={"book": "jo", "chapter": 2}, headers=headers)

        assert first.status_code == 200
        assert first.json()["xp_gained"] >= 10
        assert first.json()["new_streak"] == 1
        assert second.json()["xp_gained"] == 0
        assert second.json()["new_xp"] == first.json()["new_xp"]
        assert second.json()["message"] == ALREADY_READ_TODAY


class TestAchievements:
    async def test_catalogue_is_seeded(self, client, token_for):
        response = await client.get("/api/achievements", headers=token_for("u1"))

        assert response.status_code == 200
        assert len(response.json()) == len(ACHIEVEMENT_SEEDS)

    async def test_first_reading_unlocks_an_achievement(self, client, token_for):
        headers = token_for("u1")
        await client.post("/api/bible/mark-read", json={"book": "gn", "chapter": 1}, headers=headers)

        mine = (await client.get("/api/my-achievements", headers=headers)).json()

        assert any(item["is_unlocked"] and item["achievement"]["name"] == "Primeira Leitura" for item in mine)


class TestStats:
    async def test_new_user_summary(self, client, token_for):
        response = await client.get("/api/stats/gamification", headers=token_for("u1"))

        assert response.status_code == 200
        stats = response.json()
        assert stats["level"] == 1
        assert stats["level_title"] == "Iniciante"
        assert stats["experience_points"] == 0
        assert stats["achievements_unlocked"] == 0
        assert stats["next_level_xp"] == 100
