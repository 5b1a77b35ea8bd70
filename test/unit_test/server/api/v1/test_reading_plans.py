"""Unit tests for reading plan templates, user plans and day completion."""

from __future__ import annotations

import pytest

from bibliafs.gamification.seeds import PLAN_TEMPLATE_SEEDS


async def _manual_plan(client, headers, total_days: int = 2) -> dict:
    response = await client.post("/api/reading-plans", json={"title": "Evangelhos", "total_days": total_days}, headers=headers)
    assert response.status_code == 201
    return response.json()


class TestTemplates:
    async def test_templates_are_seeded_on_first_read(self, client):
        first = await client.get("/api/reading-plan-templates")
        second = await client.get("/api/reading-plan-templates")

        assert first.status_code == 200
        assert len(first.json()) == len(PLAN_TEMPLATE_SEEDS)
        assert [t["id"] for t in second.json()] == [t["id"] for t in first.json()]

    async def test_unknown_template(self, client):
        assert (await client.get("/api/reading-plan-templates/999")).status_code == 404

    async def test_plan_from_template_copies_open_schedule(self, client, token_for):
        template = (await client.get("/api/reading-plan-templates")).json()[0]

        response = await client.post(
            "/api/reading-plans/from-template", json={"template_id": template["id"]}, headers=token_for("u1")
        )

        assert response.status_code == 201
        plan = response.json()
        assert plan["template_id"] == template["id"]
        assert plan["total_days"] == template["duration"]
        assert all(day["is_completed"] is False for day in plan["schedule"])


class TestUserPlans:
    async def test_manual_plan_has_empty_days(self, client, token_for):
        plan = await _manual_plan(client, token_for("u1"), total_days=3)

        assert [day["day"] for day in plan["schedule"]] == [1, 2, 3]
        assert plan["current_day"] == 1

    async def test_custom_plan_has_one_chapter_per_day(self, client, token_for):
        response = await client.post(
            "/api/reading-plans/custom",
            json={"book": "jo", "start_chapter": 1, "end_chapter": 3},
            headers=token_for("u1"),
        )

        assert response.status_code == 201
        plan = response.json()
        assert plan["title"] == "jo 1-3"
        assert plan["total_days"] == 3
        assert [day["readings"][0]["chapter"] for day in plan["schedule"]] == [1, 2, 3]

    @pytest.mark.parametrize(
        "body",
        [{"book": "jo", "start_chapter": 5, "end_chapter": 2}, {"book": "jo", "start_chapter": 1}, {"start_chapter": 1}],
    )
    async def test_custom_plan_rejects_bad_ranges(self, client, token_for, body):
        response = await client.post("/api/reading-plans/custom", json=body, headers=token_for("u1"))

        assert response.status_code == 400

    async def test_current_plan_and_delete(self, client, token_for):
        headers = token_for("u1")
        plan = await _manual_plan(client, headers)

        assert (await client.get("/api/reading-plans/current", headers=headers)).json()["id"] == plan["id"]
        assert (await client.delete(f"/api/reading-plans/{plan['id']}", headers=token_for("u2"))).status_code == 404
        assert (await client.delete(f"/api/reading-plans/{plan['id']}", headers=headers)).status_code == 204
        assert (await client.get("/api/reading-plans/current", headers=headers)).json() is None


class TestCompleteDay:
    async def test_completing_days_advances_and_finishes_plan(self, client, token_for):
        headers = token_for("u1")
        plan = await _manual_plan(client, headers, total_days=2)

        first = await client.put(f"/api/reading-plans/{plan['id']}/complete-day", json={"day": 1}, headers=headers)
        assert first.status_code == 200
        assert first.json()["current_day"] == 2
        assert first.json()["is_completed"] is False

        second = await client.put(f"/api/reading-plans/{plan['id']}/complete-day", json={"day": 2}, headers=headers)
        assert second.json()["is_completed"] is True
        assert second.json()["completed_at"] is not None

    async def test_completing_a_day_rewards_reading(self, client, token_for):
        headers = token_for("u1")
        plan = await _manual_plan(client, headers)

        await client.put(f"/api/reading-plans/{plan['id']}/complete-day", json={"day": 1}, headers=headers)
        stats = (await client.get("/api/stats/gamification", headers=headers)).json()

        assert stats["reading_streak"] == 1
        assert stats["experience_points"] > 0

    async def test_day_must_be_an_integer(self, client, token_for):
        headers = token_for("u1")
        plan = await _manual_plan(client, headers)

        response = await client.put(f"/api/reading-plans/{plan['id']}/complete-day", json={"day": "one"}, headers=headers)

        assert response.status_code == 400

    async def test_unknown_day_or_foreign_plan(self, client, token_for):
        plan = await _manual_plan(client, token_for("u1"))

        unknown_day = await client.put(
            f"/api/reading-plans/{plan['id']}/complete-day", json={"day": 9}, headers=token_for("u1")
        )
        foreign = await client.put(f"/api/reading-plans/{plan['id']}/complete-day", json={"day": 1}, headers=token_for("u2"))

        assert unknown_day.status_code == 404
        assert foreign.status_code == 404
