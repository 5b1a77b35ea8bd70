"""Unit tests for the user, profile, dashboard and activity endpoints."""

from __future__ import annotations

import jwt


class TestAuthentication:
    async def test_missing_token_is_rejected(self, client):
        response = await client.get("/api/auth/user")

        assert response.status_code == 401
        assert response.json()["detail"] == "No token provided"

    async def test_token_with_wrong_secret_is_rejected(self, client):
        token = jwt.encode(
            {"sub": "u1", "aud": "authenticated"}, "another-secret-with-at-least-32-bytes", algorithm="HS256"
        )

        response = await client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    async def test_first_request_provisions_user_from_claims(self, client, token_for, repos):
        headers = token_for("u1", user_metadata={"first_name": "Ana", "last_name": "Souza"})

        response = await client.get("/api/auth/user", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "u1"
        assert body["first_name"] == "Ana"
        assert body["subscription_plan"] == "free"
        assert (await repos.users.get_by_id("u1")).email == "u1@example.com"


class TestProfile:
    async def test_update_profile_changes_only_given_fields(self, client, token_for, make_user):
        await make_user("u1", first_name="Ana", last_name="Souza")

        response = await client.patch("/api/user/profile", json={"last_name": "Lima"}, headers=token_for("u1"))

        assert response.status_code == 200
        assert response.json()["first_name"] == "Ana"
        assert response.json()["last_name"] == "Lima"

    async def test_theme_must_be_known(self, client, token_for):
        headers = token_for("u1")

        assert (await client.patch("/api/settings/theme", json={"theme": "neon"}, headers=headers)).status_code == 400
        response = await client.patch("/api/settings/theme", json={"theme": "sepia"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["theme"] == "sepia"


class TestDashboard:
    async def test_dashboard_counts_user_content(self, client, token_for):
        headers = token_for("u1")
        await client.post("/api/prayers", json={"title": "Família"}, headers=headers)
        created = await client.post("/api/prayers", json={"title": "Trabalho"}, headers=headers)
        await client.patch(f"/api/prayers/{created.json()['id']}", json={"is_answered": True}, headers=headers)
        await client.post("/api/notes", json={"book": "jo", "chapter": 3, "content": "Amor"}, headers=headers)

        response = await client.get("/api/stats/dashboard", headers=headers)

        assert response.status_code == 200
        stats = response.json()
        assert stats["total_prayers"] == 2
        assert stats["answered_prayers"] == 1
        assert stats["notes"] == 1
        assert stats["active_plans"] == 0

    async def test_recent_activity_merges_sources(self, client, token_for):
        headers = token_for("u1")
        await client.post("/api/prayers", json={"title": "Gratidão"}, headers=headers)
        await client.post("/api/reading-plans", json={"title": "Meu plano", "total_days": 3}, headers=headers)
        await client.post(
            "/api/community/posts",
            json={"verse_reference": "Salmos 23:1", "verse_text": "O Senhor é o meu pastor"},
            headers=headers,
        )

        response = await client.get("/api/activity/recent", headers=headers)

        assert response.status_code == 200
        types = {item["type"] for item in response.json()["items"]}
        assert types == {"prayer", "post", "reading_plan"}


class TestUserSearch:
    async def test_search_requires_email(self, client, token_for):
        assert (await client.get("/api/users/search", headers=token_for("u1"))).status_code == 400

    async def test_search_unknown_email(self, client, token_for):
        response = await client.get("/api/users/search", params={"email": "ghost@example.com"}, headers=token_for("u1"))

        assert response.status_code == 404

    async def test_search_returns_public_profile(self, client, token_for, make_user):
        await make_user("u2", first_name="Pedro", stripe_customer_id="cus_secret")

        response = await client.get("/api/users/search", params={"email": "u2@example.com"}, headers=token_for("u1"))

        assert response.status_code == 200
        assert response.json()["first_name"] == "Pedro"
        assert "stripe_customer_id" not in response.json()
