"""Unit tests for group discussions, answers, reviews and synthesis."""

from __future__ import annotations

from pydantic_ai.messages import ModelMessage, ModelResponse
from pydantic_ai.models.function import AgentInfo, FunctionModel

from bibliafs.ai import StudyAssistant


def _failing_model(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
    raise RuntimeError("model offline")


async def _group_with_member(client, token_for) -> dict:
    group = (
        await client.post("/api/groups", json={"name": "Estudo de Tiago", "is_public": True}, headers=token_for("u1"))
    ).json()
    assert (await client.post(f"/api/groups/{group['id']}/join", headers=token_for("u2"))).status_code == 200
    return group


async def _discussion(client, token_for, group_id, **fields) -> dict:
    body = {"title": "Fé e obras", "question": "Como a fé se mostra nas obras?", **fields}
    response = await client.post(f"/api/groups/{group_id}/discussions", json=body, headers=token_for("u1"))
    assert response.status_code == 201
    return response.json()


class TestCreateDiscussion:
    async def test_staff_only(self, client, token_for):
        group = await _group_with_member(client, token_for)

        response = await client.post(
            f"/api/groups/{group['id']}/discussions",
            json={"title": "X", "question": "Y?"},
            headers=token_for("u2"),
        )

        assert response.status_code == 403

    async def test_question_is_required_without_ai(self, client, token_for):
        group = await _group_with_member(client, token_for)

        response = await client.post(
            f"/api/groups/{group['id']}/discussions", json={"title": "Fé"}, headers=token_for("u1")
        )

        assert response.status_code == 400

    async def test_ai_drafts_the_question(self, client, token_for, repos):
        group = await _group_with_member(client, token_for)

        discussion = await _discussion(client, token_for, group["id"], question=None, use_ai=True)

        assert discussion["question"] == "Resposta sobre o versículo."
        assert discussion["status"] == "open"
        assert (await repos.users.get_by_id("u1")).ai_requests_count == 1

    async def test_failed_draft_falls_back_to_body_question(self, client, token_for, assistant_model, repos):
        assistant_model.model = FunctionModel(_failing_model)
        group = await _group_with_member(client, token_for)

        discussion = await _discussion(client, token_for, group["id"], use_ai=True)

        assert discussion["question"] == "Como a fé se mostra nas obras?"
        assert (await repos.users.get_by_id("u1")).ai_requests_count == 0

    async def test_blank_draft_keeps_the_body_question(self, client, token_for, monkeypatch):
        async def blank_draft(self, user_id, **context):
            return ""

        monkeypatch.setattr(StudyAssistant, "generate_discussion_question", blank_draft)
        group = await _group_with_member(client, token_for)

        discussion = await _discussion(client, token_for, group["id"], use_ai=True)

        assert discussion["question"] == "Como a fé se mostra nas obras?"

    async def test_members_list_discussions(self, client, token_for):
        group = await _group_with_member(client, token_for)
        await _discussion(client, token_for, group["id"])

        members = await client.get(f"/api/groups/{group['id']}/discussions", headers=token_for("u2"))
        outsider = await client.get(f"/api/groups/{group['id']}/discussions", headers=token_for("u3"))

        assert [d["title"] for d in members.json()] == ["Fé e obras"]
        assert outsider.status_code == 403


class TestAnswers:
    async def test_anonymous_answers_hide_the_author(self, client, token_for):
        group = await _group_with_member(client, token_for)
        discussion = await _discussion(client, token_for, group["id"])
        path = f"/api/discussions/{discussion['id']}"

        posted = await client.post(
            f"{path}/answers", json={"content": "Pela caridade.", "is_anonymous": True}, headers=token_for("u2")
        )
        detail = (await client.get(path, headers=token_for("u1"))).json()

        assert posted.status_code == 201
        assert posted.json()["user_id"] is None
        assert detail["answers"][0]["user_id"] is None
        assert detail["answers"][0]["user_name"] is None
        assert detail["answers"][0]["content"] == "Pela caridade."

    async def test_anonymity_needs_permission(self, client, token_for):
        group = await _group_with_member(client, token_for)
        discussion = await _discussion(client, token_for, group["id"], allow_anonymous=False)

        posted = await client.post(
            f"/api/discussions/{discussion['id']}/answers",
            json={"content": "Servindo.", "is_anonymous": True},
            headers=token_for("u2", user_metadata={"first_name": "Pedro"}),
        )

        assert posted.json()["is_anonymous"] is False
        assert posted.json()["user_name"] == "Pedro"

    async def test_outsiders_cannot_read_or_answer(self, client, token_for):
        group = await _group_with_member(client, token_for)
        discussion = await _discussion(client, token_for, group["id"])
        path = f"/api/discussions/{discussion['id']}"

        assert (await client.get(path, headers=token_for("u3"))).status_code == 403
        assert (await client.post(f"{path}/answers", json={"content": "x"}, headers=token_for("u3"))).status_code == 403

    async def test_closed_discussion_rejects_answers(self, client, token_for):
        group = await _group_with_member(client, token_for)
        discussion = await _discussion(client, token_for, group["id"])
        path = f"/api/discussions/{discussion['id']}"

        assert (await client.patch(f"{path}/close", headers=token_for("u2"))).status_code == 403
        closed = await client.patch(f"{path}/close", headers=token_for("u1"))
        response = await client.post(f"{path}/answers", json={"content": "Tarde"}, headers=token_for("u2"))

        assert closed.json()["status"] == "closed"
        assert response.status_code == 400


class TestReview:
    async def _answer(self, client, token_for) -> dict:
        group = await _group_with_member(client, token_for)
        discussion = await _discussion(client, token_for, group["id"])
        response = await client.post(
            f"/api/discussions/{discussion['id']}/answers", json={"content": "Amando."}, headers=token_for("u2")
        )
        return response.json()

    async def test_invalid_status(self, client, token_for):
        answer = await self._answer(client, token_for)

        response = await client.patch(
            f"/api/answers/{answer['id']}/review", json={"status": "great"}, headers=token_for("u1")
        )

        assert response.status_code == 400

    async def test_members_cannot_review(self, client, token_for):
        answer = await self._answer(client, token_for)

        response = await client.patch(
            f"/api/answers/{answer['id']}/review", json={"status": "approved"}, headers=token_for("u2")
        )

        assert response.status_code == 403

    async def test_leader_reviews(self, client, token_for):
        answer = await self._answer(client, token_for)

        response = await client.patch(
            f"/api/answers/{answer['id']}/review",
            json={"status": "excellent", "comment": "Muito bom"},
            headers=token_for("u1"),
        )

        assert response.status_code == 200
        assert response.json()["review_status"] == "excellent"
        assert response.json()["reviewed_by"] == "u1"
        assert response.json()["reviewed_at"] is not None


class TestSynthesis:
    async def test_needs_answers(self, client, token_for):
        group = await _group_with_member(client, token_for)
        discussion = await _discussion(client, token_for, group["id"])

        response = await client.post(f"/api/discussions/{discussion['id']}/synthesize", headers=token_for("u1"))

        assert response.status_code == 400

    async def test_leader_only(self, client, token_for):
        group = await _group_with_member(client, token_for)
        discussion = await _discussion(client, token_for, group["id"])

        response = await client.post(f"/api/discussions/{discussion['id']}/synthesize", headers=token_for("u2"))

        assert response.status_code == 403

    async def test_synthesis_is_stored(self, client, token_for):
        group = await _group_with_member(client, token_for)
        discussion = await _discussion(client, token_for, group["id"])
        path = f"/api/discussions/{discussion['id']}"
        await client.post(f"{path}/answers", json={"content": "Pela fé."}, headers=token_for("u2"))

        response = await client.post(f"{path}/synthesize", headers=token_for("u1"))

        assert response.status_code == 200
        assert response.json()["synthesis"] == "Resposta sobre o versículo."
        assert response.json()["discussion"]["ai_synthesis"] == "Resposta sobre o versículo."
        assert response.json()["discussion"]["synthesized_at"] is not None

    async def test_unconfigured_assistant(self, client, token_for, assistant_model):
        assistant_model.model = None
        group = await _group_with_member(client, token_for)
        discussion = await _discussion(client, token_for, group["id"])

        response = await client.post(f"/api/discussions/{discussion['id']}/synthesize", headers=token_for("u1"))

        assert response.status_code == 503
