"""Unit tests for teacher lessons, student progress and the lesson AI tools."""

from __future__ import annotations

import pytest
from pydantic_ai.models.test import TestModel

from bibliafs.server.api.v1.lessons import score_answers

QUESTIONS = [
    {"id": "q1", "question": "Quem escreveu Romanos?", "correct_answer": "Paulo"},
    {"id": "q2", "question": "Quantos capítulos tem Romanos?", "correct_answer": "16"},
]


async def _lesson(client, headers) -> dict:
    response = await client.post(
        "/api/teacher/lessons", json={"title": "Romanos", "questions": QUESTIONS}, headers=headers
    )
    assert response.status_code == 201
    return response.json()


class TestScoring:
    @pytest.mark.parametrize(
        "answers,expected",
        [({"q1": "Paulo", "q2": "16"}, 100), ({"q1": "Paulo", "q2": "12"}, 50), ({}, 0)],
    )
    def test_score_is_percentage_correct(self, answers, expected):
        assert score_answers(QUESTIONS, answers) == expected

    def test_no_questions_means_no_score(self):
        assert score_answers([], {"q1": "x"}) is None

    def test_questions_without_id_are_keyed_by_position(self):
        assert score_answers([{"correct_answer": "a"}, {"correct_answer": "b"}], {"0": "a", "1": "x"}) == 50


class TestLessonCrud:
    async def test_teacher_owns_lessons(self, client, token_for):
        lesson = await _lesson(client, token_for("teacher"))

        assert lesson["teacher_id"] == "teacher"
        assert len((await client.get("/api/teacher/lessons", headers=token_for("teacher"))).json()) == 1
        assert (await client.get("/api/teacher/lessons", headers=token_for("student"))).json() == []

    async def test_only_teacher_updates_or_deletes(self, client, token_for):
        lesson = await _lesson(client, token_for("teacher"))
        path = f"/api/teacher/lessons/{lesson['id']}"

        assert (await client.patch(path, json={"is_published": True}, headers=token_for("student"))).status_code == 404
        assert (await client.patch(path, json={"is_published": True}, headers=token_for("teacher"))).json()["is_published"]
        assert (await client.delete(path, headers=token_for("student"))).status_code == 404
        assert (await client.delete(path, headers=token_for("teacher"))).status_code == 204


class TestProgress:
    async def test_resubmitting_replaces_attempt(self, client, token_for):
        lesson = await _lesson(client, token_for("teacher"))
        path = f"/api/teacher/lessons/{lesson['id']}/progress"
        student = token_for("student")

        first = await client.post(path, json={"answers": {"q1": "Pedro", "q2": "16"}}, headers=student)
        second = await client.post(path, json={"answers": {"q1": "Paulo", "q2": "16"}}, headers=student)

        assert first.json()["score"] == 50
        assert second.json()["score"] == 100
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["completed_at"] is not None

    async def test_only_teacher_reads_progress(self, client, token_for):
        lesson = await _lesson(client, token_for("teacher"))
        path = f"/api/teacher/lessons/{lesson['id']}/progress"
        await client.post(path, json={"answers": {"q1": "Paulo"}}, headers=token_for("student"))

        assert (await client.get(path, headers=token_for("student"))).status_code == 404
        progress = (await client.get(path, headers=token_for("teacher"))).json()
        assert [p["student_id"] for p in progress] == ["student"]

    async def test_progress_for_unknown_lesson(self, client, token_for):
        response = await client.post("/api/teacher/lessons/99/progress", json={"answers": {}}, headers=token_for("s"))

        assert response.status_code == 404


class TestLessonAssistant:
    async def test_generate_requires_title_and_scripture(self, client, token_for):
        response = await client.post(
            "/api/teacher/generate-lesson-content", json={"title": "Graça"}, headers=token_for("teacher")
        )

        assert response.status_code == 400

    async def test_generate_lesson_counts_against_quota(self, client, token_for, assistant_model, repos):
        assistant_model.model = TestModel()

        response = await client.post(
            "/api/teacher/generate-lesson-content",
            json={"title": "Graça", "scripture_base": "Efésios 2", "duration": 30},
            headers=token_for("teacher"),
        )

        assert response.status_code == 200
        assert set(response.json()) >= {"objectives", "content_blocks", "questions"}
        assert (await repos.users.get_by_id("teacher")).ai_requests_count == 1

    async def test_ask_assistant(self, client, token_for):
        response = await client.post(
            "/api/teacher/ask-assistant",
            json={"question": "Como explicar a graça para adolescentes?"},
            headers=token_for("teacher"),
        )

        assert response.status_code == 200
        assert response.json() == {"answer": "Resposta sobre o versículo.", "remaining": 19}
