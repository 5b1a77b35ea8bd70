"""AI study assistant.

``StudyAssistant`` wraps one pydantic-ai ``Agent`` per feature. Agents are
built per call so each feature can choose its own model, system prompt and
output type:

- study questions, discussion questions, syntheses and teacher help return text;
- semantic search returns a ``SearchResult``;
- lesson generation returns a ``LessonContent``.

A ``model`` passed to the constructor replaces the OpenAI model for every
feature, which is how tests run the assistant against ``TestModel``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Literal, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, Field
from pydantic_ai import Agent
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from bibliafs.core.monitoring import log_ai_request
from bibliafs.server.core.config import OpenAIConfig

from . import prompts
from .errors import AIUnavailableError

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT")


class SearchHit(BaseModel):
    reference: str
    book: str
    chapter: int
    verse: int
    text: str
    relevance: Literal["Alta", "Média", "Relacionado"] = "Relacionado"


class SearchResult(BaseModel):
    summary: str
    results: List[SearchHit] = Field(default_factory=list)


class ContentBlock(BaseModel):
    title: str
    content: str


class LessonQuestion(BaseModel):
    question: str
    answer: str


class LessonContent(BaseModel):
    description: str
    objectives: List[str] = Field(default_factory=list)
    content_blocks: List[ContentBlock] = Field(default_factory=list)
    questions: List[LessonQuestion] = Field(default_factory=list)


def objectives_count(duration: int) -> int:
    if duration <= 10:
        return 1
    if duration <= 20:
        return 2
    if duration <= 30:
        return 3
    if duration <= 60:
        return 5
    return 8


def question_count(duration: int, num_questions: Optional[int] = None) -> int:
    """Number of review questions, honouring an explicit request clamped to 1..30."""
    if num_questions is not None:
        return max(1, min(30, num_questions))
    for limit, count in ((10, 2), (15, 3), (20, 4), (30, 5), (45, 8), (60, 10), (90, 15)):
        if duration <= limit:
            return count
    return 20


def content_block_count(duration: int, questions: int) -> int:
    blocks = 12
    for limit, count in ((10, 1), (20, 2), (30, 3), (45, 5), (60, 6), (90, 8)):
        if duration <= limit:
            blocks = count
            break
    return max(blocks, questions)


class StudyAssistant:
    """Bible study helpers backed by OpenAI through pydantic-ai."""

    def __init__(
        self,
        config: OpenAIConfig,
        *,
        model: Model | str | None = None,
        search_model: Model | str | None = None,
    ) -> None:
        """
        Args:
            config: OpenAI key and model names.
            model: Optional model used instead of the configured OpenAI model.
            search_model: Optional model for semantic search; falls back to ``model``.
        """
        self._config = config
        self._model = model
        self._search_model = search_model if search_model is not None else model

    @property
    def is_configured(self) -> bool:
        return self._model is not None or self._config.is_configured

    def _resolve_model(self, *, search: bool = False) -> Model | str:
        override = self._search_model if search else self._model
        if override is not None:
            return override
        if not self._config.is_configured:
            raise AIUnavailableError()
        model_name = self._config.search_model if search else self._config.model
        return OpenAIChatModel(model_name, provider=OpenAIProvider(api_key=self._config.api_key))

    async def _run(
        self,
        feature: str,
        user_id: str,
        prompt: str,
        *,
        system_prompt: str,
        output_type: Type[OutputT],
        temperature: float,
        max_tokens: Optional[int] = None,
        search: bool = False,
    ) -> OutputT:
        model = self._resolve_model(search=search)
        agent: Agent[None, OutputT] = Agent(model, output_type=output_type, system_prompt=system_prompt)

        settings: Dict[str, Any] = {"temperature": temperature}
        if max_tokens is not None:
            settings["max_tokens"] = max_tokens

        started = time.perf_counter()
        result = await agent.run(prompt, model_settings=settings)
        duration_ms = (time.perf_counter() - started) * 1000

        model_name = getattr(model, "model_name", str(model))
        log_ai_request(feature, user_id, model_name, duration_ms)
        return result.output

    async def answer_question(
        self,
        user_id: str,
        question: str,
        *,
        book: Optional[str] = None,
        chapter: Optional[int] = None,
        verse: Optional[int] = None,
        verse_text: Optional[str] = None,
        chapter_verses: Optional[Sequence[Dict[str, Any]]] = None,
    ) -> str:
        """Answer a study question about the passage being read."""
        prompt = prompts.build_study_prompt(
            question,
            book=book,
            chapter=chapter,
            verse=verse,
            verse_text=verse_text,
            chapter_verses=chapter_verses,
        )
        answer = await self._run(
            "study",
            user_id,
            prompt,
            system_prompt=prompts.STUDY_SYSTEM_PROMPT,
            output_type=str,
            temperature=0.7,
            max_tokens=2000,
        )
        lowered = answer.lower()
        if "referência" not in lowered and "versículo" not in lowered:
            answer += prompts.REFERENCE_NOTE
        return answer

    async def semantic_search(self, user_id: str, query: str) -> SearchResult:
        return await self._run(
            "search",
            user_id,
            f"Consulta: {query}",
            system_prompt=prompts.SEARCH_SYSTEM_PROMPT,
            output_type=SearchResult,
            temperature=0.3,
            max_tokens=2000,
            search=True,
        )

    async def generate_discussion_question(
        self,
        user_id: str,
        *,
        title: str,
        description: Optional[str] = None,
        verse_reference: Optional[str] = None,
        verse_text: Optional[str] = None,
    ) -> str:
        prompt = prompts.build_discussion_question_prompt(
            title=title, description=description, verse_reference=verse_reference, verse_text=verse_text
        )
        question = await self._run(
            "discussion_question",
            user_id,
            prompt,
            system_prompt=prompts.DISCUSSION_QUESTION_SYSTEM_PROMPT,
            output_type=str,
            temperature=0.8,
            max_tokens=200,
        )
        return question.strip()

    async def synthesize_answers(
        self,
        user_id: str,
        *,
        title: str,
        question: str,
        answers: Sequence[Dict[str, Any]],
        verse_reference: Optional[str] = None,
        verse_text: Optional[str] = None,
    ) -> str:
        """Summarise a group discussion.

        Each answer dict carries ``content`` and optionally ``author_name``,
        ``is_anonymous`` and ``verse_reference``.
        """
        prompt = prompts.build_synthesis_prompt(
            title=title,
            question=question,
            answers=answers,
            verse_reference=verse_reference,
            verse_text=verse_text,
        )
        return await self._run(
            "synthesis",
            user_id,
            prompt,
            system_prompt=prompts.SYNTHESIS_SYSTEM_PROMPT,
            output_type=str,
            temperature=0.7,
            max_tokens=1500,
        )

    async def generate_lesson_content(
        self,
        user_id: str,
        *,
        title: str,
        scripture_base: str,
        duration: int = 50,
        num_questions: Optional[int] = None,
    ) -> LessonContent:
        questions = question_count(duration, num_questions)
        prompt = prompts.build_lesson_prompt(
            title=title,
            scripture_base=scripture_base,
            duration=duration,
            objectives_count=objectives_count(duration),
            question_count=questions,
            content_block_count=content_block_count(duration, questions),
        )
        logger.debug(f"Generating lesson content for '{title}' ({duration} min, {questions} questions)")
        return await self._run(
            "lesson",
            user_id,
            prompt,
            system_prompt=prompts.LESSON_SYSTEM_PROMPT,
            output_type=LessonContent,
            temperature=0.7,
        )

    async def ask_teacher_assistant(self, user_id: str, question: str, context: Optional[str] = None) -> str:
        return await self._run(
            "teacher_assistant",
            user_id,
            prompts.build_teacher_prompt(question, context),
            system_prompt=prompts.TEACHER_ASSISTANT_SYSTEM_PROMPT,
            output_type=str,
            temperature=0.8,
        )
