from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Iterable, List, Optional, Sequence

import httpx

from studygen.core.config import Settings
from studygen.core.errors import StudyGenError
from studygen.core.llm_client import generate_chat
from studygen.generation.extraction import extract_json
from studygen.generation.fallback import (
    default_summary,
    synthesize_flashcards,
    synthesize_quiz,
    synthesize_summary,
)
from studygen.generation.prompt import build_flashcard_prompts, build_quiz_prompts
from studygen.generation.validation import summary_of, validate_flashcards, validate_quiz_cards
from studygen.offline.aptitude import grade_answers, offline_questions
from studygen.schemas.study import (
    FlashCard,
    LanguageDescriptor,
    OfflineGradeResult,
    OfflineQuizQuestion,
    QuizCard,
    StudyMaterial,
)
from studygen.speech.enhancer import enhance
from studygen.speech.languages import available_languages
from studygen.studio.outcome import StageOutcome

logger = logging.getLogger("studio")


@dataclass(frozen=True)
class FlashcardDraft:
    flashcards: List[FlashCard]
    summary: str


class StudyMaterialService:
    """
    Turns a topic into a StudyMaterial. Never fails for a non-empty topic:
    a failed flashcard stage replaces everything with synthesized material,
    a failed quiz stage replaces only the quiz.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None) -> None:
        self.settings = settings
        self._client = client

    @asynccontextmanager
    async def _http(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient() as client:
            yield client

    async def generate_flashcards(
        self,
        topic: str,
        source_content: Optional[str] = None,
        audio_language: Optional[str] = None,
    ) -> StudyMaterial:
        topic = (topic or "").strip()
        if not topic:
            raise ValueError("topic must not be empty")

        async with self._http() as client:
            stage = await self._flashcard_stage(client, topic, source_content)

            if not stage.ok:
                logger.warning(
                    "flashcard stage failed, using fallback material topic=%r reason=%s detail=%s",
                    topic,
                    stage.reason.value,
                    stage.detail,
                )
                return self._fallback_material(topic, audio_language)

            draft = stage.value
            quiz = await self._quiz_stage(client, topic, draft.summary)

        if quiz.ok:
            quiz_questions, origin = quiz.value, "model"
        else:
            logger.warning(
                "quiz stage failed, keeping model flashcards topic=%r reason=%s detail=%s",
                topic,
                quiz.reason.value,
                quiz.detail,
            )
            quiz_questions, origin = synthesize_quiz(topic), "partial_fallback"

        logger.info(
            "generated study material topic=%r flashcards=%s quiz=%s origin=%s",
            topic,
            len(draft.flashcards),
            len(quiz_questions),
            origin,
        )
        return StudyMaterial(
            topic=topic,
            flashcards=draft.flashcards,
            quiz_questions=quiz_questions,
            summary=draft.summary,
            audio_summary=self._audio_for(draft.summary, audio_language),
            origin=origin,
        )

    async def generate_quiz_questions(self, topic: str, summary: str) -> List[QuizCard]:
        topic = (topic or "").strip()
        if not topic:
            raise ValueError("topic must not be empty")

        async with self._http() as client:
            outcome = await self._quiz_stage(client, topic, summary)
        if outcome.ok:
            return outcome.value
        logger.warning(
            "quiz generation failed, using fallback quiz topic=%r reason=%s detail=%s",
            topic,
            outcome.reason.value,
            outcome.detail,
        )
        return synthesize_quiz(topic)

    def generate_audio_summary(self, text: str, language_tag: str = "en") -> str:
        return enhance(text or "", language_tag)

    def get_available_languages(self, voices: Optional[Iterable[str]]) -> List[LanguageDescriptor]:
        return available_languages(voices)

    def get_offline_aptitude_questions(
        self, category: Optional[str] = None, difficulty: Optional[str] = None
    ) -> List[OfflineQuizQuestion]:
        return offline_questions(category, difficulty)

    def grade_offline_answers(
        self,
        answers: Sequence[Optional[int]],
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> OfflineGradeResult:
        return grade_answers(answers, offline_questions(category, difficulty))

    async def _flashcard_stage(
        self, client: httpx.AsyncClient, topic: str, source_content: Optional[str]
    ) -> StageOutcome[FlashcardDraft]:
        s = self.settings
        prompts = build_flashcard_prompts(
            topic,
            source_content,
            count=s.requested_flashcards,
            max_source_chars=s.source_content_max_chars,
        )
        try:
            result = await generate_chat(
                client,
                s,
                prompts.as_messages(),
                temperature=s.flashcard_temperature,
                max_tokens=s.flashcard_max_tokens,
                presence_penalty=s.flashcard_presence_penalty,
                frequency_penalty=s.flashcard_frequency_penalty,
            )
            parsed = extract_json(result.content)
            cards = validate_flashcards(parsed)
        except StudyGenError as e:
            return StageOutcome.failed(e)

        if len(cards) > s.max_flashcards:
            logger.info("truncating flashcards topic=%r from=%s to=%s", topic, len(cards), s.max_flashcards)
        summary = summary_of(parsed) or default_summary(topic)
        return StageOutcome.succeeded(FlashcardDraft(flashcards=cards[: s.max_flashcards], summary=summary))

    async def _quiz_stage(
        self, client: httpx.AsyncClient, topic: str, summary: str
    ) -> StageOutcome[List[QuizCard]]:
        s = self.settings
        prompts = build_quiz_prompts(topic, summary, count=s.requested_quiz_questions)
        try:
            result = await generate_chat(
                client,
                s,
                prompts.as_messages(),
                temperature=s.quiz_temperature,
                max_tokens=s.quiz_max_tokens,
            )
            questions = validate_quiz_cards(extract_json(result.content))
        except StudyGenError as e:
            return StageOutcome.failed(e)
        return StageOutcome.succeeded(questions)

    def _fallback_material(self, topic: str, audio_language: Optional[str]) -> StudyMaterial:
        summary = synthesize_summary(topic)
        return StudyMaterial(
            topic=topic,
            flashcards=synthesize_flashcards(topic),
            quiz_questions=synthesize_quiz(topic),
            summary=summary,
            audio_summary=self._audio_for(summary, audio_language),
            origin="fallback",
        )

    def _audio_for(self, summary: str, audio_language: Optional[str]) -> Optional[str]:
        if not audio_language:
            return None
        return enhance(summary, audio_language)
