from __future__ import annotations

from typing import Annotated, List, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator

Difficulty = Literal["easy", "medium", "hard"]
QuizType = Literal["true_false", "multiple_choice"]
MaterialOrigin = Literal["model", "partial_fallback", "fallback"]
AptitudeCategory = Literal[
    "reasoning", "quantitative", "english", "general_knowledge", "data_interpretation"
]

TRUE_FALSE_OPTIONS = ("False", "True")


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


Text = Annotated[str, AfterValidator(_not_blank)]


class FlashCard(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    question: Text
    answer: Text
    difficulty: Difficulty


class QuizCard(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True, extra="ignore", populate_by_name=True)

    question: Text
    type: QuizType
    options: List[Text]
    correct_answer: int = Field(alias="correctAnswer")
    explanation: Text
    difficulty: Difficulty

    @model_validator(mode="after")
    def _check_options(self) -> "QuizCard":
        if self.type == "true_false" and len(self.options) != 2:
            raise ValueError(f"true_false needs exactly 2 options, got {len(self.options)}")
        if self.type == "multiple_choice" and not 3 <= len(self.options) <= 4:
            raise ValueError(f"multiple_choice needs 3-4 options, got {len(self.options)}")
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError(
                f"correctAnswer {self.correct_answer} is out of range for {len(self.options)} options"
            )
        return self


class StudyMaterial(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    topic: str
    flashcards: List[FlashCard]
    quiz_questions: List[QuizCard] = Field(alias="quizQuestions")
    summary: str
    audio_summary: Optional[str] = Field(default=None, alias="audioSummary")
    origin: MaterialOrigin = "model"


class OfflineQuizQuestion(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question: str
    options: List[str] = Field(min_length=4, max_length=4)
    correct_answer: int = Field(alias="correctAnswer")
    explanation: str
    category: AptitudeCategory
    difficulty: Difficulty

    @model_validator(mode="after")
    def _check_answer(self) -> "OfflineQuizQuestion":
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError("correctAnswer is out of range")
        return self


class LanguageDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str


class GradedAnswer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: int
    selected: Optional[int]
    correct_answer: int = Field(alias="correctAnswer")
    correct: bool


class OfflineGradeResult(BaseModel):
    score: int
    total: int
    results: List[GradedAnswer]


# Request / response bodies


class GenerateRequest(BaseModel):
    topic: str = Field(min_length=1, max_length=200)
    source_content: Optional[str] = Field(default=None, max_length=100_000)
    audio_language: Optional[str] = Field(default=None, max_length=16)

    @field_validator("topic")
    @classmethod
    def _topic_not_blank(cls, v: str) -> str:
        return _not_blank(v).strip()


class AudioSummaryRequest(BaseModel):
    text: str = Field(max_length=20_000)
    language: str = Field(default="en", max_length=16)


class AudioSummaryResponse(BaseModel):
    text: str


class LanguagesRequest(BaseModel):
    voices: Optional[List[str]] = None


class LanguagesResponse(BaseModel):
    languages: List[LanguageDescriptor]


class OfflineQuestionsResponse(BaseModel):
    count: int
    questions: List[OfflineQuizQuestion]


class GradeRequest(BaseModel):
    answers: List[Optional[int]]
    # grade against the same filtered set the questions were served from
    category: Optional[AptitudeCategory] = None
    difficulty: Optional[Difficulty] = None
