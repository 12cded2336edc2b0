from __future__ import annotations

from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from studygen.core.errors import ValidationError
from studygen.schemas.study import TRUE_FALSE_OPTIONS, FlashCard, QuizCard

M = TypeVar("M", bound=BaseModel)


def _require_items(parsed: Any, field: str) -> List[Any]:
    if not isinstance(parsed, dict):
        raise ValidationError(f"expected a JSON object, got {type(parsed).__name__}")
    items = parsed.get(field)
    if not isinstance(items, list):
        raise ValidationError(f"{field}: missing or not an array")
    if not items:
        raise ValidationError(f"{field}: array is empty")
    return items


def _describe(err: PydanticValidationError) -> str:
    first = err.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f".{loc}: {msg}" if loc else f": {msg}"


def _validate_item(model: Type[M], item: Any, field: str, index: int) -> M:
    if not isinstance(item, dict):
        raise ValidationError(f"{field}[{index}]: expected an object, got {type(item).__name__}")
    try:
        return model.model_validate(item)
    except PydanticValidationError as e:
        raise ValidationError(f"{field}[{index}]{_describe(e)}") from e


def validate_flashcards(parsed: Any) -> List[FlashCard]:
    items = _require_items(parsed, "flashcards")
    return [_validate_item(FlashCard, item, "flashcards", i) for i, item in enumerate(items)]


def _with_default_options(item: Any) -> Any:
    # true_false items may omit their options or send null; nothing else is defaulted
    if isinstance(item, dict) and item.get("type") == "true_false" and item.get("options") is None:
        item = dict(item)
        item["options"] = list(TRUE_FALSE_OPTIONS)
    return item


def validate_quiz_cards(parsed: Any) -> List[QuizCard]:
    items = _require_items(parsed, "questions")
    return [
        _validate_item(QuizCard, _with_default_options(item), "questions", i)
        for i, item in enumerate(items)
    ]


def summary_of(parsed: Dict[str, Any]) -> str:
    summary = parsed.get("summary")
    if isinstance(summary, str) and summary.strip():
        return summary.strip()
    return ""
