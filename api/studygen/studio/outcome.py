from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from studygen.core.errors import FailureReason, StudyGenError

T = TypeVar("T")


@dataclass(frozen=True)
class StageOutcome(Generic[T]):
    """Result of one generation stage: a value, or the reason it failed."""

    value: Optional[T] = None
    reason: Optional[FailureReason] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def succeeded(cls, value: T) -> "StageOutcome[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, error: StudyGenError) -> "StageOutcome[T]":
        return cls(reason=error.reason, detail=str(error))
