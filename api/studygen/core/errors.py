from __future__ import annotations

from enum import Enum
from typing import Optional


class FailureReason(str, Enum):
    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty_response"
    PARSE = "parse"
    VALIDATION = "validation"


class StudyGenError(Exception):
    """Base class for recoverable generation failures."""

    reason: FailureReason


class ConfigurationError(StudyGenError):
    reason = FailureReason.CONFIGURATION


class TransportError(StudyGenError):
    reason = FailureReason.TRANSPORT

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(StudyGenError):
    reason = FailureReason.EMPTY_RESPONSE


class ParseError(StudyGenError):
    reason = FailureReason.PARSE


class MissingPayloadError(ParseError):
    """No JSON object boundaries were found in the model output."""


class ValidationError(StudyGenError):
    reason = FailureReason.VALIDATION
