from __future__ import annotations

import json
import re
from typing import Any

from studygen.core.errors import MissingPayloadError, ParseError

# ``` markers, optionally followed by a language tag (```json, ```JSON, ...)
_FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*")


def strip_fences(s: str) -> str:
    return _FENCE_RE.sub("", s)


def isolate_json_object(raw_text: str) -> str:
    """
    Cut a single top-level JSON object out of model output: drop code fences,
    anything before the first "{" and anything after the last "}".
    """
    s = strip_fences(raw_text or "").strip()

    if not s.startswith("{"):
        start = s.find("{")
        if start == -1:
            raise MissingPayloadError("no '{' found in model output")
        s = s[start:]

    end = s.rfind("}")
    if end == -1:
        raise MissingPayloadError("no closing '}' found in model output")
    return s[: end + 1]


def extract_json(raw_text: str) -> Any:
    candidate = isolate_json_object(raw_text)
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"malformed JSON after boundary trimming: {e.msg} at line {e.lineno} column {e.colno}"
        ) from e
