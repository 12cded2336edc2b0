from __future__ import annotations

import logging
import re
from typing import Dict

logger = logging.getLogger("speech")

PAUSE = " ..."

# sentence end, colon or semicolon followed by whitespace or end of text;
# marks that close an ellipsis ("wait...") are left alone
_PAUSE_RE = re.compile(r"(?<!\.)([.!?:;])(?=\s|$)")

LEAD_INS: Dict[str, str] = {
    "hi-IN": "महत्वपूर्ण जानकारी: ",
    "ta-IN": "முக்கியமான தகவல்: ",
    "es-ES": "Información importante: ",
}

_LEAD_INS_BY_KEY = {code.lower(): phrase for code, phrase in LEAD_INS.items()}


def normalize_tag(language_tag: str) -> str:
    return (language_tag or "").strip().replace("_", "-").lower()


def add_pauses(text: str) -> str:
    return _PAUSE_RE.sub(lambda m: m.group(1) + PAUSE, text)


def enhance(text: str, language_tag: str) -> str:
    """
    Prepare text for speech synthesis: pacing markers after sentence ends,
    colons and semicolons, plus a lead-in phrase for a few languages.
    Returns the input unchanged if anything goes wrong.
    """
    try:
        enhanced = add_pauses(text)
        lead_in = _LEAD_INS_BY_KEY.get(normalize_tag(language_tag), "")
        return f"{lead_in}{enhanced}"
    except Exception:
        logger.exception("speech enhancement failed lang=%s", language_tag)
        return text
