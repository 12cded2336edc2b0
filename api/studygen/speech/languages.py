from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from studygen.schemas.study import LanguageDescriptor

DEFAULT_LANGUAGE = LanguageDescriptor(code="en-US", name="English (US)")

LANGUAGE_CATALOG: Tuple[LanguageDescriptor, ...] = (
    DEFAULT_LANGUAGE,
    LanguageDescriptor(code="en-GB", name="English (UK)"),
    LanguageDescriptor(code="hi-IN", name="Hindi"),
    LanguageDescriptor(code="es-ES", name="Spanish"),
    LanguageDescriptor(code="fr-FR", name="French"),
    LanguageDescriptor(code="de-DE", name="German"),
    LanguageDescriptor(code="it-IT", name="Italian"),
    LanguageDescriptor(code="pt-BR", name="Portuguese (Brazil)"),
    LanguageDescriptor(code="ru-RU", name="Russian"),
    LanguageDescriptor(code="ja-JP", name="Japanese"),
    LanguageDescriptor(code="ko-KR", name="Korean"),
    LanguageDescriptor(code="zh-CN", name="Chinese (Mandarin)"),
    LanguageDescriptor(code="ar-SA", name="Arabic"),
    LanguageDescriptor(code="ta-IN", name="Tamil"),
    LanguageDescriptor(code="te-IN", name="Telugu"),
    LanguageDescriptor(code="mr-IN", name="Marathi"),
    LanguageDescriptor(code="bn-IN", name="Bengali"),
)

_SUBTAG_SPLIT = re.compile(r"[-_]")


def primary_subtag(locale: str) -> str:
    return _SUBTAG_SPLIT.split((locale or "").strip(), maxsplit=1)[0].lower()


def available_languages(voices: Optional[Iterable[str]]) -> List[LanguageDescriptor]:
    """
    Catalog entries that at least one installed voice can speak.

    voices=None means the host has no speech capability at all, in which case
    only the default language is offered. Nothing is cached: installed voices
    can change between calls.
    """
    if voices is None:
        return [DEFAULT_LANGUAGE]

    installed = {primary_subtag(v) for v in voices if v and primary_subtag(v)}
    return [lang for lang in LANGUAGE_CATALOG if primary_subtag(lang.code) in installed]
