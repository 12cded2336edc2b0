import pytest

from studygen.speech import enhancer
from studygen.speech.enhancer import LEAD_INS, enhance
from studygen.speech.languages import DEFAULT_LANGUAGE, LANGUAGE_CATALOG, available_languages


@pytest.mark.unit
def test_hindi_lead_in_and_pause_after_each_period():
    assert enhance("Hello. World.", "hi-IN") == "महत्वपूर्ण जानकारी: Hello. ... World. ..."


@pytest.mark.unit
def test_pauses_after_colons_semicolons_and_sentence_ends():
    assert enhance("Note: one; two! Why? Done", "en-US") == "Note: ... one; ... two! ... Why? ... Done"


@pytest.mark.unit
@pytest.mark.parametrize("text", ["Pi is 3.14 roughly", "Wait... then go", "ratio 3:2 holds"])
def test_marks_inside_words_or_numbers_are_left_alone(text):
    assert enhance(text, "en-US") == text


@pytest.mark.unit
@pytest.mark.parametrize("tag", ["es-ES", "es_ES", "ES-es", " es-ES "])
def test_lead_in_tag_matching_is_lenient(tag):
    assert enhance("Hola", tag) == LEAD_INS["es-ES"] + "Hola"


@pytest.mark.unit
@pytest.mark.parametrize("tag", ["en-US", "fr-FR", "hi", "", None])
def test_no_lead_in_for_other_languages(tag):
    assert enhance("Bonjour", tag) == "Bonjour"


@pytest.mark.unit
def test_tamil_lead_in():
    assert enhance("Vanakkam", "ta-IN").startswith(LEAD_INS["ta-IN"])


@pytest.mark.unit
def test_enhancement_failure_returns_original_text(monkeypatch):
    def boom(text):
        raise RuntimeError("regex engine exploded")

    monkeypatch.setattr(enhancer, "add_pauses", boom)
    assert enhance("Keep me. As is.", "hi-IN") == "Keep me. As is."


@pytest.mark.unit
def test_no_speech_capability_gives_default_language():
    assert available_languages(None) == [DEFAULT_LANGUAGE]


@pytest.mark.unit
def test_catalog_filtered_by_installed_voice_prefix():
    langs = available_languages(["en-GB", "hi-IN"])
    assert [l.code for l in langs] == ["en-US", "en-GB", "hi-IN"]


@pytest.mark.unit
def test_voice_locale_separators_and_case():
    assert [l.code for l in available_languages(["ES_mx"])] == ["es-ES"]


@pytest.mark.unit
def test_no_installed_voices_gives_empty_list():
    assert available_languages([]) == []


@pytest.mark.unit
def test_catalog_is_recomputed_each_call():
    assert [l.code for l in available_languages(["ja-JP"])] == ["ja-JP"]
    assert [l.code for l in available_languages(["ko-KR", "zh-TW"])] == ["ko-KR", "zh-CN"]


@pytest.mark.unit
def test_catalog_size():
    assert len(LANGUAGE_CATALOG) == 17
    assert len(available_languages([l.code for l in LANGUAGE_CATALOG])) == 17
