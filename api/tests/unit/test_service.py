import json

import httpx
import pytest

from studygen.generation.fallback import (
    default_summary,
    synthesize_flashcards,
    synthesize_quiz,
    synthesize_summary,
)
from studygen.speech.enhancer import LEAD_INS
from studygen.studio.service import StudyMaterialService

from fakes.llm_payloads import completion, error_response, flashcard_items, flashcards_json, quiz_json
from fakes.mock_llm import ScriptedLLM, make_settings


def _user_prompt(body):
    return next(m["content"] for m in body["messages"] if m["role"] == "user")


async def _generate(script, settings, topic="Photosynthesis", **kwargs):
    async with script.client() as client:
        service = StudyMaterialService(settings, client=client)
        return await service.generate_flashcards(topic, **kwargs)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_model_path_uses_two_calls_and_chains_summary(settings):
    script = ScriptedLLM(completion(flashcards_json(n=6)), completion(quiz_json()))
    material = await _generate(script, settings)

    assert material.origin == "model"
    assert material.topic == "Photosynthesis"
    assert len(material.flashcards) == 6
    assert len(material.quiz_questions) == 2
    assert material.summary == "SUMMARY-MARKER"
    assert material.audio_summary is None

    assert len(script.requests) == 2
    flash_body, quiz_body = script.bodies
    assert flash_body["temperature"] == 0.8
    assert flash_body["max_tokens"] == 2000
    assert flash_body["presence_penalty"] == 0.2
    assert flash_body["frequency_penalty"] == 0.3
    assert quiz_body["temperature"] == 0.7
    assert quiz_body["max_tokens"] == 1500
    assert "presence_penalty" not in quiz_body
    assert "SUMMARY-MARKER" in _user_prompt(quiz_body)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_true_false_without_options_gets_default_pair(settings):
    script = ScriptedLLM(completion(flashcards_json()), completion(quiz_json()))
    material = await _generate(script, settings)
    assert material.quiz_questions[0].options == ["False", "True"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_extra_flashcards_are_truncated(settings):
    script = ScriptedLLM(completion(flashcards_json(n=10)), completion(quiz_json()))
    material = await _generate(script, settings)
    assert len(material.flashcards) == 8
    assert material.flashcards[-1].question == "Question 8 about Photosynthesis?"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fenced_reply_with_prose_is_accepted(settings):
    card = {"question": "What is ATP?", "answer": "Energy currency.", "difficulty": "easy"}
    reply = "Sure! Here you go:\n```json\n" + json.dumps({"flashcards": [card], "summary": "S"}) + "\n```\nEnjoy."
    script = ScriptedLLM(completion(reply), completion(quiz_json()))
    material = await _generate(script, settings)

    assert material.origin == "model"
    assert [c.question for c in material.flashcards] == ["What is ATP?"]
    assert material.summary == "S"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_summary_uses_default(settings):
    script = ScriptedLLM(completion(flashcards_json(summary=None)), completion(quiz_json()))
    material = await _generate(script, settings)
    assert material.summary == default_summary("Photosynthesis")
    assert default_summary("Photosynthesis") in _user_prompt(script.bodies[1])


@pytest.mark.unit
@pytest.mark.asyncio
async def test_quiz_failure_keeps_model_flashcards(settings):
    script = ScriptedLLM(completion(flashcards_json()), completion("no json here at all"))
    material = await _generate(script, settings)

    assert material.origin == "partial_fallback"
    assert material.flashcards[0].question == "Question 1 about Photosynthesis?"
    assert material.summary == "SUMMARY-MARKER"
    assert material.quiz_questions == synthesize_quiz("Photosynthesis")


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "quiz_reply",
    [
        {"choices": [{"message": "plain string"}]},
        {"choices": {"first": {}}},
        {"choices": [{"message": {"content": None}}]},
        ["not", "an", "object"],
    ],
)
async def test_malformed_quiz_response_gives_partial_fallback(settings, quiz_reply):
    script = ScriptedLLM(completion(flashcards_json()), httpx.Response(200, json=quiz_reply))
    material = await _generate(script, settings, topic="Chess")

    assert material.origin == "partial_fallback"
    assert len(material.flashcards) == 6
    assert material.quiz_questions == synthesize_quiz("Chess")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_flashcard_transport_failure_skips_quiz_call(settings):
    script = ScriptedLLM(error_response(500))
    material = await _generate(script, settings, topic="Negotiation Skills")

    assert len(script.requests) == 1
    assert material.origin == "fallback"
    assert material.flashcards == synthesize_flashcards("Negotiation Skills")
    assert material.quiz_questions == synthesize_quiz("Negotiation Skills")
    assert material.summary == synthesize_summary("Negotiation Skills")
    assert all("Negotiation Skills" in c.question for c in material.flashcards)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_key_falls_back_without_any_request(keyless_settings):
    script = ScriptedLLM()
    material = await _generate(script, keyless_settings)
    assert script.requests == []
    assert material.origin == "fallback"


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "first",
    [
        completion("I cannot help with that."),
        completion('{"flashcards": [ {"question": "Q"'),
        completion(json.dumps({"flashcards": flashcard_items("X", 2)[:1] + [{"question": "Q", "answer": "A"}]})),
        completion(json.dumps({"cards": flashcard_items("X", 3)})),
        completion(""),
        httpx.Response(200, text="not json"),
        httpx.ConnectTimeout("timed out"),
        httpx.Response(200, json={"choices": [{"message": "plain string"}]}),
        httpx.Response(200, json={"choices": {"first": {}}}),
        httpx.Response(200, json={"choices": [{"message": {"content": "{}"}}], "usage": ["x"]}),
        httpx.Response(200, json=["not", "an", "object"]),
    ],
)
async def test_any_flashcard_stage_failure_gives_full_fallback(settings, first):
    script = ScriptedLLM(first)
    material = await _generate(script, settings, topic="Statistics")
    assert material.origin == "fallback"
    assert len(script.requests) == 1
    assert material.flashcards == synthesize_flashcards("Statistics")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_fallback_material_gets_audio_summary(keyless_settings):
    material = await _generate(ScriptedLLM(), keyless_settings, audio_language="hi-IN")
    assert material.audio_summary.startswith(LEAD_INS["hi-IN"])


@pytest.mark.unit
@pytest.mark.asyncio
async def test_audio_summary_for_model_material(settings):
    script = ScriptedLLM(completion(flashcards_json(summary="Light. Water.")), completion(quiz_json()))
    material = await _generate(script, settings, audio_language="en-US")
    assert material.audio_summary == "Light. ... Water. ..."


@pytest.mark.unit
@pytest.mark.asyncio
async def test_source_content_is_truncated_in_request():
    settings = make_settings(source_content_max_chars=50)
    script = ScriptedLLM(completion(flashcards_json()), completion(quiz_json()))
    await _generate(script, settings, source_content="x" * 50 + "y" * 10)
    prompt = _user_prompt(script.bodies[0])
    assert "x" * 50 in prompt
    assert "xy" not in prompt


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("topic", ["", "   ", None])
async def test_blank_topic_is_rejected(settings, topic):
    script = ScriptedLLM()
    with pytest.raises(ValueError):
        await _generate(script, settings, topic=topic)
    assert script.requests == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_topic_is_trimmed(settings):
    script = ScriptedLLM(completion(flashcards_json()), completion(quiz_json()))
    material = await _generate(script, settings, topic="  Photosynthesis  ")
    assert material.topic == "Photosynthesis"


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "responses",
    [
        (),
        (error_response(503),),
        (completion("garbage"),),
        (completion(flashcards_json()), error_response(429)),
        (completion(flashcards_json()), completion('{"questions": []}')),
        (completion(flashcards_json()), completion(quiz_json())),
    ],
)
async def test_generation_always_returns_usable_material(settings, responses):
    material = await _generate(ScriptedLLM(*responses), settings if responses else make_settings(llm_api_key=""))
    assert material.flashcards
    assert material.quiz_questions
    assert material.summary
    for q in material.quiz_questions:
        assert 0 <= q.correct_answer < len(q.options)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_generate_quiz_questions_directly(settings):
    script = ScriptedLLM(completion(quiz_json()))
    async with script.client() as client:
        quiz = await StudyMaterialService(settings, client=client).generate_quiz_questions(
            "Photosynthesis", "Plants make sugar."
        )
    assert len(quiz) == 2
    assert "Plants make sugar." in _user_prompt(script.bodies[0])


@pytest.mark.unit
@pytest.mark.asyncio
async def test_generate_quiz_questions_falls_back(settings):
    script = ScriptedLLM(error_response(500))
    async with script.client() as client:
        quiz = await StudyMaterialService(settings, client=client).generate_quiz_questions("Chess", "S")
    assert quiz == synthesize_quiz("Chess")


@pytest.mark.unit
def test_sync_helpers(settings):
    service = StudyMaterialService(settings)
    assert service.generate_audio_summary("Hi. There.", "es-ES") == LEAD_INS["es-ES"] + "Hi. ... There. ..."
    assert service.generate_audio_summary("Plain") == "Plain"
    assert [l.code for l in service.get_available_languages(["ta-IN"])] == ["ta-IN"]
    assert len(service.get_offline_aptitude_questions()) == 10
    assert service.grade_offline_answers([None] * 10).score == 0
