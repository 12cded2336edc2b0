from typing import Any, Dict, List

DIFFICULTIES = {"easy", "medium", "hard"}


def mentions_topic(text: str, topic: str) -> bool:
    return (topic or "").lower() in (text or "").lower()


def topic_mention_rate(material: Dict[str, Any]) -> float:
    """
    Share of flashcard and quiz questions that name the topic explicitly.
    """
    topic = material.get("topic", "")
    questions = [c.get("question", "") for c in material.get("flashcards", [])]
    questions += [q.get("question", "") for q in material.get("quizQuestions", [])]
    if not questions:
        return 0.0
    return sum(1 for q in questions if mentions_topic(q, topic)) / len(questions)


def difficulty_spread(material: Dict[str, Any]) -> int:
    return len({c.get("difficulty") for c in material.get("flashcards", [])} & DIFFICULTIES)


def structurally_valid(material: Dict[str, Any], max_flashcards: int = 8) -> int:
    cards = material.get("flashcards", [])
    quiz = material.get("quizQuestions", [])
    if not 1 <= len(cards) <= max_flashcards or not quiz:
        return 0
    for q in quiz:
        options: List[str] = q.get("options") or []
        if not 0 <= int(q.get("correctAnswer", -1)) < len(options):
            return 0
    return 1


def is_fallback(material: Dict[str, Any]) -> int:
    return 1 if material.get("origin") == "fallback" else 0
