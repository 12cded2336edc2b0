"""Deterministic, network-free study material.

Used whenever the model path fails. Output depends only on the topic: the
templates are fixed and nothing is randomized, so two calls with the same
topic produce identical cards.
"""
from __future__ import annotations

from typing import List, Tuple

from studygen.schemas.study import TRUE_FALSE_OPTIONS, FlashCard, QuizCard

# (question, answer, difficulty)
_FLASHCARD_TEMPLATES: Tuple[Tuple[str, str, str], ...] = (
    (
        "What is {topic} and why is it worth learning?",
        "{topic} is a body of knowledge and practice that helps you understand a problem space, "
        "make better decisions and communicate with people who work in it. Learning it gives you "
        "a foundation you can keep building on.",
        "medium",
    ),
    (
        "How would you apply {topic} to solve a real-world problem?",
        "Start by identifying the goal, then map the core ideas of {topic} onto the situation, "
        "choose the technique that fits the constraints, and check the result against the goal. "
        "Reflect on what worked so the next application is faster.",
        "hard",
    ),
    (
        "Which core principles form the foundation of {topic}?",
        "The foundation of {topic} is its key vocabulary, the main principles that connect those "
        "terms, and the standard methods practitioners use. Mastering these makes advanced "
        "material much easier to follow.",
        "medium",
    ),
    (
        "What common mistakes do beginners make when learning {topic}, and how can they be avoided?",
        "Beginners often memorize facts about {topic} without understanding how they connect, skip "
        "practice, or avoid asking questions. Regular practice, explaining ideas in your own words "
        "and seeking feedback avoid most of these mistakes.",
        "hard",
    ),
    (
        "What are the key terms someone new to {topic} should know?",
        "Someone new to {topic} should learn the names of its core concepts, the tools or methods "
        "used most often, and the outcomes those methods aim for. A short personal glossary helps.",
        "easy",
    ),
    (
        "How does studying {topic} build confidence and independent problem solving?",
        "Each concept you master in {topic} is something you can rely on when facing a new "
        "problem. Knowing the fundamentals lets you reason on your own instead of depending on "
        "others for answers.",
        "medium",
    ),
    (
        "How can {topic} be connected to other subjects or career skills?",
        "{topic} overlaps with planning, analysis, communication and decision making. Linking it to "
        "subjects you already know strengthens memory and shows where the skills transfer to work.",
        "hard",
    ),
    (
        "How can you use your knowledge of {topic} to help others learn?",
        "Explaining {topic} to others, sharing resources and mentoring newcomers reinforces your own "
        "understanding while building a community of learners around the subject.",
        "medium",
    ),
)

# (question, type, options, correct index, explanation, difficulty)
_QUIZ_TEMPLATES: Tuple[Tuple[str, str, Tuple[str, ...], int, str, str], ...] = (
    (
        "{topic} is a subject that rewards steady practice and study.",
        "true_false",
        TRUE_FALSE_OPTIONS,
        1,
        "True. Like most skills, {topic} improves with regular practice and review.",
        "easy",
    ),
    (
        "What is the primary benefit of learning {topic}?",
        "multiple_choice",
        (
            "Entertainment value only",
            "Practical knowledge and skills you can apply",
            "No significant benefit",
            "Purely academic interest",
        ),
        1,
        "Learning {topic} mainly provides practical knowledge and skills that can be applied.",
        "medium",
    ),
    (
        "Understanding the fundamentals of {topic} makes advanced material harder to follow.",
        "true_false",
        TRUE_FALSE_OPTIONS,
        0,
        "False. A solid grasp of the fundamentals of {topic} makes advanced material easier.",
        "medium",
    ),
    (
        "Which skill is most developed through studying {topic}?",
        "multiple_choice",
        ("Critical thinking", "Physical strength", "Artistic ability", "Musical talent"),
        0,
        "Studying {topic} primarily develops critical thinking and analytical skills.",
        "hard",
    ),
)

_SUMMARY_TEMPLATE = (
    "{topic} is a valuable subject that builds practical skills and knowledge. "
    "Understanding {topic} starts with its core principles and key terms, then moves to applying "
    "them to real problems and connecting them with other subjects. Regular practice, reflection "
    "and teaching others turn that knowledge into confidence and independent problem solving."
)

_DEFAULT_SUMMARY_TEMPLATE = (
    "Master {topic} to build practical knowledge and open new opportunities for growth."
)


def synthesize_flashcards(topic: str) -> List[FlashCard]:
    return [
        FlashCard(
            question=q.format(topic=topic),
            answer=a.format(topic=topic),
            difficulty=difficulty,
        )
        for q, a, difficulty in _FLASHCARD_TEMPLATES
    ]


def synthesize_quiz(topic: str) -> List[QuizCard]:
    return [
        QuizCard(
            question=q.format(topic=topic),
            type=qtype,
            options=list(options),
            correct_answer=correct,
            explanation=explanation.format(topic=topic),
            difficulty=difficulty,
        )
        for q, qtype, options, correct, explanation, difficulty in _QUIZ_TEMPLATES
    ]


def synthesize_summary(topic: str) -> str:
    return _SUMMARY_TEMPLATE.format(topic=topic)


def default_summary(topic: str) -> str:
    """Summary used when the model returns flashcards without one."""
    return _DEFAULT_SUMMARY_TEMPLATE.format(topic=topic)
