from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class PromptPair:
    system: str
    user: str

    def as_messages(self) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


def _require_topic(topic: str) -> str:
    topic = (topic or "").strip()
    if not topic:
        raise ValueError("topic must not be empty")
    return topic


def build_flashcard_prompts(
    topic: str,
    source_content: Optional[str] = None,
    count: int = 6,
    max_source_chars: int = 2000,
) -> PromptPair:
    """
    Flashcard stage prompts. Source content is cut to max_source_chars so the
    prompt size stays bounded.
    """
    topic = _require_topic(topic)

    system = f"""You are an expert educator who writes accurate, focused flashcards.

Rules you MUST follow:
1) Every question must be specifically about "{topic}" and mention it explicitly.
2) Each question tests one concrete piece of knowledge about {topic}.
3) Answers are clear and educational, with an example where it helps.
4) Create exactly {count} flashcards with a spread of difficulty levels.
5) Respond with ONLY valid JSON. No markdown, no commentary.

JSON format:
{{
  "flashcards": [
    {{"question": "Question about {topic}", "answer": "Answer", "difficulty": "easy|medium|hard"}}
  ],
  "summary": "A short paragraph summarizing {topic} and why it matters"
}}"""

    source = (source_content or "").strip()
    if source:
        excerpt = source[:max_source_chars]
        focus = (
            f'Based on this content about "{topic}":\n{excerpt}\n\n'
            "Create flashcards that help the learner understand this specific content."
        )
    else:
        focus = (
            f'Create educational flashcards specifically about "{topic}". '
            f"Each question must test specific knowledge about {topic}."
        )

    user = f"""{focus}

TOPIC:
{topic}

Create {count} unique flashcards that directly test knowledge of "{topic}".
JSON:
"""
    return PromptPair(system=system, user=user)


def build_quiz_prompts(topic: str, summary: str, count: int = 6) -> PromptPair:
    topic = _require_topic(topic)
    true_false = count // 2
    multiple_choice = count - true_false

    system = (
        "You generate engaging True/False and Multiple Choice quiz questions. "
        f"Create exactly {count} questions, each one explicitly about \"{topic}\". "
        "Always respond with valid JSON only."
    )

    user = f"""Create quiz questions about "{topic}" based on this summary:
{(summary or "").strip()}

Create exactly {count} questions:
- {true_false} true_false questions (options are always ["False", "True"])
- {multiple_choice} multiple_choice questions with 4 options

correctAnswer is the zero-based index of the correct option.

JSON format:
{{
  "questions": [
    {{
      "question": "Statement about {topic} to judge as true or false",
      "type": "true_false",
      "options": ["False", "True"],
      "correctAnswer": 1,
      "explanation": "Why the statement is true or false",
      "difficulty": "easy"
    }},
    {{
      "question": "Question about {topic}?",
      "type": "multiple_choice",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correctAnswer": 2,
      "explanation": "Why option C is correct",
      "difficulty": "medium"
    }}
  ]
}}
"""
    return PromptPair(system=system, user=user)
