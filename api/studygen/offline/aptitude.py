"""Static aptitude question bank for practice without network access."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from studygen.schemas.study import GradedAnswer, OfflineGradeResult, OfflineQuizQuestion

OFFLINE_APTITUDE_QUESTIONS: Tuple[OfflineQuizQuestion, ...] = (
    OfflineQuizQuestion(
        question="What comes next in the series 2, 6, 12, 20, 30, ...?",
        options=["40", "42", "44", "48"],
        correct_answer=1,
        category="reasoning",
        difficulty="easy",
        explanation="The differences grow by 2 each step (4, 6, 8, 10), so the next difference is 12 and 30 + 12 = 42.",
    ),
    OfflineQuizQuestion(
        question="The price of an item rises from 400 to 500. What is the percentage increase?",
        options=["15%", "20%", "30%", "25%"],
        correct_answer=3,
        category="quantitative",
        difficulty="easy",
        explanation="The increase is 100 on a base of 400, and 100 / 400 = 25%.",
    ),
    OfflineQuizQuestion(
        question="A can finish a job in 10 days and B can finish it in 15 days. How long do they take working together?",
        options=["5 days", "8 days", "6 days", "12.5 days"],
        correct_answer=2,
        category="quantitative",
        difficulty="medium",
        explanation="Together they complete 1/10 + 1/15 = 1/6 of the job per day, so they need 6 days.",
    ),
    OfflineQuizQuestion(
        question="You walk 5 km north, turn right and walk 3 km, then turn right again and walk 5 km. Where are you relative to the start?",
        options=["3 km east", "3 km west", "5 km north", "8 km south"],
        correct_answer=0,
        category="reasoning",
        difficulty="easy",
        explanation="The two 5 km legs cancel out (north then south), leaving the 3 km walked east.",
    ),
    OfflineQuizQuestion(
        question="Pointing to a man, Riya says: \"He is the son of my grandfather's only son.\" How is the man related to Riya?",
        options=["Cousin", "Uncle", "Brother", "Father"],
        correct_answer=2,
        category="reasoning",
        difficulty="medium",
        explanation="Her grandfather's only son is her father, and her father's son is her brother.",
    ),
    OfflineQuizQuestion(
        question="What is the angle between the hour and minute hands of a clock at 3:30?",
        options=["60°", "75°", "90°", "105°"],
        correct_answer=1,
        category="reasoning",
        difficulty="medium",
        explanation="The minute hand is at 180°, the hour hand at 3 × 30° + 15° = 105°, so the angle is 75°.",
    ),
    OfflineQuizQuestion(
        question="A boat moves at 12 km/h in still water and the stream flows at 3 km/h. How long does it take to travel 45 km downstream?",
        options=["2 hours", "4 hours", "5 hours", "3 hours"],
        correct_answer=3,
        category="quantitative",
        difficulty="easy",
        explanation="Downstream speed is 12 + 3 = 15 km/h, and 45 / 15 = 3 hours.",
    ),
    OfflineQuizQuestion(
        question="In how many distinct ways can the letters of the word LEVEL be arranged?",
        options=["30", "60", "120", "20"],
        correct_answer=0,
        category="quantitative",
        difficulty="hard",
        explanation="5 letters with L and E each repeated twice: 5! / (2! × 2!) = 120 / 4 = 30.",
    ),
    OfflineQuizQuestion(
        question="The average of 5 numbers is 20. After removing one number the average of the rest is 18. Which number was removed?",
        options=["22", "24", "28", "30"],
        correct_answer=2,
        category="quantitative",
        difficulty="medium",
        explanation="The total drops from 5 × 20 = 100 to 4 × 18 = 72, so the removed number is 28.",
    ),
    OfflineQuizQuestion(
        question="720 is divided in the ratio 4 : 5. What is the larger part?",
        options=["320", "360", "400", "450"],
        correct_answer=2,
        category="quantitative",
        difficulty="easy",
        explanation="One share is 720 / 9 = 80, so the larger part is 5 × 80 = 400.",
    ),
)


def offline_questions(
    category: Optional[str] = None, difficulty: Optional[str] = None
) -> List[OfflineQuizQuestion]:
    """Bank questions in bank order, optionally narrowed to one category and/or difficulty."""
    return [
        q
        for q in OFFLINE_APTITUDE_QUESTIONS
        if (category is None or q.category == category)
        and (difficulty is None or q.difficulty == difficulty)
    ]


def grade_answers(
    answers: Sequence[Optional[int]],
    questions: Sequence[OfflineQuizQuestion] = OFFLINE_APTITUDE_QUESTIONS,
) -> OfflineGradeResult:
    """
    Score selected option indices against the bank. None marks a skipped
    question and scores zero.
    """
    if len(answers) != len(questions):
        raise ValueError(f"expected {len(questions)} answers, got {len(answers)}")

    results: List[GradedAnswer] = []
    for i, (selected, q) in enumerate(zip(answers, questions)):
        if selected is not None and not 0 <= selected < len(q.options):
            raise ValueError(f"answer {i} is out of range: {selected}")
        results.append(
            GradedAnswer(
                index=i,
                selected=selected,
                correct_answer=q.correct_answer,
                correct=selected == q.correct_answer,
            )
        )

    return OfflineGradeResult(
        score=sum(1 for r in results if r.correct),
        total=len(questions),
        results=results,
    )
