from typing import Mapping, Sequence

from .models import Question, QuestionResult, ScoreSummary


def score(questions: Sequence[Question], answers: Mapping[int, str]) -> int:
    """Number of questions whose recorded answer matches. Unanswered counts as wrong."""
    return sum(1 for q in questions if answers.get(q.id) == q.correct_answer)


def summarize(questions: Sequence[Question], answers: Mapping[int, str]) -> ScoreSummary:
    results = [
        QuestionResult(
            id=q.id,
            prompt=q.prompt,
            user_answer=answers.get(q.id),
            correct_answer=q.correct_answer,
            is_correct=answers.get(q.id) == q.correct_answer,
        )
        for q in questions
    ]
    correct = sum(1 for r in results if r.is_correct)
    total = len(questions)
    return ScoreSummary(
        correct_count=correct,
        total_questions=total,
        score_percentage=round((correct / total) * 100) if total > 0 else 0,
        results=results,
    )
