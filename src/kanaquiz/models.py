from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


# --- Models ---
class Pair(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    translation: str


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    prompt: str
    options: List[str]
    correct_answer: str


# question id -> selected option
AnswerRecord = Dict[int, str]


class SessionState(BaseModel):
    """One browser's quiz state. Never mutated; every action builds a new one."""

    model_config = ConfigDict(frozen=True)

    mode: str
    questions: List[Question]
    answers: AnswerRecord = {}
    score: Optional[int] = None
    created_at: datetime

    @property
    def total_questions(self) -> int:
        return len(self.questions)


class QuestionResult(BaseModel):
    id: int
    prompt: str
    user_answer: Optional[str]
    correct_answer: str
    is_correct: bool


class ScoreSummary(BaseModel):
    correct_count: int
    total_questions: int
    score_percentage: int
    results: List[QuestionResult]


class ModeInfo(BaseModel):
    id: str
    title: str
    count: int


class SelectRequest(BaseModel):
    question_id: int
    option: str


class ModeRequest(BaseModel):
    mode: Optional[str] = None
