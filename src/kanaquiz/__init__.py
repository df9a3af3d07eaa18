from .generator import generate
from .kana import derive_katakana, to_katakana
from .models import Pair, Question, SessionState
from .scoring import score

__all__ = [
    "Pair",
    "Question",
    "SessionState",
    "derive_katakana",
    "generate",
    "score",
    "to_katakana",
]
