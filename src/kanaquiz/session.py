import logging
import uuid
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from .config import settings
from .exceptions import InvalidAnswerError
from .generator import QuizGenerator
from .kana import CharacterSetManager
from .models import SessionState
from .scoring import score

logger = logging.getLogger("kanaquiz.session")


# --- State Transitions ---
def new_session(mode: str, generator: QuizGenerator) -> SessionState:
    return SessionState(
        mode=mode,
        questions=generator.generate(),
        answers={},
        score=None,
        created_at=datetime.now(),
    )


def select_option(state: SessionState, question_id: int, option: str) -> SessionState:
    if not (0 <= question_id < state.total_questions):
        raise InvalidAnswerError(f"No question with id {question_id}")
    if option not in state.questions[question_id].options:
        raise InvalidAnswerError(f"'{option}' is not an option for question {question_id}")
    answers = dict(state.answers)
    answers[question_id] = option
    return state.model_copy(update={"answers": answers})


def submit(state: SessionState) -> SessionState:
    return state.model_copy(update={"score": score(state.questions, state.answers)})


def regenerate(state: SessionState, generator: QuizGenerator) -> SessionState:
    return new_session(state.mode, generator)


def toggle_mode(
    state: SessionState, manager: CharacterSetManager, generator: QuizGenerator
) -> SessionState:
    """Discards ``state`` and starts over on the other character set.

    ``generator`` must already be built from the other mode's pairs.
    """
    return new_session(manager.other_mode(state.mode), generator)


# --- Session Store ---
class SessionStore:
    """In-memory sessions keyed by cookie value, dropped after idle timeout."""

    def __init__(self, timeout_minutes: int = settings.SESSION_TIMEOUT_MINUTES):
        self.timeout = timedelta(minutes=timeout_minutes)
        self._sessions: Dict[str, Tuple[SessionState, datetime]] = {}

    def get(self, session_id: Optional[str]) -> Optional[SessionState]:
        if not session_id or session_id not in self._sessions:
            return None
        state, last_seen = self._sessions[session_id]
        if datetime.now() - last_seen > self.timeout:
            logger.info(f"Session expired: {session_id}")
            del self._sessions[session_id]
            return None
        return state

    def put(self, session_id: Optional[str], state: SessionState) -> str:
        """Stores `state` and returns its id.

        Only a live session keeps its id; anything else gets a new uuid.
        """
        self.sweep()
        if not session_id or session_id not in self._sessions:
            session_id = str(uuid.uuid4())
        self._sessions[session_id] = (state, datetime.now())
        return session_id

    def sweep(self) -> int:
        now = datetime.now()
        expired = [
            sid for sid, (_, last_seen) in self._sessions.items()
            if now - last_seen > self.timeout
        ]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Dropped {len(expired)} expired sessions")
        return len(expired)

    def discard(self, session_id: Optional[str]):
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
