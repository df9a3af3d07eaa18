"""
Tests for session state transitions and the in-memory session store.
"""
from datetime import datetime, timedelta

import pytest

from kanaquiz.config import settings
from kanaquiz.exceptions import InvalidAnswerError
from kanaquiz.generator import RandomQuizGenerator
from kanaquiz.kana import CharacterSetManager
from kanaquiz.session import (
    SessionStore,
    new_session,
    regenerate,
    select_option,
    submit,
    toggle_mode,
)


@pytest.fixture
def generator(five_pairs):
    return RandomQuizGenerator(five_pairs, 5)


@pytest.fixture
def state(generator):
    return new_session("hiragana", generator)


class TestTransitions:
    def test_new_session(self, state):
        assert state.mode == "hiragana"
        assert state.total_questions == 5
        assert state.answers == {}
        assert state.score is None

    def test_select_returns_new_state(self, state):
        q = state.questions[2]
        updated = select_option(state, 2, q.options[1])

        assert updated.answers == {2: q.options[1]}
        assert state.answers == {}
        assert updated.questions == state.questions

    def test_select_overwrites(self, state):
        q = state.questions[0]
        updated = select_option(state, 0, q.options[0])
        updated = select_option(updated, 0, q.options[3])
        assert updated.answers == {0: q.options[3]}

    def test_select_unknown_question(self, state):
        with pytest.raises(InvalidAnswerError):
            select_option(state, 5, state.questions[0].options[0])

    def test_select_option_not_offered(self, state):
        with pytest.raises(InvalidAnswerError):
            select_option(state, 0, "not an option")

    def test_submit(self, state):
        for q in state.questions:
            state = select_option(state, q.id, q.correct_answer)
        submitted = submit(state)
        assert submitted.score == 5
        assert state.score is None

    def test_submit_unanswered(self, state):
        assert submit(state).score == 0

    def test_regenerate_clears_answers(self, state, generator):
        q = state.questions[0]
        state = submit(select_option(state, 0, q.correct_answer))
        fresh = regenerate(state, generator)

        assert fresh.mode == "hiragana"
        assert fresh.answers == {}
        assert fresh.score is None

    def test_toggle_mode(self):
        manager = CharacterSetManager(settings.DATA_DIR)
        hira = new_session("hiragana", RandomQuizGenerator(manager.get_pairs("hiragana"), 10))
        kata = toggle_mode(hira, manager, RandomQuizGenerator(manager.get_pairs("katakana"), 10))

        assert kata.mode == "katakana"
        assert kata.answers == {}
        katakana_symbols = {p.symbol for p in manager.get_pairs("katakana")}
        assert all(q.prompt in katakana_symbols for q in kata.questions)


class TestSessionStore:
    def test_put_assigns_id(self, state):
        store = SessionStore()
        session_id = store.put(None, state)
        assert session_id
        assert store.get(session_id) is state
        assert len(store) == 1

    def test_put_keeps_live_id(self, state):
        store = SessionStore()
        session_id = store.put(None, state)
        assert store.put(session_id, state) == session_id
        assert len(store) == 1

    def test_put_replaces_unknown_id(self, state):
        store = SessionStore()
        session_id = store.put("chosen-by-client", state)
        assert session_id != "chosen-by-client"
        assert store.get("chosen-by-client") is None
        assert store.get(session_id) is state

    def test_put_replaces_expired_id(self, state):
        store = SessionStore(timeout_minutes=5)
        old_id = store.put(None, state)
        store._sessions[old_id] = (state, datetime.now() - timedelta(minutes=10))

        new_id = store.put(old_id, state)
        assert new_id != old_id
        assert len(store) == 1

    def test_put_sweeps_expired_sessions(self, state):
        store = SessionStore(timeout_minutes=5)
        aged = datetime.now() - timedelta(days=1)
        for _ in range(30):
            session_id = store.put(None, state)
            store._sessions[session_id] = (state, aged)

        store.put(None, state)
        assert len(store) == 1

    def test_sweep_keeps_live_sessions(self, state):
        store = SessionStore(timeout_minutes=5)
        live_id = store.put(None, state)
        old_id = store.put(None, state)
        store._sessions[old_id] = (state, datetime.now() - timedelta(minutes=10))

        assert store.sweep() == 1
        assert store.get(live_id) is state

    def test_get_unknown(self):
        store = SessionStore()
        assert store.get(None) is None
        assert store.get("missing") is None

    def test_expired_session_dropped(self, state):
        store = SessionStore(timeout_minutes=5)
        session_id = store.put(None, state)
        store._sessions[session_id] = (state, datetime.now() - timedelta(minutes=10))

        assert store.get(session_id) is None
        assert len(store) == 0

    def test_discard(self, state):
        store = SessionStore()
        session_id = store.put(None, state)
        store.discard(session_id)
        store.discard("never-existed")
        assert store.get(session_id) is None
