"""
Shared fixtures for the kana quiz tests.
"""
import os
import tempfile

import pytest

# Keep log files and the log database out of the working tree.
_tmp_dir = tempfile.mkdtemp(prefix="kanaquiz-tests-")
os.environ["KANAQUIZ_LOG_DIR"] = os.path.join(_tmp_dir, "log")
os.environ["KANAQUIZ_DB_DIR"] = os.path.join(_tmp_dir, "db")

from fastapi.testclient import TestClient  # noqa: E402

from kanaquiz.models import Pair  # noqa: E402


@pytest.fixture
def five_pairs():
    return [
        Pair(symbol="A", translation="1"),
        Pair(symbol="B", translation="2"),
        Pair(symbol="C", translation="3"),
        Pair(symbol="D", translation="4"),
        Pair(symbol="E", translation="5"),
    ]


@pytest.fixture
def homophone_pairs():
    return [
        Pair(symbol="お", translation="ও"),
        Pair(symbol="を", translation="ও"),
        Pair(symbol="あ", translation="আ"),
        Pair(symbol="い", translation="ই"),
        Pair(symbol="う", translation="উ"),
    ]


@pytest.fixture
def zero_source():
    """Random source that always picks the lowest index."""
    return lambda: 0.0


@pytest.fixture
def top_source():
    """Random source that always picks the highest index."""
    return lambda: 0.999999


@pytest.fixture
def client():
    from kanaquiz.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
