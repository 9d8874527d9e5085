"""
Pytest fixtures and configuration for all tests.
"""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from trivia.core.security import QuizStateSigner
from trivia.main import app
from trivia.models.quiz import Question
from trivia.repositories.leaderboard_store import LeaderboardStore
from trivia.repositories.question_repository import QuestionRepository

TEST_SECRET = "test-secret-key"


@pytest.fixture
def signer():
    """Signer with a fixed test key."""
    return QuizStateSigner(TEST_SECRET)


@pytest.fixture
def sample_questions_data():
    """Raw question bank as it would appear in questions.json."""
    return [
        {
            "id": "q1",
            "question": "Which element is associated with Aries?",
            "choices": ["Water", "Earth", "Fire", "Air"],
            "answer_index": 2,
            "explanation": "Aries is a fire sign."
        },
        {
            "id": "q2",
            "question": "Which planet rules Leo?",
            "choices": ["The Moon", "The Sun"],
            "answer_index": 1,
            "explanation": "Leo is ruled by the Sun."
        },
        {
            "id": "q3",
            "question": "How many zodiac signs are there?",
            "choices": ["10", "12", "13"],
            "answer_index": 1,
            "explanation": "There are twelve signs."
        },
        {
            "id": "q4",
            "question": "What is the symbol of Cancer?",
            "choices": ["The Crab", "The Goat"],
            "answer_index": 0,
            "explanation": "Cancer is the crab."
        }
    ]


@pytest.fixture
def questions_file(tmp_path, sample_questions_data):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps(sample_questions_data))
    return path


@pytest.fixture
def question_repo(sample_questions_data):
    """In-memory question bank built from the sample data."""
    return QuestionRepository([Question(**q) for q in sample_questions_data])


@pytest.fixture
def leaderboard_path(tmp_path):
    return tmp_path / "leaderboard.json"


@pytest.fixture
def leaderboard_store(leaderboard_path):
    """Loaded (empty) leaderboard backed by a temp file."""
    store = LeaderboardStore(str(leaderboard_path))
    store.load()
    return store


@pytest.fixture
async def client(signer, question_repo, leaderboard_store):
    """
    HTTP client for testing API endpoints.

    The lifespan doesn't run under ASGITransport, so the shared state
    is set directly on the app.
    """
    app.state.signer = signer
    app.state.questions = question_repo
    app.state.leaderboard = leaderboard_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
