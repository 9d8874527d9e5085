"""
Integration tests for Leaderboard API endpoints
"""

import json

import pytest

from trivia.main import app
from trivia.models.quiz import QuizState
from trivia.repositories.leaderboard_store import LeaderboardStore


def finished(score, total=3):
    return QuizState(question_ids=[f"q{i}" for i in range(total)], current_index=total, score=score)


class TestLeaderboardEndpoints:
    """Test suite for /quiz/leaderboard and /leaderboard."""

    @pytest.mark.asyncio
    async def test_empty_leaderboard(self, client):
        response = await client.get("/leaderboard")

        assert response.status_code == 200
        assert response.json() == {"entries": []}

    @pytest.mark.asyncio
    async def test_submit_score(self, client, signer, leaderboard_path):
        """Test POST /quiz/leaderboard then GET /leaderboard"""
        token = signer.issue(finished(2))

        response = await client.post("/quiz/leaderboard", json={
            "name": "  Alice ",
            "state": token.state,
            "signature": token.signature
        })

        assert response.status_code == 303
        assert response.headers["location"] == "/leaderboard"

        response = await client.get("/leaderboard")
        entries = response.json()["entries"]
        assert len(entries) == 1
        assert entries[0]["rank"] == 1
        assert entries[0]["name"] == "Alice"
        assert entries[0]["score"] == 2
        assert entries[0]["total"] == 3
        assert entries[0]["percentage"] == pytest.approx(66.666, rel=1e-3)

        on_disk = json.loads(leaderboard_path.read_text())
        assert on_disk[0]["name"] == "Alice"

    @pytest.mark.asyncio
    async def test_leaderboard_order(self, client, signer):
        for name, score in [("Bob", 1), ("Alice", 3), ("Carol", 1)]:
            token = signer.issue(finished(score))
            await client.post("/quiz/leaderboard", json={
                "name": name,
                "state": token.state,
                "signature": token.signature
            })

        response = await client.get("/leaderboard")

        entries = response.json()["entries"]
        assert [(e["rank"], e["name"]) for e in entries] == [(1, "Alice"), (2, "Bob"), (3, "Carol")]

    @pytest.mark.asyncio
    async def test_submit_invalid_signature(self, client, signer, leaderboard_store):
        token = signer.issue(finished(1))
        forged = token.state.replace('"score":1', '"score":3')

        response = await client.post("/quiz/leaderboard", json={
            "name": "Mallory",
            "state": forged,
            "signature": token.signature
        })

        assert response.status_code == 303
        assert response.headers["location"] == "/quiz"
        assert len(leaderboard_store) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "    ", "x" * 21])
    async def test_submit_invalid_name(self, client, signer, leaderboard_store, name):
        token = signer.issue(finished(1))

        response = await client.post("/quiz/leaderboard", json={
            "name": name,
            "state": token.state,
            "signature": token.signature
        })

        assert response.status_code == 400
        assert len(leaderboard_store) == 0

    @pytest.mark.asyncio
    async def test_submit_unfinished_quiz(self, client, signer, leaderboard_store):
        token = signer.issue(QuizState(question_ids=["q1", "q2"], current_index=1, score=1))

        response = await client.post("/quiz/leaderboard", json={
            "name": "Alice",
            "state": token.state,
            "signature": token.signature
        })

        assert response.status_code == 400
        assert len(leaderboard_store) == 0

    @pytest.mark.asyncio
    async def test_submit_persist_failure(self, client, signer, tmp_path):
        store = LeaderboardStore(str(tmp_path / "missing-dir" / "leaderboard.json"))
        app.state.leaderboard = store
        token = signer.issue(finished(3))

        response = await client.post("/quiz/leaderboard", json={
            "name": "Alice",
            "state": token.state,
            "signature": token.signature
        })

        assert response.status_code == 500
        # Kept in memory even though the write failed
        assert len(store) == 1
