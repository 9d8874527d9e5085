from .leaderboard_store import LeaderboardStore
from .question_repository import QuestionRepository

__all__ = [
    "LeaderboardStore",
    "QuestionRepository",
]
