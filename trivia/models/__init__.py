from .quiz import Question, QuizState, SignedQuizState
from .leaderboard import LeaderboardEntry

__all__ = [
    "Question",
    "QuizState",
    "SignedQuizState",
    "LeaderboardEntry",
]
