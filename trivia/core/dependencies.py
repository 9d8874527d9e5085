"""
Dependencies de FastAPI para inyectar el banco de preguntas, el leaderboard y el firmador

Los tres se crean una sola vez en el lifespan y viven en app.state.
"""

from typing import Annotated

from fastapi import Depends, Request

from trivia.core.security import QuizStateSigner
from trivia.repositories.leaderboard_store import LeaderboardStore
from trivia.repositories.question_repository import QuestionRepository
from trivia.services.leaderboard_service import LeaderboardService
from trivia.services.quiz_service import QuizService


def get_signer(request: Request) -> QuizStateSigner:
    return request.app.state.signer


def get_question_repository(request: Request) -> QuestionRepository:
    return request.app.state.questions


def get_leaderboard_store(request: Request) -> LeaderboardStore:
    return request.app.state.leaderboard


def get_quiz_service(
    questions: Annotated[QuestionRepository, Depends(get_question_repository)]
) -> QuizService:
    return QuizService(questions)


def get_leaderboard_service(
    store: Annotated[LeaderboardStore, Depends(get_leaderboard_store)]
) -> LeaderboardService:
    return LeaderboardService(store)


# Alias de tipos para que se vea mas limpio en los endpoints
Signer = Annotated[QuizStateSigner, Depends(get_signer)]
Questions = Annotated[QuestionRepository, Depends(get_question_repository)]
Quiz = Annotated[QuizService, Depends(get_quiz_service)]
Scores = Annotated[LeaderboardService, Depends(get_leaderboard_service)]
