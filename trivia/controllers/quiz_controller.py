"""
Controlador del quiz - Endpoints para jugar una partida

El progreso viaja en cada request: `state` (JSON exacto) + `signature` (HMAC en hex).
Si la firma no es válida se redirige a GET /quiz para empezar de nuevo.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from trivia.core.config import get_settings
from trivia.core.dependencies import Quiz, Signer
from trivia.core.security import QuizStateSigner
from trivia.models.quiz import Question, QuizState
from trivia.services.quiz_service import (
    AnswerResult,
    InvalidAnswerError,
    NoQuestionsAvailableError,
    QuestionNotFoundError,
    QuizCompletedError,
    QuizService
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quiz", tags=["quiz"])


class QuestionView(BaseModel):
    """Pregunta tal como la ve el jugador (sin la respuesta)."""
    id: str
    question: str
    choices: list[str]


class AnswerFeedback(BaseModel):
    """Cómo le fue al jugador con la pregunta anterior."""
    correct: bool
    correct_index: int
    explanation: str


class QuizQuestionResponse(BaseModel):
    """Pregunta actual + token de progreso para el próximo request."""
    question: QuestionView
    number: int  # 1-based, para mostrar "Pregunta 2 de 3"
    total: int
    score: int
    state: str
    signature: str
    feedback: Optional[AnswerFeedback] = None


class AnswerSubmission(BaseModel):
    """Respuesta del jugador. answer=None significa que se acabó el tiempo."""
    state: str = ""
    signature: str = ""
    answer: Optional[int] = None


class QuizResultsResponse(BaseModel):
    score: int
    total: int
    percentage: float
    state: str
    signature: str


def _restart() -> RedirectResponse:
    return RedirectResponse("/quiz", status_code=status.HTTP_303_SEE_OTHER)


def _question_response(
    quiz: QuizService,
    signer: QuizStateSigner,
    state: QuizState,
    previous: Optional[AnswerResult] = None
) -> QuizQuestionResponse:
    try:
        question = quiz.current_question(state)
    except QuestionNotFoundError as e:
        logger.error(f"❌ {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error"
        )

    token = signer.issue(state)

    feedback = None
    if previous is not None:
        feedback = _feedback(previous.question, previous.correct)

    return QuizQuestionResponse(
        question=QuestionView(
            id=question.id,
            question=question.question,
            choices=question.choices
        ),
        number=state.current_index + 1,
        total=state.total,
        score=state.score,
        state=token.state,
        signature=token.signature,
        feedback=feedback
    )


def _feedback(question: Question, correct: bool) -> AnswerFeedback:
    return AnswerFeedback(
        correct=correct,
        correct_index=question.answer_index,
        explanation=question.explanation
    )


@router.get("", response_model=QuizQuestionResponse)
async def start_quiz(quiz: Quiz, signer: Signer):
    """
    Empezar una partida nueva.

    Elige las preguntas al azar y devuelve la primera junto con el estado firmado.
    """
    settings = get_settings()

    try:
        state = quiz.start(settings.questions_per_quiz)
    except NoQuestionsAvailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )

    return _question_response(quiz, signer, state)


@router.post("", response_model=QuizQuestionResponse)
async def answer_question(submission: AnswerSubmission, quiz: Quiz, signer: Signer):
    """
    Responder la pregunta actual.

    - Firma inválida: redirect a /quiz (empezar de nuevo)
    - Quedan preguntas: devuelve la siguiente con el estado nuevo firmado
    - Era la última: redirect a /quiz/results con el estado final firmado
    """
    state, valid = signer.verify(submission.state, submission.signature)
    if not valid:
        logger.info("Invalid quiz token on answer submission, restarting quiz")
        return _restart()

    try:
        result = quiz.answer(state, submission.answer)
    except QuizCompletedError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except InvalidAnswerError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except QuestionNotFoundError as e:
        logger.error(f"❌ {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error"
        )

    if not result.state.completed:
        return _question_response(quiz, signer, result.state, previous=result)

    # Partida terminada: mando el estado final firmado a la página de resultados
    token = signer.issue(result.state)
    query = urlencode({"state": token.state, "signature": token.signature})
    return RedirectResponse(
        f"/quiz/results?{query}",
        status_code=status.HTTP_303_SEE_OTHER
    )


@router.get("/results", response_model=QuizResultsResponse)
async def get_results(
    quiz: Quiz,
    signer: Signer,
    state: str = Query("", description="Quiz state JSON"),
    signature: str = Query("", description="HMAC signature (hex)")
):
    """
    Resultado de la partida.

    Devuelve el mismo token para que el jugador pueda anotarse en el leaderboard.
    """
    quiz_state, valid = signer.verify(state, signature)
    if not valid:
        logger.info("Invalid quiz token on results, restarting quiz")
        return _restart()

    results = quiz.results(quiz_state)

    return QuizResultsResponse(
        score=results.score,
        total=results.total,
        percentage=results.percentage,
        state=state,
        signature=signature
    )
