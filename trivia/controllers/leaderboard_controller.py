"""
Controlador de leaderboard - Anotarse con un puntaje y ver la tabla
"""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from trivia.core.dependencies import Scores, Signer
from trivia.repositories.leaderboard_store import InvalidEntryError, LeaderboardPersistError
from trivia.services.leaderboard_service import QuizNotFinishedError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["leaderboard"])


class LeaderboardSubmission(BaseModel):
    """Nombre del jugador + token de la partida terminada."""
    name: str = ""
    state: str = ""
    signature: str = ""


class LeaderboardEntryResponse(BaseModel):
    """Entrada del leaderboard con su posición."""
    rank: int
    name: str
    score: int
    total: int
    percentage: float
    when: datetime


class LeaderboardResponse(BaseModel):
    entries: list[LeaderboardEntryResponse]


@router.post("/quiz/leaderboard")
async def submit_score(submission: LeaderboardSubmission, scores: Scores, signer: Signer):
    """
    Anotar el resultado de una partida terminada en el leaderboard.

    Si la firma no es válida se redirige a /quiz. Si sale bien, redirect a /leaderboard.
    """
    state, valid = signer.verify(submission.state, submission.signature)
    if not valid:
        logger.info("Invalid quiz token on leaderboard submission, restarting quiz")
        return RedirectResponse("/quiz", status_code=status.HTTP_303_SEE_OTHER)

    try:
        entry = await scores.submit(submission.name, state)
    except (InvalidEntryError, QuizNotFinishedError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except LeaderboardPersistError as e:
        # El puntaje quedó en memoria pero no en disco
        logger.error(f"❌ Error saving score: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error"
        )

    logger.info(f"✅ Score saved: {entry.name} {entry.score}/{entry.total}")
    return RedirectResponse("/leaderboard", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(scores: Scores):
    """
    Obtener el leaderboard (mejores puntajes primero).
    """
    standings = await scores.standings()

    return LeaderboardResponse(
        entries=[
            LeaderboardEntryResponse(
                rank=rank,
                name=e.name,
                score=e.score,
                total=e.total,
                percentage=e.percentage,
                when=e.when
            )
            for rank, e in standings
        ]
    )
