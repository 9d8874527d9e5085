"""
Controlador de salud - Endpoint de comprobación del servicio
"""

from fastapi import APIRouter
from pydantic import BaseModel

from trivia.core.dependencies import Questions, Scores


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Respuesta del chequeo de estado."""
    status: str
    questions: int
    leaderboard_entries: int


@router.get("/health", response_model=HealthResponse)
async def health_check(questions: Questions, scores: Scores):
    """
    Endpoint de verificación de estado.

    Comprueba que la API esté en funcionamiento y cuántas preguntas y entradas hay cargadas.
    """
    return HealthResponse(
        status="ok",
        questions=len(questions),
        leaderboard_entries=await scores.count()
    )
