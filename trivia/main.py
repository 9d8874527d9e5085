"""
Entry point de la API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from trivia.core.config import get_settings
from trivia.core.security import QuizStateSigner
from trivia.repositories.leaderboard_store import LeaderboardLoadError, LeaderboardStore
from trivia.repositories.question_repository import QuestionBankError, QuestionRepository

from trivia.controllers.health_controller import router as health_router
from trivia.controllers.quiz_controller import router as quiz_router
from trivia.controllers.leaderboard_controller import router as leaderboard_router

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Loguea cada request con su método, path y status code.

    Ej: "POST /quiz -> 303"
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
        return response


def load_questions(path: str) -> QuestionRepository:
    """Sin preguntas la app igual arranca, pero GET /quiz devuelve 503"""
    try:
        questions = QuestionRepository.from_file(path)
    except QuestionBankError as e:
        logger.warning(f"⚠️ Failed to load questions: {e}")
        return QuestionRepository()

    logger.info(f"✅ Successfully loaded {len(questions)} questions")
    return questions


def load_leaderboard(path: str, max_size: int, max_name_length: int) -> LeaderboardStore:
    """Un leaderboard corrupto es fatal: la app no arranca hasta que se arregle o borre el archivo"""
    store = LeaderboardStore(path, max_size=max_size, max_name_length=max_name_length)
    try:
        store.load()
    except LeaderboardLoadError as e:
        logger.error(f"❌ Failed to load leaderboard: {e}")
        raise

    logger.info(f"✅ Successfully loaded leaderboard with {len(store)} entries")
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    if settings.app_env == "production" and settings.uses_default_secret:
        logger.warning("⚠️ QUIZ_SECRET is the default value, set a real secret in production")

    app.state.signer = QuizStateSigner(settings.quiz_secret)
    app.state.questions = load_questions(settings.questions_file)
    app.state.leaderboard = load_leaderboard(
        settings.leaderboard_file,
        settings.leaderboard_max_size,
        settings.max_name_length
    )
    yield

# Creo la app
app = FastAPI(
    title="Astro Trivia API",
    description="Quiz de astrología con leaderboard",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(RequestLoggingMiddleware)

# Agrego todos los routers de los controllers al app
app.include_router(health_router)
app.include_router(quiz_router)
app.include_router(leaderboard_router)


@app.get("/")
async def root():
    # Endpoint raíz, sirve para verificar que la API está levantada
    return {
        "name": "Astro Trivia API",
        "version": "1.0.0",
        "docs": "/docs"  # Link a la documentación interactiva de Swagger
    }
