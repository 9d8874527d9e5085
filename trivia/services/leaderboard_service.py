"""
LeaderboardService - Guarda puntajes de partidas terminadas y arma la tabla.

El LeaderboardStore bloquea (lock + escritura a disco), así que las llamadas
a record() corren en el threadpool y no en el event loop.
"""

from starlette.concurrency import run_in_threadpool

from trivia.models.leaderboard import LeaderboardEntry
from trivia.models.quiz import QuizState
from trivia.repositories.leaderboard_store import LeaderboardStore


class QuizNotFinishedError(Exception):
    """Raised when a score is submitted before the quiz is over."""
    pass


class LeaderboardService:
    def __init__(self, store: LeaderboardStore):
        self.store = store

    async def submit(self, name: str, state: QuizState) -> LeaderboardEntry:
        """
        Guarda el resultado final de una partida.

        Raises:
            QuizNotFinishedError: la partida todavía tiene preguntas
            InvalidEntryError / LeaderboardPersistError: ver LeaderboardStore.record
        """
        if not state.completed:
            raise QuizNotFinishedError("Quiz is not finished yet")

        return await run_in_threadpool(self.store.record, name, state.score, state.total)

    async def standings(self) -> list[tuple[int, LeaderboardEntry]]:
        """Entradas actuales con su posición (1-based)"""
        entries = await run_in_threadpool(self.store.snapshot)
        return [(idx + 1, entry) for idx, entry in enumerate(entries)]

    async def count(self) -> int:
        return await run_in_threadpool(len, self.store)
