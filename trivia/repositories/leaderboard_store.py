"""
LeaderboardStore - Leaderboard en memoria persistido en un archivo JSON.

Hay una sola instancia por proceso (se crea en el lifespan de la app).
Todas las lecturas y escrituras pasan por el lock; no hay camino sin lock.

Si falla la escritura a disco, la entrada queda igual en memoria: memoria y
archivo pueden quedar distintos hasta la próxima escritura exitosa.
"""

import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import TypeAdapter, ValidationError

from trivia.models.leaderboard import LeaderboardEntry

logger = logging.getLogger(__name__)

MAX_LEADERBOARD_SIZE = 20
MAX_NAME_LENGTH = 20

_entries_adapter = TypeAdapter(list[LeaderboardEntry])


class LeaderboardStoreError(Exception):
    """Base exception for leaderboard store errors."""
    pass


class LeaderboardLoadError(LeaderboardStoreError):
    """Raised when the leaderboard file exists but can't be read or parsed."""
    pass


class LeaderboardPersistError(LeaderboardStoreError):
    """Raised when the leaderboard can't be written to disk."""
    pass


class InvalidEntryError(LeaderboardStoreError):
    """Raised when a score submission has an invalid name, score or total."""
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def rank_entries(entries: list[LeaderboardEntry], limit: int) -> list[LeaderboardEntry]:
    """
    Ordena por score descendente y, en empate, por fecha ascendente
    (el que llegó primero queda arriba). Después corta a `limit`.

    sorted() es estable, así que entradas idénticas mantienen su orden.
    """
    ranked = sorted(entries, key=lambda e: (-e.score, e.when))
    return ranked[:limit]


class LeaderboardStore:
    def __init__(
        self,
        path: str,
        max_size: int = MAX_LEADERBOARD_SIZE,
        max_name_length: int = MAX_NAME_LENGTH,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.path = path
        self.max_size = max_size
        self.max_name_length = max_name_length
        self._clock = clock or _utcnow
        self._lock = threading.Lock()
        self._entries: list[LeaderboardEntry] = []

    def load(self) -> None:
        """
        Carga el leaderboard desde disco.

        - Si el archivo no existe: arranca vacío y escribe "[]" enseguida.
        - Si no existe y no se puede crear, o existe pero no se puede
          leer/parsear: LeaderboardLoadError
          (no queremos correr con datos corruptos).
        """
        with self._lock:
            try:
                with open(self.path, "rb") as f:
                    data = f.read()
            except FileNotFoundError:
                self._entries = []
                try:
                    self._write()
                except LeaderboardPersistError as e:
                    raise LeaderboardLoadError(
                        f"failed to create leaderboard file {self.path}: {e}"
                    ) from e
                logger.info(f"Created empty leaderboard file at {self.path}")
                return
            except OSError as e:
                raise LeaderboardLoadError(
                    f"failed to read leaderboard file {self.path}: {e}"
                ) from e

            try:
                entries = _entries_adapter.validate_json(data)
            except ValidationError as e:
                raise LeaderboardLoadError(
                    f"failed to parse leaderboard file {self.path}: {e}"
                ) from e

            self._entries = rank_entries(entries, self.max_size)

    def record(self, name: str, score: int, total: int) -> LeaderboardEntry:
        """
        Agrega un score al leaderboard.

        Todo pasa con el lock tomado: agregar, reordenar, truncar y escribir
        a disco. Dos submits simultáneos nunca se mezclan.

        Raises:
            InvalidEntryError: nombre vacío o muy largo, score/total negativos
            LeaderboardPersistError: no se pudo escribir el archivo
                (la entrada igual queda en memoria)
        """
        name = (name or "").strip()
        if not name:
            raise InvalidEntryError("Name cannot be empty")
        if len(name) > self.max_name_length:
            raise InvalidEntryError(
                f"Name must be {self.max_name_length} characters or less"
            )
        if score < 0 or total < 0:
            raise InvalidEntryError("Score and total must be non-negative")

        with self._lock:
            entry = LeaderboardEntry(name=name, score=score, total=total, when=self._clock())
            self._entries = rank_entries(self._entries + [entry], self.max_size)
            self._write()

        return entry

    def snapshot(self) -> list[LeaderboardEntry]:
        """Copia de las entradas actuales (las entradas son inmutables)"""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _write(self) -> None:
        """
        Escribe la lista completa (JSON con indentación) de forma atómica:
        archivo temporal en el mismo directorio + os.replace.

        Se llama siempre con el lock tomado.
        """
        data = _entries_adapter.dump_json(self._entries, indent=2)
        directory = os.path.dirname(os.path.abspath(self.path))

        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".leaderboard.", dir=directory)
        except OSError as e:
            raise LeaderboardPersistError(
                f"failed to write leaderboard file {self.path}: {e}"
            ) from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise LeaderboardPersistError(
                f"failed to write leaderboard file {self.path}: {e}"
            ) from e
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
