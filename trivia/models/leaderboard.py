from datetime import datetime, timezone
from pydantic import BaseModel, field_validator


class LeaderboardEntry(BaseModel):
    """Entrada del leaderboard (una partida terminada). Inmutable una vez creada."""

    name: str
    score: int
    total: int
    when: datetime

    class Config:
        frozen = True

    @field_validator("when")
    @classmethod
    def ensure_timezone(cls, value: datetime) -> datetime:
        # Fechas sin zona horaria se interpretan como UTC para poder compararlas
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def percentage(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.score / self.total * 100.0
