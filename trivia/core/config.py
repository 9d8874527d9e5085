"""
Configuración de la app cargada desde variables de entorno (.env)

Todo lo que varía entre desarrollo/producción va aquí
"""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings


DEFAULT_QUIZ_SECRET = "astrology-quiz-secret-key-change-in-production"


class Settings(BaseSettings):
    # Firma del estado del quiz - el cliente guarda su progreso y nosotros lo firmamos
    quiz_secret: str = DEFAULT_QUIZ_SECRET  # Cambiar SIEMPRE en producción

    # Archivos de datos
    questions_file: str = "questions.json"  # Banco de preguntas
    leaderboard_file: str = "leaderboard.json"  # Se crea vacío si no existe

    # Reglas del juego
    leaderboard_max_size: int = Field(20, gt=0)  # Entradas que sobreviven en el leaderboard
    questions_per_quiz: int = Field(3, gt=0)  # Preguntas por partida
    max_name_length: int = Field(20, gt=0)  # Largo máximo del nombre (después de strip)

    # Servidor
    host: str = "0.0.0.0"
    port: int = 8080

    # App
    app_env: str = "development"  # o "production"
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"  # Lee desde el archivo .env
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignora campos extras del .env que no estén en el modelo

    @property
    def uses_default_secret(self) -> bool:
        return self.quiz_secret == DEFAULT_QUIZ_SECRET


@lru_cache()
def get_settings() -> Settings:
    """Retorna la instancia de configuración (cacheada para no releerla)"""
    return Settings()
