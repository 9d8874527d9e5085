from pydantic import BaseModel, model_validator


class Question(BaseModel):
    """Pregunta del banco (incluye la respuesta, nunca se manda al cliente tal cual)"""

    id: str
    question: str
    choices: list[str]
    answer_index: int
    explanation: str = ""


class QuizState(BaseModel):
    """
    Progreso de una partida. Lo guarda el cliente y vuelve firmado en cada request.

    question_ids se fija al empezar y nunca se reordena.
    """

    question_ids: list[str]
    current_index: int = 0
    score: int = 0

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_bounds(self) -> "QuizState":
        if not 0 <= self.current_index <= len(self.question_ids):
            raise ValueError("current_index out of range")
        if not 0 <= self.score <= self.current_index:
            raise ValueError("score out of range")
        return self

    @property
    def total(self) -> int:
        return len(self.question_ids)

    @property
    def completed(self) -> bool:
        return self.current_index == len(self.question_ids)


class SignedQuizState(BaseModel):
    """Token de progreso: el JSON exacto del estado y su firma HMAC en hex"""

    state: str
    signature: str
