"""
QuestionRepository - Banco de preguntas cargado desde un archivo JSON.

Se carga una vez al arrancar y después es de solo lectura.
"""

from typing import Optional

from pydantic import TypeAdapter, ValidationError

from trivia.models.quiz import Question

_questions_adapter = TypeAdapter(list[Question])


class QuestionBankError(Exception):
    """Raised when the questions file can't be read, parsed or validated."""
    pass


class QuestionRepository:
    def __init__(self, questions: Optional[list[Question]] = None):
        self._questions = list(questions or [])
        self._by_id = {q.id: q for q in self._questions}

    @classmethod
    def from_file(cls, path: str) -> "QuestionRepository":
        """
        Carga y valida las preguntas.

        Cada pregunta debe tener answer_index dentro del rango de choices.
        Lanza QuestionBankError si algo está mal.
        """
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise QuestionBankError(f"failed to read questions file: {e}") from e

        try:
            questions = _questions_adapter.validate_json(data)
        except ValidationError as e:
            raise QuestionBankError(f"failed to parse questions JSON: {e}") from e

        for i, q in enumerate(questions):
            if q.answer_index < 0:
                raise QuestionBankError(
                    f"question {i} (id: {q.id}) has invalid answer_index: "
                    f"{q.answer_index} (must be >= 0)"
                )
            if q.answer_index >= len(q.choices):
                raise QuestionBankError(
                    f"question {i} (id: {q.id}) has invalid answer_index: "
                    f"{q.answer_index} (must be < {len(q.choices)} choices)"
                )

        return cls(questions)

    def get_by_id(self, question_id: str) -> Optional[Question]:
        """Get question by ID."""
        return self._by_id.get(question_id)

    def ids(self) -> list[str]:
        return [q.id for q in self._questions]

    def __len__(self) -> int:
        return len(self._questions)
