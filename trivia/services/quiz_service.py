"""
QuizService - Lógica de una partida: elegir preguntas, corregir respuestas, resultados.

No guarda nada: recibe un QuizState (ya verificado) y devuelve uno nuevo.
"""

import random
from typing import Optional

from pydantic import BaseModel

from trivia.models.quiz import Question, QuizState
from trivia.repositories.question_repository import QuestionRepository


class QuizServiceError(Exception):
    """Base exception for quiz service errors."""
    pass


class NoQuestionsAvailableError(QuizServiceError):
    """Raised when a quiz is started with an empty question bank."""
    pass


class QuizCompletedError(QuizServiceError):
    """Raised when asking for or answering a question of a finished quiz."""
    pass


class QuestionNotFoundError(QuizServiceError):
    """Raised when the state references a question that's not in the bank."""
    pass


class InvalidAnswerError(QuizServiceError):
    """Raised when the answer index is outside the question's choices."""
    pass


class AnswerResult(BaseModel):
    """Resultado de responder una pregunta"""
    state: QuizState
    question: Question
    answer_index: Optional[int] = None
    correct: bool


class QuizResults(BaseModel):
    score: int
    total: int
    percentage: float


class QuizService:
    def __init__(self, questions: QuestionRepository):
        self.questions = questions

    def start(self, count: int, rng: Optional[random.Random] = None) -> QuizState:
        """
        Empieza una partida con `count` preguntas al azar (o todas si hay menos).

        Las preguntas quedan fijas en el estado y no se repiten.
        """
        ids = self.questions.ids()
        if not ids:
            raise NoQuestionsAvailableError("No questions available")

        rng = rng or random.Random()
        selected = rng.sample(ids, min(count, len(ids)))

        return QuizState(question_ids=selected, current_index=0, score=0)

    def current_question(self, state: QuizState) -> Question:
        """Pregunta que el jugador tiene que responder ahora"""
        if state.completed:
            raise QuizCompletedError("Invalid quiz state")

        question_id = state.question_ids[state.current_index]
        question = self.questions.get_by_id(question_id)
        if question is None:
            raise QuestionNotFoundError(f"Question ID {question_id} not found")

        return question

    def answer(self, state: QuizState, answer_index: Optional[int]) -> AnswerResult:
        """
        Corrige la respuesta a la pregunta actual y avanza.

        answer_index=None significa que se acabó el tiempo: no suma punto
        pero la partida avanza igual.
        """
        question = self.current_question(state)

        if answer_index is not None and not 0 <= answer_index < len(question.choices):
            raise InvalidAnswerError(
                f"answer must be between 0 and {len(question.choices) - 1}"
            )

        correct = answer_index is not None and answer_index == question.answer_index

        new_state = state.model_copy(update={
            "current_index": state.current_index + 1,
            "score": state.score + (1 if correct else 0),
        })

        return AnswerResult(
            state=new_state,
            question=question,
            answer_index=answer_index,
            correct=correct
        )

    def results(self, state: QuizState) -> QuizResults:
        total = state.total
        percentage = state.score / total * 100.0 if total > 0 else 0.0
        return QuizResults(score=state.score, total=total, percentage=percentage)
