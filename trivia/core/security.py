"""
Seguridad: Firma y verificación del estado del quiz

No hay sesiones en el servidor. El cliente guarda su progreso (QuizState en JSON)
junto con una firma HMAC-SHA256 y nos devuelve las dos cosas en cada request.
Si alguien toca un solo byte del JSON o de la firma, la verificación falla.
"""

import binascii
import hashlib
import hmac
import logging
from typing import Optional, Union

from pydantic import ValidationError

from trivia.models.quiz import QuizState, SignedQuizState

logger = logging.getLogger(__name__)


class QuizStateSigner:
    """
    Firma y verifica QuizState con una clave secreta del servidor.

    La clave no cambia después de crear el objeto, así que se puede usar
    desde varios threads sin lock.
    """

    def __init__(self, secret: Union[str, bytes]):
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not secret:
            raise ValueError("quiz secret must not be empty")
        self._key = secret

    def serialize(self, state: QuizState) -> str:
        """
        JSON canónico del estado: orden de campos fijo y sin espacios.

        Dos estados iguales siempre producen exactamente el mismo texto.
        """
        return state.model_dump_json()

    def _digest(self, data: bytes) -> bytes:
        return hmac.new(self._key, data, hashlib.sha256).digest()

    def sign(self, state: QuizState) -> str:
        """Firma HMAC-SHA256 del estado serializado, en hex (64 caracteres)"""
        return self._digest(self.serialize(state).encode("utf-8")).hex()

    def issue(self, state: QuizState) -> SignedQuizState:
        """Serializa y firma el estado: lo que se le entrega al cliente"""
        raw = self.serialize(state)
        return SignedQuizState(
            state=raw,
            signature=self._digest(raw.encode("utf-8")).hex()
        )

    def verify(
        self,
        raw_state: Union[str, bytes, None],
        signature: Optional[str]
    ) -> tuple[Optional[QuizState], bool]:
        """
        Verifica la firma sobre los bytes EXACTOS que mandó el cliente.

        Retorna (estado, True) si es válido, (None, False) en cualquier otro caso.
        Nunca lanza excepciones por datos del cliente.

        Orden importante:
        1. Decodificar la firma hex (si falla, no se hace nada más)
        2. Recalcular el HMAC sobre raw_state tal como llegó (sin re-serializar)
        3. Comparar en tiempo constante (hmac.compare_digest)
        4. Recién ahí parsear el JSON
        """
        if raw_state is None or signature is None:
            return None, False

        try:
            provided = binascii.unhexlify(signature)
        except (binascii.Error, ValueError):
            return None, False

        if isinstance(raw_state, str):
            try:
                data = raw_state.encode("utf-8")
            except UnicodeEncodeError:
                return None, False
        else:
            data = bytes(raw_state)

        expected = self._digest(data)
        if not hmac.compare_digest(provided, expected):
            return None, False

        try:
            state = QuizState.model_validate_json(data)
        except ValidationError:
            # La firma coincide pero el contenido no es un estado válido
            logger.warning("Quiz state with valid signature failed to parse")
            return None, False

        return state, True
