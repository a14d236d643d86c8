"""
Исключения клиента.

Наружу из операций не выходят: API клиент превращает их в Failure.
"""

from typing import Any, Dict, Optional


class ClientError(Exception):
    """Базовое исключение клиента"""

    error_code: str = "CLIENT_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация исключения в словарь для логов"""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class TransportError(ClientError):
    """Сервер недоступен или соединение оборвалось"""

    error_code = "TRANSPORT_ERROR"


class MalformedResponseError(ClientError):
    """Ответ не является JSON конвертом {status, data}"""

    error_code = "MALFORMED_RESPONSE"
