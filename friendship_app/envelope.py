"""
Единый конверт результата удалённого вызова.

Любой ответ сервиса, ошибка сети или некорректное тело приводится к одному
из двух вариантов: Success(payload) или Failure(detail). Вызывающий код
ветвится по типу конверта, а не ловит исключения транспорта.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Success:
    """Успешный ответ; payload - поле data конверта"""

    payload: Any = None


@dataclass(frozen=True)
class Failure:
    """
    Неуспешный ответ.

    Attributes:
        detail: Диагностический текст (из data конверта или синтезированный)
        status_code: HTTP код, если ответ вообще был получен
    """

    detail: Optional[str] = None
    status_code: Optional[int] = None

    def message(self, default: str) -> str:
        """Текст для пользователя: detail, а если его нет - default"""
        return self.detail or default


Envelope = Union[Success, Failure]


def failure_from_data(data: Any, status_code: Optional[int] = None) -> Failure:
    """Поле data неуспешного конверта трактуется только как текст"""
    if data is None or data == "":
        return Failure(status_code=status_code)
    return Failure(detail=str(data), status_code=status_code)
