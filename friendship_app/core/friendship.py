"""
Контроллер состояния дружбы.

Держит локальные копии списка друзей и входящих запросов и меняет их
только после подтверждения сервера: сначала дожидаемся конверта, потом
правим список. Неуспешный ответ оставляет списки без изменений, поэтому
локальная картина никогда не расходится с сервером из-за ошибки.

Одновременно запущенные операции не сериализуются: кто позже получил
ответ, тот и записал список последним.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from friendship_app.api_client import APIClient
from friendship_app.constants import (
    MSG_AUTH_REQUIRED,
    MSG_FRIEND_REMOVE_ERROR,
    MSG_FRIEND_REMOVED,
    MSG_FRIENDS_LOAD_ERROR,
    MSG_FRIENDS_LOADED,
    MSG_MALFORMED_RESPONSE,
    MSG_REQUEST_ACCEPT_ERROR,
    MSG_REQUEST_ACCEPTED,
    MSG_REQUEST_DECLINE_ERROR,
    MSG_REQUEST_DECLINED,
    MSG_REQUEST_SEND_ERROR,
    MSG_REQUEST_SENT,
    MSG_REQUESTS_LOAD_ERROR,
    MSG_REQUESTS_LOADED,
)
from friendship_app.core.session import SessionStore
from friendship_app.envelope import Failure
from friendship_app.schemas import Friend, FriendRequest, FriendRequestForm, format_validation_error

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class OperationResult:
    """Итог операции для отображения пользователю"""

    success: bool
    message: str

    @classmethod
    def ok(cls, message: str) -> "OperationResult":
        return cls(True, message)

    @classmethod
    def error(cls, message: str) -> "OperationResult":
        return cls(False, message)


def dedupe(items: Iterable[ModelT], key: Callable[[ModelT], str]) -> List[ModelT]:
    """Убрать повторы по ключу, сохранив первое вхождение и порядок сервера"""
    seen = set()
    result = []
    for item in items:
        item_key = key(item)
        if item_key in seen:
            continue
        seen.add(item_key)
        result.append(item)
    return result


def parse_list(payload: Any, model: Type[ModelT]) -> List[ModelT]:
    """
    Разобрать список из поля data.

    Отсутствующий payload - пустой список.

    Raises:
        ValueError: payload не список или элемент не проходит валидацию
    """
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list, got {type(payload).__name__}")
    try:
        return [model.model_validate(item) for item in payload]
    except ValidationError as e:
        raise ValueError(str(e)) from e


class FriendshipController:
    """
    Списки друзей и входящих запросов и шесть операций над ними.

    Все операции асинхронные; точка ожидания - только вызов API клиента.
    Наружу исключения не выходят, результат - OperationResult.
    """

    def __init__(self, client: APIClient, session: SessionStore) -> None:
        self.client = client
        self.session = session

        self.friends: List[Friend] = []
        self.pending_requests: List[FriendRequest] = []

        # Поле ввода формы "отправить запрос"
        self.request_draft: str = ""

        # Число незавершённых загрузок; флаги *_loading выводятся из них
        self._friends_inflight = 0
        self._requests_inflight = 0
        self.sending_request = False

    @property
    def friends_loading(self) -> bool:
        return self._friends_inflight > 0

    @property
    def requests_loading(self) -> bool:
        return self._requests_inflight > 0

    def _session_missing(self, operation: str) -> Optional[OperationResult]:
        if self.session.is_active:
            return None
        logger.warning(f"[{operation}] Skipped: no active session")
        return OperationResult.error(MSG_AUTH_REQUIRED)

    @staticmethod
    def _failed(operation: str, envelope: Failure, default: str) -> OperationResult:
        logger.warning(
            f"[{operation}] Failed: {envelope.detail!r}",
            extra={"status_code": envelope.status_code},
        )
        return OperationResult.error(envelope.message(default))

    # ===== Loading =====

    async def load_friends(self) -> OperationResult:
        """Заменить список друзей данными сервера"""
        missing = self._session_missing("LOAD_FRIENDS")
        if missing:
            return missing

        self._friends_inflight += 1
        try:
            envelope = await self.client.get_friends()
        finally:
            self._friends_inflight -= 1

        if isinstance(envelope, Failure):
            return self._failed("LOAD_FRIENDS", envelope, MSG_FRIENDS_LOAD_ERROR)

        try:
            friends = parse_list(envelope.payload, Friend)
        except ValueError as e:
            logger.error(f"[LOAD_FRIENDS] Malformed payload: {e}")
            return OperationResult.error(MSG_MALFORMED_RESPONSE)

        self.friends = dedupe(friends, key=lambda f: f.identifier)
        logger.info(f"[LOAD_FRIENDS] Loaded {len(self.friends)} friends")
        return OperationResult.ok(MSG_FRIENDS_LOADED)

    async def load_requests(self) -> OperationResult:
        """Заменить список входящих запросов данными сервера"""
        missing = self._session_missing("LOAD_REQUESTS")
        if missing:
            return missing

        self._requests_inflight += 1
        try:
            envelope = await self.client.get_requests()
        finally:
            self._requests_inflight -= 1

        if isinstance(envelope, Failure):
            return self._failed("LOAD_REQUESTS", envelope, MSG_REQUESTS_LOAD_ERROR)

        try:
            incoming = parse_list(envelope.payload, FriendRequest)
        except ValueError as e:
            logger.error(f"[LOAD_REQUESTS] Malformed payload: {e}")
            return OperationResult.error(MSG_MALFORMED_RESPONSE)

        self.pending_requests = dedupe(incoming, key=lambda r: r.sender_identifier)
        logger.info(f"[LOAD_REQUESTS] Loaded {len(self.pending_requests)} pending requests")
        return OperationResult.ok(MSG_REQUESTS_LOADED)

    # ===== Mutations =====

    async def send_request(self, username: Optional[str] = None) -> OperationResult:
        """
        Отправить запрос в друзья.

        Запрос попадает во входящие адресата, а не отправителя, поэтому
        локальные списки не меняются. При успехе поле формы очищается.

        Args:
            username: Имя адресата; по умолчанию - значение request_draft
        """
        missing = self._session_missing("SEND_REQUEST")
        if missing:
            return missing

        try:
            form = FriendRequestForm(
                username=self.request_draft if username is None else username
            )
        except ValidationError as e:
            return OperationResult.error(format_validation_error(e))

        self.sending_request = True
        try:
            envelope = await self.client.send_request(form.username)
        finally:
            self.sending_request = False

        if isinstance(envelope, Failure):
            return self._failed("SEND_REQUEST", envelope, MSG_REQUEST_SEND_ERROR)

        self.request_draft = ""
        logger.info(f"[SEND_REQUEST] Request sent to {form.username}")
        return OperationResult.ok(MSG_REQUEST_SENT)

    async def accept_request(self, sender: str) -> OperationResult:
        """Принять запрос; запись уходит из входящих после ответа сервера"""
        missing = self._session_missing("ACCEPT_REQUEST")
        if missing:
            return missing

        envelope = await self.client.accept_request(sender)
        if isinstance(envelope, Failure):
            return self._failed("ACCEPT_REQUEST", envelope, MSG_REQUEST_ACCEPT_ERROR)

        self._drop_request(sender)
        logger.info(f"[ACCEPT_REQUEST] Accepted request from {sender}")
        return OperationResult.ok(MSG_REQUEST_ACCEPTED)

    async def decline_request(self, sender: str) -> OperationResult:
        """Отклонить запрос"""
        missing = self._session_missing("DECLINE_REQUEST")
        if missing:
            return missing

        envelope = await self.client.decline_request(sender)
        if isinstance(envelope, Failure):
            return self._failed("DECLINE_REQUEST", envelope, MSG_REQUEST_DECLINE_ERROR)

        self._drop_request(sender)
        logger.info(f"[DECLINE_REQUEST] Declined request from {sender}")
        return OperationResult.ok(MSG_REQUEST_DECLINED)

    async def remove_friend(self, identifier: str) -> OperationResult:
        """Удалить друга"""
        missing = self._session_missing("REMOVE_FRIEND")
        if missing:
            return missing

        envelope = await self.client.delete_friend(identifier)
        if isinstance(envelope, Failure):
            return self._failed("REMOVE_FRIEND", envelope, MSG_FRIEND_REMOVE_ERROR)

        self.friends = [f for f in self.friends if f.identifier != identifier]
        logger.info(f"[REMOVE_FRIEND] Removed {identifier}")
        return OperationResult.ok(MSG_FRIEND_REMOVED)

    def _drop_request(self, sender: str) -> None:
        self.pending_requests = [
            r for r in self.pending_requests if r.sender_identifier != sender
        ]

    def reset(self) -> None:
        """Очистить локальное состояние (при выходе)"""
        self.friends = []
        self.pending_requests = []
        self.request_draft = ""
