"""Централизованный API клиент сервиса авторизации и дружбы."""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError

from friendship_app.config import app_config
from friendship_app.constants import (
    ENDPOINT_ACCEPT_REQUEST,
    ENDPOINT_AUTH_LOGIN,
    ENDPOINT_AUTH_REGISTER,
    ENDPOINT_DECLINE_REQUEST,
    ENDPOINT_DELETE_FRIEND,
    ENDPOINT_FRIENDS,
    ENDPOINT_REQUESTS,
    ENDPOINT_SEND_REQUEST,
    HTTP_MULTIPLE_CHOICES,
    HTTP_OK,
    METHOD_DELETE,
    METHOD_GET,
    METHOD_POST,
    METHOD_PUT,
    MSG_CONNECTION_ERROR,
    MSG_MALFORMED_RESPONSE,
    MSG_NO_SESSION,
    STATUS_SUCCESS,
)
from friendship_app.envelope import Envelope, Failure, Success, failure_from_data
from friendship_app.exceptions import ClientError, MalformedResponseError, TransportError
from friendship_app.schemas import RawEnvelope

if TYPE_CHECKING:
    from friendship_app.core.session import SessionStore

logger = logging.getLogger(__name__)


class APIClient:
    """
    Клиент сервиса авторизации и дружбы.

    Каждый вызов возвращает конверт Success/Failure и никогда не бросает
    исключение: ошибки сети и некорректные ответы превращаются в Failure.
    """

    def __init__(
        self,
        session: Optional["SessionStore"] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = app_config.api_timeout,
    ) -> None:
        """
        Инициализация API клиента.

        Args:
            session: Сессия, из которой берётся токен для авторизованных запросов
            base_url: Базовый URL API (по умолчанию из конфигурации)
            timeout: Таймаут запросов в секундах; None - без таймаута
        """
        self.session = session
        self.base_url = (base_url or app_config.api_url).rstrip("/")
        self.timeout = timeout

    @staticmethod
    def _get_headers(token: Optional[str] = None) -> Dict[str, str]:
        """Получить заголовки для запроса"""
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _handle_response(self, response: requests.Response) -> Envelope:
        """
        Приведение HTTP ответа к конверту.

        Ответ не из диапазона 2xx никогда не даёт Success, даже если тело
        содержит status=SUCCESS.

        Raises:
            MalformedResponseError: Успешный HTTP ответ без JSON конверта
        """
        is_2xx = HTTP_OK <= response.status_code < HTTP_MULTIPLE_CHOICES

        try:
            raw = RawEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            if not is_2xx:
                logger.error(
                    f"API request failed with status {response.status_code}: "
                    f"{response.text[:200]}"
                )
                return Failure(status_code=response.status_code)
            raise MalformedResponseError(
                MSG_MALFORMED_RESPONSE,
                details={"body": response.text[:200], "reason": str(e)},
                status_code=response.status_code,
            ) from e

        if is_2xx and raw.status == STATUS_SUCCESS:
            return Success(raw.data)

        logger.warning(
            f"API request failed with status {response.status_code}, "
            f"envelope status {raw.status}"
        )
        return failure_from_data(raw.data, response.status_code)

    def _send(
        self,
        endpoint: str,
        method: str,
        body: Optional[Dict[str, Any]],
        token: Optional[str],
    ) -> Envelope:
        """Блокирующий запрос; выполняется в отдельном потоке"""
        try:
            response = requests.request(
                method,
                f"{self.base_url}{endpoint}",
                json=body,
                headers=self._get_headers(token),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(MSG_CONNECTION_ERROR, details={"reason": str(e)}) from e
        return self._handle_response(response)

    async def call(
        self,
        endpoint: str,
        method: str = METHOD_GET,
        body: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> Envelope:
        """
        Выполнить запрос к сервису.

        Args:
            endpoint: Путь относительно базового URL
            method: HTTP метод
            body: JSON тело запроса
            token: Bearer токен; без него запрос уходит без авторизации

        Returns:
            Success с полем data ответа или Failure с диагностикой
        """
        try:
            return await asyncio.to_thread(self._send, endpoint, method, body, token)
        except ClientError as e:
            logger.error(f"{method} {endpoint} failed: {e.to_dict()}")
            return Failure(detail=e.message, status_code=e.status_code)

    async def _authenticated_call(self, endpoint: str, method: str = METHOD_GET) -> Envelope:
        """Запрос с токеном текущей сессии; без сессии сеть не трогаем"""
        if self.session is None or not self.session.is_active:
            logger.warning(f"Skipping {method} {endpoint}: no active session")
            return Failure(detail=MSG_NO_SESSION)
        return await self.call(endpoint, method, token=self.session.token)

    @staticmethod
    def _user_path(template: str, username: str) -> str:
        return template.format(username=quote(username, safe=""))

    # ===== Auth =====

    async def login(self, username: str, password: str) -> Envelope:
        """
        Вход пользователя.

        Returns:
            Success с {"token": ...} или Failure
        """
        return await self.call(
            ENDPOINT_AUTH_LOGIN,
            METHOD_POST,
            body={"username": username, "password": password},
        )

    async def register(self, body: Dict[str, Any]) -> Envelope:
        """
        Регистрация нового пользователя.

        Args:
            body: {username, email, password, confirmPassword}
        """
        return await self.call(ENDPOINT_AUTH_REGISTER, METHOD_POST, body=body)

    # ===== Friendship =====

    async def get_friends(self) -> Envelope:
        return await self._authenticated_call(ENDPOINT_FRIENDS)

    async def get_requests(self) -> Envelope:
        return await self._authenticated_call(ENDPOINT_REQUESTS)

    async def send_request(self, username: str) -> Envelope:
        return await self._authenticated_call(
            self._user_path(ENDPOINT_SEND_REQUEST, username), METHOD_POST
        )

    async def accept_request(self, username: str) -> Envelope:
        return await self._authenticated_call(
            self._user_path(ENDPOINT_ACCEPT_REQUEST, username), METHOD_PUT
        )

    async def decline_request(self, username: str) -> Envelope:
        return await self._authenticated_call(
            self._user_path(ENDPOINT_DECLINE_REQUEST, username), METHOD_PUT
        )

    async def delete_friend(self, username: str) -> Envelope:
        return await self._authenticated_call(
            self._user_path(ENDPOINT_DELETE_FRIEND, username), METHOD_DELETE
        )
