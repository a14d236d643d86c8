"""Вход, регистрация и доступ к объектам сессии."""

import logging
import time

import streamlit as st
from pydantic import ValidationError

from friendship_app.api_client import APIClient
from friendship_app.config import app_config
from friendship_app.constants import (
    MSG_LOGIN_ERROR,
    MSG_LOGIN_SUCCESS,
    MSG_REGISTER_ERROR,
    MSG_REGISTER_SUCCESS,
    MSG_RESTORING_SESSION,
    SESSION_FRIENDSHIP_CONTROLLER,
    SESSION_STORE,
    SESSIONSTORAGE_RETRY_DELAY_MS,
)
from friendship_app.core.friendship import FriendshipController, OperationResult
from friendship_app.core.session import SessionStore, clear_session_state
from friendship_app.core.storage import BrowserSessionStorage
from friendship_app.envelope import Failure
from friendship_app.schemas import LoginForm, RegisterForm, format_validation_error

logger = logging.getLogger(__name__)


async def sign_in(
    client: APIClient,
    session: SessionStore,
    username: str,
    password: str,
) -> OperationResult:
    """
    Вход пользователя.

    Пустые поля отсекаются до запроса. При успехе токен из data.token
    передаётся в session.login; текст ошибки сервера пользователю не
    показывается.

    Args:
        client: API клиент
        session: Сессия, которая получит токен
        username: Имя пользователя
        password: Пароль

    Returns:
        Результат для отображения
    """
    try:
        form = LoginForm(username=username, password=password)
    except ValidationError as e:
        return OperationResult.error(format_validation_error(e))

    envelope = await client.login(form.username, form.password)
    if isinstance(envelope, Failure):
        logger.warning(f"Login failed for {form.username}: {envelope.detail!r}")
        return OperationResult.error(MSG_LOGIN_ERROR)

    payload = envelope.payload if isinstance(envelope.payload, dict) else {}
    token = payload.get("token")
    if not isinstance(token, str) or not token:
        logger.error(f"Login response for {form.username} has no token")
        return OperationResult.error(MSG_LOGIN_ERROR)

    session.login(token)
    logger.info(f"User logged in: {form.username}")
    return OperationResult.ok(MSG_LOGIN_SUCCESS)


async def sign_up(
    client: APIClient,
    username: str,
    email: str,
    password: str,
    confirm_password: str,
) -> OperationResult:
    """
    Регистрация нового пользователя.

    Ошибки валидации (длина, формат email, несовпадение паролей) до сервиса
    не доходят. После успешной регистрации пользователь входит отдельно.

    Returns:
        Результат для отображения
    """
    try:
        form = RegisterForm(
            username=username,
            email=email,
            password=password,
            confirm_password=confirm_password,
        )
    except ValidationError as e:
        return OperationResult.error(format_validation_error(e))

    envelope = await client.register(form.model_dump(by_alias=True))
    if isinstance(envelope, Failure):
        return OperationResult.error(envelope.message(MSG_REGISTER_ERROR))

    logger.info(f"User registered: {form.username}")
    return OperationResult.ok(MSG_REGISTER_SUCCESS)


# ===== Streamlit session objects =====


def get_session_store() -> SessionStore:
    """Сессия текущей вкладки, одна на вкладку"""
    if SESSION_STORE not in st.session_state:
        st.session_state[SESSION_STORE] = SessionStore(
            BrowserSessionStorage(app_config.auth_token_key)
        )
    return st.session_state[SESSION_STORE]


def restore_session() -> SessionStore:
    """
    Поднять сессию из sessionStorage вкладки и синхронизировать его.

    Вызывается ровно один раз в начале каждой страницы. После перезагрузки
    вкладки токен приходит из браузера не сразу: пока хранилище ждёт ответа,
    страница не рендерится, а скрипт перезапускается с паузой. Число попыток
    ограничено в BrowserSessionStorage.

    Returns:
        Сессия текущей вкладки
    """
    store = get_session_store()
    if store.restore_pending:
        store.restore()

    if store.restore_pending:
        with st.spinner(MSG_RESTORING_SESSION):
            time.sleep(SESSIONSTORAGE_RETRY_DELAY_MS / 1000)
        st.rerun()

    store.sync()
    return store


def get_api_client() -> APIClient:
    """
    Получить API клиент, привязанный к сессии вкладки.

    Returns:
        Настроенный API клиент
    """
    return APIClient(session=get_session_store())


def get_friendship_controller() -> FriendshipController:
    """Контроллер дружбы текущей вкладки"""
    if SESSION_FRIENDSHIP_CONTROLLER not in st.session_state:
        session = get_session_store()
        st.session_state[SESSION_FRIENDSHIP_CONTROLLER] = FriendshipController(
            APIClient(session=session),
            session,
        )
    return st.session_state[SESSION_FRIENDSHIP_CONTROLLER]


def logout() -> None:
    """Выход из системы и очистка session state."""
    get_session_store().logout()
    get_friendship_controller().reset()
    clear_session_state(st.session_state)
    logger.info("User logged out")


def check_authentication() -> bool:
    """
    Проверка авторизации пользователя.

    Returns:
        True если в сессии есть токен
    """
    return get_session_store().is_active


def require_authentication() -> None:
    """Требует авторизацию, иначе перенаправляет на страницу входа."""
    if check_authentication():
        return
    st.switch_page("pages/1_auth.py")
