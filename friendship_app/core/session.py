"""Сессия пользователя: токен и флаг входа."""

import logging
from typing import Any, Dict, MutableMapping, Optional

from friendship_app.constants import (
    SESSION_CURRENT_VIEW,
    SESSION_DASHBOARD_LOADED,
    SESSION_FLASH,
    VIEW_LOGIN,
)
from friendship_app.core.storage import TokenStorage

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Единственный владелец токена.

    Токен меняют только login/logout/restore; API клиент и контроллер
    дружбы лишь читают его. Инвариант: is_active тогда и только тогда,
    когда token - непустая строка.
    """

    def __init__(self, storage: TokenStorage) -> None:
        self._storage = storage
        self._token: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_active(self) -> bool:
        return bool(self._token)

    @property
    def restore_pending(self) -> bool:
        """Сессия неактивна, а хранилище ещё не ответило; restore() стоит повторить"""
        return not self.is_active and self._storage.pending

    def login(self, token: str) -> None:
        """
        Запомнить токен и сохранить его в хранилище сессии.

        Args:
            token: Токен, выданный сервисом
        """
        if not token:
            logger.warning("Ignoring login with empty token")
            return
        self._token = token
        self._storage.save(token)
        logger.info(f"Session started, token length: {len(token)}")

    def logout(self) -> None:
        """Забыть токен. Запрос к сервису не отправляется."""
        self._token = None
        self._storage.remove()
        logger.info("Session cleared")

    def restore(self) -> bool:
        """
        Поднять сессию из сохранённого токена без проверки на сервере.

        Просроченный токен обнаружится на первом неуспешном запросе.

        Returns:
            True если сессия активна
        """
        token = self._storage.get()
        self._token = token or None
        if self._token:
            logger.info(f"Session restored, token length: {len(self._token)}")
        else:
            logger.info("No persisted token, session inactive")
        return self.is_active

    def sync(self) -> None:
        """Довести хранилище до текущего токена (на каждом перезапуске скрипта)"""
        self._storage.sync()


def init_session_state(state: MutableMapping[str, Any]) -> None:
    """Инициализация session state вида значениями по умолчанию."""
    defaults: Dict[str, Any] = {
        SESSION_CURRENT_VIEW: VIEW_LOGIN,
        SESSION_DASHBOARD_LOADED: False,
        SESSION_FLASH: None,
    }

    for key, value in defaults.items():
        if key not in state:
            state[key] = value


def clear_session_state(state: MutableMapping[str, Any]) -> None:
    """Сброс состояния вида после выхода."""
    logger.info("Clearing view state")

    state[SESSION_CURRENT_VIEW] = VIEW_LOGIN
    state[SESSION_DASHBOARD_LOADED] = False
