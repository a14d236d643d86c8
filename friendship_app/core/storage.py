"""Хранилища токена сессии."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, MutableMapping, Optional

import streamlit as st
from streamlit_js_eval import streamlit_js_eval

from friendship_app.constants import MAX_TOKEN_CHECK_ATTEMPTS, SESSIONSTORAGE_AUTH_TOKEN_KEY

logger = logging.getLogger(__name__)


class TokenStorage(ABC):
    """Хранилище одного непрозрачного токена в пределах сессии."""

    @property
    def pending(self) -> bool:
        """True пока сохранённый токен ещё не прочитан"""
        return False

    @abstractmethod
    def get(self) -> Optional[str]:
        """Прочитать сохранённый токен или None"""

    @abstractmethod
    def save(self, token: str) -> None:
        """Сохранить токен"""

    @abstractmethod
    def remove(self) -> None:
        """Удалить токен"""

    def sync(self) -> None:
        """Довести внешнее хранилище до текущего токена"""


class SessionStateStorage(TokenStorage):
    """
    Токен в произвольном словаре.

    В приложении это st.session_state (переживает перезапуски скрипта,
    но не перезапуск процесса), в тестах - обычный dict.
    """

    def __init__(
        self,
        state: MutableMapping[str, Any],
        key: str = SESSIONSTORAGE_AUTH_TOKEN_KEY,
    ) -> None:
        self.state = state
        self.key = key

    def get(self) -> Optional[str]:
        token = self.state.get(self.key)
        if isinstance(token, str) and token:
            return token
        return None

    def save(self, token: str) -> None:
        self.state[self.key] = token

    def remove(self) -> None:
        self.state.pop(self.key, None)


class BrowserSessionStorage(SessionStateStorage):
    """
    Токен в sessionStorage вкладки браузера.

    st.session_state пропадает при перезагрузке страницы, sessionStorage
    вкладки - нет. Значение из браузера приходит через компонент
    streamlit_js_eval только на одном из следующих перезапусков скрипта,
    поэтому get() вызывается повторно, пока компонент не ответит или не
    кончатся попытки (pending).

    Копия токена хранится в state; save/remove меняют только её. Запись в
    браузер делает sync(), один раз за перезапуск скрипта: компонент с тем
    же key нельзя вывести дважды за один проход.
    """

    def __init__(
        self,
        key: str = SESSIONSTORAGE_AUTH_TOKEN_KEY,
        state: Optional[MutableMapping[str, Any]] = None,
        max_attempts: int = MAX_TOKEN_CHECK_ATTEMPTS,
    ) -> None:
        super().__init__(st.session_state if state is None else state, key)
        self.max_attempts = max_attempts
        self.attempts = 0
        self.checked = False

    @property
    def pending(self) -> bool:
        return not self.checked

    def get(self) -> Optional[str]:
        token = super().get()
        if token or self.checked:
            return token

        try:
            value = self._read_from_browser()
        except Exception as e:
            logger.error(f"[GET_TOKEN] Failed to read sessionStorage: {e}", exc_info=True)
            self.checked = True
            return None

        # Компонент ещё не ответил
        if value is None:
            self.attempts += 1
            if self.attempts >= self.max_attempts:
                logger.warning("[GET_TOKEN] Max retry attempts reached, marking as checked")
                self.checked = True
            else:
                logger.info(
                    f"[GET_TOKEN] Token not loaded yet, will retry on next render "
                    f"(attempt {self.attempts}/{self.max_attempts})"
                )
            return None

        self.checked = True
        if not value:
            logger.info("[GET_TOKEN] No token in sessionStorage")
            return None

        super().save(value)
        logger.info(f"[GET_TOKEN] Loaded token from sessionStorage, length: {len(value)}")
        return value

    def save(self, token: str) -> None:
        super().save(token)
        self.checked = True

    def remove(self) -> None:
        super().remove()
        self.checked = True

    def sync(self) -> None:
        # До ответа браузера нельзя затирать ещё не прочитанный токен
        if self.pending:
            return

        token = super().get()
        storage = "window.parent.sessionStorage"
        if token:
            statement = f"{storage}.setItem({json.dumps(self.key)}, {json.dumps(token)})"
        else:
            statement = f"{storage}.removeItem({json.dumps(self.key)})"

        try:
            streamlit_js_eval(js_expressions=statement, want_output=False, key=f"{self.key}_sync")
        except Exception as e:
            logger.error(f"[SYNC_TOKEN] Failed to update sessionStorage: {e}", exc_info=True)

    def _read_from_browser(self) -> Optional[str]:
        """
        Значение sessionStorage или None, если компонент ещё не ответил.

        Отсутствующий токен браузер возвращает пустой строкой, чтобы
        отличить его от отсутствия ответа.
        """
        value = streamlit_js_eval(
            js_expressions=f"window.parent.sessionStorage.getItem({json.dumps(self.key)}) || ''",
            key=f"{self.key}_read",
        )
        if value is None:
            return None
        return value if isinstance(value, str) else ""
