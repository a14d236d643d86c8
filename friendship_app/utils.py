"""
Утилиты для Streamlit приложения
"""

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

import streamlit as st

from friendship_app.constants import SESSION_FLASH
from friendship_app.core.friendship import OperationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_async(awaitable: Awaitable[T]) -> T:
    """
    Выполнить корутину из синхронного скрипта Streamlit.

    Каждое действие пользователя - отдельный цикл событий.
    """
    async def _runner() -> T:
        return await awaitable

    return asyncio.run(_runner())


def flash(result: OperationResult) -> None:
    """Запомнить результат, чтобы показать его после st.rerun()"""
    st.session_state[SESSION_FLASH] = result


def show_flash() -> None:
    """Показать и забыть отложенное сообщение"""
    result: Optional[OperationResult] = st.session_state.get(SESSION_FLASH)
    if result is None:
        return
    st.session_state[SESSION_FLASH] = None
    show_result(result)


def show_result(result: OperationResult) -> None:
    """Показать результат операции"""
    if result.success:
        st.success(result.message)
    else:
        st.error(result.message)
