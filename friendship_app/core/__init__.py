"""Модуль core: сессия, хранилище токена, вход и состояние дружбы."""

from friendship_app.core.auth import (
    check_authentication,
    get_api_client,
    get_friendship_controller,
    get_session_store,
    logout,
    require_authentication,
    restore_session,
    sign_in,
    sign_up,
)
from friendship_app.core.friendship import FriendshipController, OperationResult, dedupe
from friendship_app.core.session import SessionStore, clear_session_state, init_session_state
from friendship_app.core.storage import BrowserSessionStorage, SessionStateStorage, TokenStorage

__all__ = [
    # auth
    "check_authentication",
    "get_api_client",
    "get_friendship_controller",
    "get_session_store",
    "logout",
    "require_authentication",
    "restore_session",
    "sign_in",
    "sign_up",
    # friendship
    "FriendshipController",
    "OperationResult",
    "dedupe",
    # session
    "SessionStore",
    "clear_session_state",
    "init_session_state",
    # storage
    "BrowserSessionStorage",
    "SessionStateStorage",
    "TokenStorage",
]
