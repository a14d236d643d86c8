"""Конфигурация приложения."""

import os
from dataclasses import dataclass
from typing import Optional

from friendship_app.constants import SESSIONSTORAGE_AUTH_TOKEN_KEY


def _env_timeout(name: str) -> Optional[float]:
    """Таймаут из окружения; пустое значение означает таймаут транспорта по умолчанию."""
    value = os.getenv(name)
    if not value:
        return None
    return float(value)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class PageConfig:
    """Конфигурация страницы Streamlit."""

    title: str
    icon: str
    layout: str = "wide"
    initial_sidebar_state: str = "collapsed"


@dataclass
class AppConfig:
    """Основная конфигурация приложения."""

    # API настройки
    api_url: str = os.getenv("FRIENDSHIP_API_URL", "http://localhost:80")
    api_timeout: Optional[float] = _env_timeout("FRIENDSHIP_API_TIMEOUT")

    # SessionStorage
    auth_token_key: str = SESSIONSTORAGE_AUTH_TOKEN_KEY

    # Логирование
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    json_logs: bool = _env_flag("LOG_JSON")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None


# Конфигурации страниц
PAGE_CONFIGS = {
    "main": PageConfig(
        title="Друзья",
        icon="👥",
        layout="centered",
    ),
    "auth": PageConfig(
        title="Вход - Друзья",
        icon="🔐",
        layout="centered",
    ),
    "friends": PageConfig(
        title="Панель друзей",
        icon="👥",
        layout="wide",
    ),
}


# Глобальная конфигурация
app_config = AppConfig()
