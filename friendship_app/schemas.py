"""
Pydantic модели для данных сервиса дружбы и форм клиента
"""

import re
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from friendship_app.constants import (
    EMAIL_PATTERN,
    MAX_PASSWORD_LENGTH,
    MAX_USERNAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    MIN_USERNAME_LENGTH,
    MSG_PASSWORDS_MISMATCH,
)


# ==================== Wire payloads ====================


class RawEnvelope(BaseModel):
    """Конверт ответа сервиса в том виде, в каком он приходит по сети"""

    status: Literal["SUCCESS", "FAILURE"]
    data: Any = None


class Friend(BaseModel):
    """
    Подтверждённая дружба.

    Attributes:
        identifier: Уникальное имя пользователя (по сети - username)
        email: Email друга, если сервис его отдаёт
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    identifier: str = Field(..., alias="username", min_length=1)
    email: Optional[str] = None


class FriendRequest(BaseModel):
    """Входящий запрос в друзья (по сети - senderName)"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    sender_identifier: str = Field(..., alias="senderName", min_length=1)


# ==================== Forms ====================


def _require(value: str, message: str) -> str:
    if not value or not value.strip():
        raise ValueError(message)
    return value


class LoginForm(BaseModel):
    """Форма входа"""

    username: str
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _require(v, "Введите имя пользователя").strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _require(v, "Введите пароль")


class RegisterForm(BaseModel):
    """
    Форма регистрации.

    Тело запроса сериализуется с алиасами:
    {username, email, password, confirmPassword}.
    """

    model_config = ConfigDict(populate_by_name=True)

    username: str
    email: str
    password: str
    confirm_password: str = Field(..., alias="confirmPassword")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """
        Имя пользователя от MIN_USERNAME_LENGTH до MAX_USERNAME_LENGTH символов.

        Raises:
            ValueError: Если имя пустое или не подходит по длине
        """
        v = _require(v, "Введите имя пользователя").strip()
        if not MIN_USERNAME_LENGTH <= len(v) <= MAX_USERNAME_LENGTH:
            raise ValueError(
                f"Имя пользователя: от {MIN_USERNAME_LENGTH} до {MAX_USERNAME_LENGTH} символов"
            )
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = _require(v, "Введите email").strip()
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Некорректный email")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        _require(v, "Введите пароль")
        if not MIN_PASSWORD_LENGTH <= len(v) <= MAX_PASSWORD_LENGTH:
            raise ValueError(
                f"Пароль: от {MIN_PASSWORD_LENGTH} до {MAX_PASSWORD_LENGTH} символов"
            )
        return v

    @field_validator("confirm_password")
    @classmethod
    def validate_confirm_password(cls, v: str) -> str:
        return _require(v, "Подтвердите пароль")

    @model_validator(mode="after")
    def check_passwords_match(self) -> "RegisterForm":
        if self.password != self.confirm_password:
            raise ValueError(MSG_PASSWORDS_MISMATCH)
        return self


class FriendRequestForm(BaseModel):
    """Форма отправки запроса в друзья"""

    username: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _require(v, "Введите имя пользователя").strip()


def format_validation_error(exc: ValidationError) -> str:
    """
    Превращает ошибку валидации pydantic в сообщение для пользователя.

    Для ValueError из валидаторов берётся исходный текст, без префикса
    "Value error, ".

    Args:
        exc: Ошибка валидации

    Returns:
        Текст первой ошибки
    """
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    ctx_error = (first.get("ctx") or {}).get("error")
    if ctx_error is not None:
        return str(ctx_error)
    return first.get("msg", str(exc))


__all__ = [
    "Friend",
    "FriendRequest",
    "FriendRequestForm",
    "LoginForm",
    "RawEnvelope",
    "RegisterForm",
    "format_validation_error",
]
