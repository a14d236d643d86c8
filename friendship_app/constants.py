"""Константы приложения."""

from typing import Final

# ===== HTTP STATUS CODES =====
HTTP_OK: Final[int] = 200
HTTP_MULTIPLE_CHOICES: Final[int] = 300

# ===== HTTP METHODS =====
METHOD_GET: Final[str] = "GET"
METHOD_POST: Final[str] = "POST"
METHOD_PUT: Final[str] = "PUT"
METHOD_DELETE: Final[str] = "DELETE"

# ===== ENVELOPE =====
STATUS_SUCCESS: Final[str] = "SUCCESS"

# ===== SESSION STATE KEYS =====
SESSION_STORE: Final[str] = "session_store"
SESSION_FRIENDSHIP_CONTROLLER: Final[str] = "friendship_controller"
SESSION_CURRENT_VIEW: Final[str] = "current_view"
SESSION_DASHBOARD_LOADED: Final[str] = "dashboard_loaded"
SESSION_FLASH: Final[str] = "flash"

# ===== VIEWS =====
VIEW_LOGIN: Final[str] = "login"
VIEW_REGISTER: Final[str] = "register"

# ===== SESSIONSTORAGE KEYS =====
SESSIONSTORAGE_AUTH_TOKEN_KEY: Final[str] = "authToken"
MAX_TOKEN_CHECK_ATTEMPTS: Final[int] = 5

# ===== VALIDATION =====
MIN_USERNAME_LENGTH: Final[int] = 3
MAX_USERNAME_LENGTH: Final[int] = 30
MIN_PASSWORD_LENGTH: Final[int] = 8
MAX_PASSWORD_LENGTH: Final[int] = 80
EMAIL_PATTERN: Final[str] = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

# ===== API ENDPOINTS =====
ENDPOINT_AUTH_LOGIN: Final[str] = "/api/v1/auth/user/login"
ENDPOINT_AUTH_REGISTER: Final[str] = "/api/v1/auth/user/register"
ENDPOINT_FRIENDS: Final[str] = "/api/v1/friendship/friends"
ENDPOINT_REQUESTS: Final[str] = "/api/v1/friendship/requests"
ENDPOINT_SEND_REQUEST: Final[str] = "/api/v1/friendship/request/{username}"
ENDPOINT_ACCEPT_REQUEST: Final[str] = "/api/v1/friendship/accept/{username}"
ENDPOINT_DECLINE_REQUEST: Final[str] = "/api/v1/friendship/decline/{username}"
ENDPOINT_DELETE_FRIEND: Final[str] = "/api/v1/friendship/delete/{username}"

# ===== TRANSPORT ERRORS =====
MSG_CONNECTION_ERROR: Final[str] = "Ошибка соединения с сервером"
MSG_MALFORMED_RESPONSE: Final[str] = "Некорректный ответ сервера"
MSG_NO_SESSION: Final[str] = "Нет активной сессии"

# ===== UI MESSAGES =====
MSG_LOGIN_SUCCESS: Final[str] = "✅ Успешный вход!"
MSG_LOGIN_ERROR: Final[str] = "❌ Ошибка входа"
MSG_REGISTER_SUCCESS: Final[str] = "✅ Регистрация успешна! Теперь войдите в систему"
MSG_REGISTER_ERROR: Final[str] = "❌ Ошибка регистрации"
MSG_PASSWORDS_MISMATCH: Final[str] = "Пароли не совпадают"
MSG_AUTH_REQUIRED: Final[str] = "⚠️ Пожалуйста, войдите в систему"
MSG_LOGOUT: Final[str] = "Вы вышли из системы"
MSG_RESTORING_SESSION: Final[str] = "Восстанавливаю сессию..."

MSG_FRIENDS_LOAD_ERROR: Final[str] = "Ошибка загрузки друзей"
MSG_REQUESTS_LOAD_ERROR: Final[str] = "Ошибка загрузки запросов"
MSG_REQUEST_SENT: Final[str] = "Запрос отправлен"
MSG_REQUEST_SEND_ERROR: Final[str] = "Ошибка отправки запроса"
MSG_REQUEST_ACCEPTED: Final[str] = "Запрос принят"
MSG_REQUEST_ACCEPT_ERROR: Final[str] = "Ошибка принятия запроса"
MSG_REQUEST_DECLINED: Final[str] = "Запрос отклонён"
MSG_REQUEST_DECLINE_ERROR: Final[str] = "Ошибка отклонения запроса"
MSG_FRIEND_REMOVED: Final[str] = "Друг удалён"
MSG_FRIEND_REMOVE_ERROR: Final[str] = "Ошибка удаления друга"
MSG_FRIENDS_LOADED: Final[str] = "Список друзей обновлён"
MSG_REQUESTS_LOADED: Final[str] = "Список запросов обновлён"

MSG_NO_FRIENDS_YET: Final[str] = "У вас пока нет друзей"
MSG_NO_REQUESTS_YET: Final[str] = "Нет входящих запросов"
MSG_WANTS_TO_BE_FRIENDS: Final[str] = "хочет добавить вас в друзья"

# ===== DELAYS =====
SESSIONSTORAGE_RETRY_DELAY_MS: Final[int] = 300
