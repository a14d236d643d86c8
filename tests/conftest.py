"""
Общие фикстуры: сессия поверх dict и поддельный HTTP сервер вместо requests.request
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pytest

from friendship_app.api_client import APIClient
from friendship_app.core.friendship import FriendshipController
from friendship_app.core.session import SessionStore
from friendship_app.core.storage import SessionStateStorage

BASE_URL = "http://friends.test"
TOKEN = "abc123"

_NO_JSON = object()


class FakeResponse:
    """Минимальная замена requests.Response"""

    def __init__(self, status_code: int = 200, body: Any = _NO_JSON, text: str = ""):
        self.status_code = status_code
        self._body = body
        self.text = text if body is _NO_JSON else str(body)

    def json(self) -> Any:
        if self._body is _NO_JSON:
            raise ValueError("No JSON object could be decoded")
        return self._body


@dataclass
class RecordedCall:
    method: str
    path: str
    json: Optional[Dict[str, Any]]
    headers: Dict[str, str]
    timeout: Any


@dataclass
class FakeServer:
    """Отвечает заготовленными ответами и записывает все запросы"""

    routes: Dict[Tuple[str, str], Any] = field(default_factory=dict)
    calls: List[RecordedCall] = field(default_factory=list)

    def reply(self, method: str, path: str, status: str = "SUCCESS", data: Any = None, status_code: int = 200):
        self.routes[(method, path)] = FakeResponse(status_code, {"status": status, "data": data})

    def reply_raw(self, method: str, path: str, response: FakeResponse):
        self.routes[(method, path)] = response

    def fail_transport(self, method: str, path: str, exc: Exception):
        self.routes[(method, path)] = exc

    def __call__(self, method, url, json=None, headers=None, timeout=None, **kwargs):
        path = url[len(BASE_URL):]
        self.calls.append(RecordedCall(method, path, json, dict(headers or {}), timeout))
        route = self.routes.get((method, path))
        if route is None:
            return FakeResponse(404, {"status": "FAILURE", "data": "Not found"})
        if isinstance(route, Exception):
            raise route
        return route


@pytest.fixture
def server(monkeypatch) -> FakeServer:
    fake = FakeServer()
    monkeypatch.setattr("friendship_app.api_client.requests.request", fake)
    return fake


@pytest.fixture
def state() -> Dict[str, Any]:
    """Заменяет st.session_state / sessionStorage вкладки"""
    return {}


@pytest.fixture
def session(state) -> SessionStore:
    return SessionStore(SessionStateStorage(state))


@pytest.fixture
def active_session(session) -> SessionStore:
    session.login(TOKEN)
    return session


@pytest.fixture
def client(active_session, server) -> APIClient:
    return APIClient(session=active_session, base_url=BASE_URL)


@pytest.fixture
def anonymous_client(session, server) -> APIClient:
    return APIClient(session=session, base_url=BASE_URL)


@pytest.fixture
def controller(client, active_session) -> FriendshipController:
    return FriendshipController(client, active_session)
