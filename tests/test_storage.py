"""
Тесты BrowserSessionStorage: компонент streamlit_js_eval заменён записью вызовов.

Проверяем:
1. Токен из sessionStorage поднимается, когда st.session_state пуст (перезагрузка)
2. Пока компонент не ответил, restore повторяется ограниченное число раз
3. sync пишет setItem/removeItem и молчит до ответа браузера
4. Ошибки компонента логируются и не выходят наружу
"""

import json
import logging
from typing import Any, Dict, List, Optional

import pytest

from friendship_app.core.session import SessionStore
from friendship_app.core.storage import BrowserSessionStorage

KEY = "authToken"


class FakeBrowser:
    """Отвечает на чтение заготовленными значениями по очереди; None - ответа ещё нет"""

    def __init__(self, answers: Optional[List[Any]] = None, error: Optional[Exception] = None):
        self.answers = list(answers or [])
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, js_expressions, want_output=True, key=None):
        self.calls.append({"js": js_expressions, "want_output": want_output, "key": key})
        if self.error is not None:
            raise self.error
        if not want_output:
            return None
        return self.answers.pop(0) if self.answers else None

    @property
    def writes(self) -> List[str]:
        return [c["js"] for c in self.calls if not c["want_output"]]

    @property
    def reads(self) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["want_output"]]


@pytest.fixture
def browser(monkeypatch) -> FakeBrowser:
    fake = FakeBrowser()
    monkeypatch.setattr("friendship_app.core.storage.streamlit_js_eval", fake)
    return fake


@pytest.fixture
def storage(browser) -> BrowserSessionStorage:
    return BrowserSessionStorage(KEY, state={}, max_attempts=3)


# ==================== Чтение ====================


def test_get_reads_browser_when_state_is_empty(storage, browser):
    browser.answers = ["abc123"]

    assert storage.get() == "abc123"
    assert storage.state[KEY] == "abc123"
    assert storage.pending is False
    assert "sessionStorage.getItem" in browser.reads[0]["js"]
    assert json.dumps(KEY) in browser.reads[0]["js"]


def test_get_prefers_mirrored_token(browser):
    storage = BrowserSessionStorage(KEY, state={KEY: "abc123"})

    assert storage.get() == "abc123"
    assert browser.calls == []


def test_get_retries_until_component_answers(storage, browser):
    browser.answers = [None, "abc123"]

    assert storage.get() is None
    assert storage.pending is True

    assert storage.get() == "abc123"
    assert storage.pending is False
    assert len(browser.reads) == 2
    assert {r["key"] for r in browser.reads} == {f"{KEY}_read"}


def test_get_stops_after_max_attempts(storage, browser):
    for _ in range(3):
        assert storage.get() is None

    assert storage.pending is False
    assert storage.get() is None
    assert len(browser.reads) == 3


def test_empty_answer_means_no_token(storage, browser):
    browser.answers = [""]

    assert storage.get() is None
    assert storage.pending is False

    assert storage.get() is None
    assert len(browser.reads) == 1


def test_read_error_is_logged_and_swallowed(monkeypatch, caplog):
    monkeypatch.setattr(
        "friendship_app.core.storage.streamlit_js_eval",
        FakeBrowser(error=RuntimeError("component unavailable")),
    )
    storage = BrowserSessionStorage(KEY, state={})

    with caplog.at_level(logging.ERROR, logger="friendship_app.core.storage"):
        assert storage.get() is None

    assert storage.pending is False
    assert "component unavailable" in caplog.text


# ==================== Запись ====================


def test_sync_does_nothing_while_pending(storage, browser):
    storage.sync()

    assert browser.calls == []


def test_save_then_sync_emits_set_item(storage, browser):
    token = 'tok"en'
    storage.save(token)
    storage.sync()

    assert browser.writes == [f"window.parent.sessionStorage.setItem({json.dumps(KEY)}, {json.dumps(token)})"]
    assert browser.calls[0]["key"] == f"{KEY}_sync"
    assert storage.state[KEY] == 'tok"en'


def test_remove_then_sync_emits_remove_item(storage, browser):
    storage.save("abc123")
    storage.remove()
    storage.sync()

    assert browser.writes == [f"window.parent.sessionStorage.removeItem({json.dumps(KEY)})"]
    assert KEY not in storage.state


def test_sync_error_is_logged_and_swallowed(monkeypatch, caplog):
    monkeypatch.setattr(
        "friendship_app.core.storage.streamlit_js_eval",
        FakeBrowser(error=RuntimeError("render failed")),
    )
    storage = BrowserSessionStorage(KEY, state={})
    storage.save("abc123")

    with caplog.at_level(logging.ERROR, logger="friendship_app.core.storage"):
        storage.sync()

    assert "render failed" in caplog.text
    assert storage.get() == "abc123"


# ==================== Сессия поверх браузера ====================


def test_reload_restores_session_on_later_rerun(browser):
    # Новая вкладка после перезагрузки: session_state пуст, токен только в браузере
    browser.answers = [None, "abc123"]
    session = SessionStore(BrowserSessionStorage(KEY, state={}))

    assert session.restore() is False
    assert session.restore_pending is True

    assert session.restore() is True
    assert session.token == "abc123"
    assert session.restore_pending is False


def test_logout_is_not_undone_by_browser_copy(browser):
    browser.answers = ["abc123"]
    session = SessionStore(BrowserSessionStorage(KEY, state={}))
    session.restore()

    session.logout()
    session.sync()

    assert session.restore() is False
    assert len(browser.reads) == 1
    assert browser.writes == [f"window.parent.sessionStorage.removeItem({json.dumps(KEY)})"]
