"""Общие компоненты для Streamlit приложения."""

import streamlit as st

from friendship_app.constants import (
    MSG_LOGOUT,
    MSG_NO_FRIENDS_YET,
    MSG_NO_REQUESTS_YET,
    MSG_WANTS_TO_BE_FRIENDS,
)
from friendship_app.core.auth import logout
from friendship_app.core.friendship import FriendshipController, OperationResult
from friendship_app.utils import flash, run_async


def render_request_form(controller: FriendshipController) -> None:
    """
    Форма отправки запроса в друзья.

    Поле формы привязано к controller.request_draft, поэтому после успешной
    отправки оно очищается самим контроллером.
    """
    with st.form(key="friend_request_form", border=False):
        col1, col2 = st.columns([3, 1], vertical_alignment="bottom")
        with col1:
            draft = st.text_input(
                "Имя пользователя",
                value=controller.request_draft,
                placeholder="Имя пользователя",
            )
        with col2:
            submitted = st.form_submit_button(
                "Отправить запрос",
                type="primary",
                disabled=controller.sending_request,
            )

    if submitted:
        controller.request_draft = draft
        flash(run_async(controller.send_request()))
        st.rerun()


def render_requests(controller: FriendshipController) -> None:
    """Список входящих запросов с кнопками принять/отклонить."""
    st.markdown(f"#### 📨 Запросы в друзья ({len(controller.pending_requests)})")
    render_request_form(controller)
    st.divider()

    if not controller.pending_requests:
        st.info(MSG_NO_REQUESTS_YET)
        return

    for request in controller.pending_requests:
        sender = request.sender_identifier
        col1, col2, col3 = st.columns([3, 1, 1])
        with col1:
            st.markdown(f"**{sender}**")
            st.caption(MSG_WANTS_TO_BE_FRIENDS)
        with col2:
            if st.button("Принять", key=f"accept_{sender}", type="primary"):
                _act(run_async(controller.accept_request(sender)))
        with col3:
            if st.button("Отклонить", key=f"decline_{sender}"):
                _act(run_async(controller.decline_request(sender)))


def render_friends(controller: FriendshipController) -> None:
    """Список друзей с кнопкой удаления."""
    st.markdown(f"#### 👥 Мои друзья ({len(controller.friends)})")

    if not controller.friends:
        st.info(MSG_NO_FRIENDS_YET)
        return

    for friend in controller.friends:
        col1, col2 = st.columns([4, 1])
        with col1:
            st.markdown(f"**{friend.identifier}**")
            if friend.email:
                st.caption(friend.email)
        with col2:
            if st.button("⨯", key=f"delete_{friend.identifier}", help="Удалить из друзей"):
                _act(run_async(controller.remove_friend(friend.identifier)))


def render_logout_button() -> None:
    """Отображает кнопку выхода."""
    if st.button("Выйти", type="secondary"):
        logout()
        flash(OperationResult.ok(MSG_LOGOUT))
        st.switch_page("pages/1_auth.py")


def _act(result: OperationResult) -> None:
    flash(result)
    st.rerun()
