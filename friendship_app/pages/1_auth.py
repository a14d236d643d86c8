"""Страница входа и регистрации."""

import logging

import streamlit as st

from friendship_app.config import PAGE_CONFIGS
from friendship_app.constants import (
    MAX_PASSWORD_LENGTH,
    MAX_USERNAME_LENGTH,
    SESSION_CURRENT_VIEW,
    VIEW_LOGIN,
    VIEW_REGISTER,
)
from friendship_app.core import (
    check_authentication,
    get_api_client,
    get_session_store,
    init_session_state,
    restore_session,
    sign_in,
    sign_up,
)
from friendship_app.utils import flash, run_async, show_flash, show_result

logger = logging.getLogger(__name__)

# Настройка страницы
page_config = PAGE_CONFIGS["auth"]
st.set_page_config(
    page_title=page_config.title,
    page_icon=page_config.icon,
    layout=page_config.layout,
    initial_sidebar_state=page_config.initial_sidebar_state,
)

# Инициализация session state
init_session_state(st.session_state)
restore_session()

# Проверка уже авторизованного пользователя
if check_authentication():
    st.switch_page("pages/2_friends.py")

show_flash()

if st.session_state[SESSION_CURRENT_VIEW] == VIEW_LOGIN:
    st.markdown("## Вход")
    st.caption("Войдите в свой аккаунт")

    with st.form(key="login_form"):
        login_username = st.text_input("Имя пользователя:")
        login_password = st.text_input("Пароль:", type="password")
        submit_login = st.form_submit_button("Войти", width="stretch")

    if submit_login:
        with st.spinner("Выполняю вход..."):
            result = run_async(
                sign_in(get_api_client(), get_session_store(), login_username, login_password)
            )
        if result.success:
            flash(result)
            st.switch_page("pages/2_friends.py")
        else:
            show_result(result)

    if st.button("Нет аккаунта? Зарегистрироваться", type="tertiary"):
        st.session_state[SESSION_CURRENT_VIEW] = VIEW_REGISTER
        st.rerun()

else:
    st.markdown("## Регистрация")
    st.caption("Создайте новый аккаунт")

    with st.form(key="register_form"):
        register_username = st.text_input(
            "Имя пользователя:",
            placeholder="3-30 символов",
            max_chars=MAX_USERNAME_LENGTH,
        )
        register_email = st.text_input("Email:", placeholder="your@email.com")
        register_password = st.text_input(
            "Пароль:",
            type="password",
            placeholder="8-80 символов",
            max_chars=MAX_PASSWORD_LENGTH,
        )
        register_password_confirm = st.text_input(
            "Подтвердите пароль:",
            type="password",
            placeholder="Повторите пароль",
            max_chars=MAX_PASSWORD_LENGTH,
        )
        submit_register = st.form_submit_button("Зарегистрироваться", width="stretch")

    if submit_register:
        with st.spinner("Создаю аккаунт..."):
            result = run_async(
                sign_up(
                    get_api_client(),
                    register_username,
                    register_email,
                    register_password,
                    register_password_confirm,
                )
            )
        if result.success:
            flash(result)
            st.session_state[SESSION_CURRENT_VIEW] = VIEW_LOGIN
            st.rerun()
        else:
            show_result(result)

    if st.button("Уже есть аккаунт? Войти", type="tertiary"):
        st.session_state[SESSION_CURRENT_VIEW] = VIEW_LOGIN
        st.rerun()
