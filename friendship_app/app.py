"""Главная страница - навигация и маршрутизация."""

import streamlit as st

from friendship_app.config import PAGE_CONFIGS, app_config
from friendship_app.core import check_authentication, init_session_state, restore_session
from friendship_app.logging_config import setup_logging

setup_logging(
    level=app_config.log_level,
    json_logs=app_config.json_logs,
    log_file=app_config.log_file,
)

# Настройка страницы
page_config = PAGE_CONFIGS["main"]
st.set_page_config(
    page_title=page_config.title,
    page_icon=page_config.icon,
    layout=page_config.layout,
    initial_sidebar_state=page_config.initial_sidebar_state,
)

# Инициализация session state
init_session_state(st.session_state)

# Токен из sessionStorage вкладки
restore_session()

if not check_authentication():
    st.switch_page("pages/1_auth.py")
else:
    st.switch_page("pages/2_friends.py")
