"""Панель друзей: входящие запросы и список друзей."""

import logging

import streamlit as st

from friendship_app.components import render_friends, render_logout_button, render_requests
from friendship_app.config import PAGE_CONFIGS
from friendship_app.constants import SESSION_DASHBOARD_LOADED
from friendship_app.core import (
    get_friendship_controller,
    init_session_state,
    require_authentication,
    restore_session,
)
from friendship_app.utils import run_async, show_flash, show_result

logger = logging.getLogger(__name__)

# Настройка страницы
page_config = PAGE_CONFIGS["friends"]
st.set_page_config(
    page_title=page_config.title,
    page_icon=page_config.icon,
    layout=page_config.layout,
    initial_sidebar_state=page_config.initial_sidebar_state,
)

init_session_state(st.session_state)
restore_session()
require_authentication()

controller = get_friendship_controller()

# Первичная загрузка списков при открытии панели
if not st.session_state[SESSION_DASHBOARD_LOADED]:
    with st.spinner("Загрузка..."):
        for result in (run_async(controller.load_requests()), run_async(controller.load_friends())):
            if not result.success:
                show_result(result)
    st.session_state[SESSION_DASHBOARD_LOADED] = True

# ===== HEADER =====
col_title, col_actions = st.columns([4, 1], vertical_alignment="center")
with col_title:
    st.markdown("## Панель друзей")
with col_actions:
    render_logout_button()

show_flash()

if st.button("🔄 Обновить"):
    st.session_state[SESSION_DASHBOARD_LOADED] = False
    st.rerun()

# ===== MAIN CONTENT =====
col_requests, col_friends = st.columns(2, gap="large")
with col_requests:
    render_requests(controller)
with col_friends:
    render_friends(controller)
