import streamlit as st
import logging
from datetime import datetime

from infrastructure.observability import setup_observability
setup_observability()

import ui
from utils import session_manager
from use_cases import auth_flow, bootstrap, navigation_flow
from use_cases.route_flow import Page
from views import admin_view, login_view, marketplace_view, welcome_view

log = logging.getLogger("app")

# --- PAGE SETTINGS ---
st.set_page_config(page_title="Rise Local", layout="wide", initial_sidebar_state="expanded")

# Health Check (Basic load-balancer heartbeat)
if st.query_params.get("health") == "1":
    st.write({"status": "ok", "version": "1.0", "uptime": datetime.utcnow().isoformat()})
    st.stop()

ui.setup_style()

# --- STARTUP ORCHESTRATION ---
startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.stop()

# --- SESSION ---
# Fetched on every run; a failed fetch is anonymous.
auth_result = auth_flow.load_current_session()
user = auth_result.session

# --- ROUTING ---
requested_path = session_manager.current_path()
decision = navigation_flow.route_request(
    requested_path,
    user,
    session_manager.get_stored_redirect(),
    st.session_state.gate_config,
)
session_manager.set_stored_redirect(decision.stored_redirect)
navigation_flow.audit_decision(decision, user)

if decision.status == "REDIRECT":
    log.info(f"{decision.path} -> {decision.target} ({decision.reason})")
    ui.show_redirecting(decision.target)
    session_manager.navigate(decision.target)
    st.stop()
else:
    # Headless/bare runs do not halt on st.stop(), so pages only render here.
    marketplace_view.render_nav(user)

    page = decision.page
    if page == Page.AUTH:
        login_view.render_auth_screen(auth_result.reason)
    elif page == Page.WELCOME:
        welcome_view.render_welcome(user)
    elif page == Page.CHOOSE_ACCOUNT_TYPE:
        welcome_view.render_choose_account_type(user)
    elif page == Page.ONBOARDING:
        marketplace_view.render_onboarding(user)
    elif page == Page.DASHBOARD:
        marketplace_view.render_dashboard(user)
    elif page == Page.ADMIN:
        admin_view.render_admin_panel()
    elif page == Page.NOT_FOUND:
        marketplace_view.render_not_found(decision.path)
    else:
        marketplace_view.render_page(page, decision.params, user)
