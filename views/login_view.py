import streamlit as st
import auth
import ui
from use_cases.route_flow import Paths
from utils import session_manager

def render_auth_screen(reason=None):
    st.title(f"🔐 Sign in to {ui.BRAND_NAME}")

    if reason == "session_rejected" and not st.session_state.session_diag_seen:
        st.warning("Your session has expired. Please sign in again.")
        st.session_state.session_diag_seen = True
    elif reason == "session_fetch_failed":
        st.warning("We couldn't reach Rise Local to check your session. Please sign in again or retry shortly.")

    if session_manager.get_stored_redirect():
        st.caption("Sign in to continue where you left off.")

    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")
        if submitted:
            if not email.strip() or not password:
                st.error("Enter your email and password.")
                return
            try:
                token, user = auth.login(email, password)
            except auth.InvalidCredentialsError as e:
                st.error(str(e))
                return
            except auth.BackendUnavailableError as e:
                st.error(str(e))
                return
            session_manager.sign_in(token, user)
            # The start gate decides where to go next, including resuming a deep link.
            session_manager.navigate(Paths.START)

    st.caption("New to Rise Local? Create an account in the Rise Local app, then sign in here.")
