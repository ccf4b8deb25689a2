import json
import streamlit as st
import streamlit.components.v1 as components
import auth
from typing import Optional
from use_cases.session_models import UserSession

"""
SESSION STATE CONTRACT

This module owns the per-tab Streamlit session state. Every Streamlit
browser session is one tab, so these keys never leak between tabs.

Keys in st.session_state:

auth_token: str | None
    bearer token for the Rise Local backend
    default: None
    owner: session_manager

auth_user: UserSession | None
    session fetched during the current script run
    default: None
    owner: auth_flow

return_to: str | None
    redirect memory: the protected path an anonymous user tried to open
    default: None
    owner: session_manager (written only from router decisions)

gate_config: GateConfig | None
    deny-list data loaded at startup
    default: None
    owner: bootstrap

session_diag_seen: bool
    prevents repeating the "session expired" notice
    default: False
    owner: system
"""

TOKEN_COOKIE = "rise_local_token"
PATH_PARAM = "path"

def init_session_state():
    if 'auth_token' not in st.session_state:
        st.session_state.auth_token = None
    if 'auth_user' not in st.session_state:
        st.session_state.auth_user = None
    if 'return_to' not in st.session_state:
        st.session_state.return_to = None
    if 'gate_config' not in st.session_state:
        st.session_state.gate_config = None
    if "session_diag_seen" not in st.session_state:
        st.session_state.session_diag_seen = False

def restore_token_from_cookie():
    if st.session_state.auth_token is not None:
        return
    try:
        token_from_cookie = st.context.cookies.get(TOKEN_COOKIE)
    except Exception:
        # During some tests contexts might not be fully available
        token_from_cookie = None
    if token_from_cookie:
        from urllib.parse import unquote
        st.session_state.auth_token = unquote(token_from_cookie)

def get_stored_redirect() -> Optional[str]:
    return st.session_state.get("return_to")

def set_stored_redirect(path: Optional[str]):
    st.session_state.return_to = path

def clear_stored_redirect():
    st.session_state.return_to = None

def current_path() -> str:
    return st.query_params.get(PATH_PARAM, "/")

def navigate(path: str):
    st.query_params[PATH_PARAM] = path
    st.rerun()

def persist_browser_auth_token(token: str):
    components.html(
        f"""
        <script>
            var cookieStr = "{TOKEN_COOKIE}=" + encodeURIComponent({json.dumps(token)}) + "; path=/; max-age=604800; SameSite=Lax";
            document.cookie = cookieStr;
            try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
        </script>
        """,
        height=0,
    )

def clear_browser_auth_token():
    components.html(
        f"""
        <script>
          document.cookie = "{TOKEN_COOKIE}=; path=/; max-age=0; SameSite=Lax";
          try {{ window.parent.document.cookie = "{TOKEN_COOKIE}=; path=/; max-age=0; SameSite=Lax"; }} catch (e) {{}}
        </script>
        """,
        height=0,
    )

def sign_in(token: str, user: Optional[UserSession]):
    st.session_state.auth_token = token
    st.session_state.auth_user = user
    st.session_state.session_diag_seen = False
    persist_browser_auth_token(token)

def drop_local_session():
    """Forget the token after the backend stopped recognising it."""
    st.session_state.auth_token = None
    st.session_state.auth_user = None
    clear_browser_auth_token()

def logout():
    if st.session_state.auth_token:
        auth.logout(st.session_state.auth_token, st.session_state.auth_user)
    clear_browser_auth_token()
    st.session_state.auth_user = None
    st.session_state.auth_token = None
    # A deep link must not survive into the next person's session.
    clear_stored_redirect()
    navigate("/auth")
