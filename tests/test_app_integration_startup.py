import sys
import importlib
from unittest.mock import patch, MagicMock
import pytest
import streamlit as st

from use_cases.bootstrap import StartupResult
from use_cases.auth_flow import AuthFlowResult
from use_cases.redirect_policy import DEFAULT_CONFIG
from use_cases.session_models import UserSession

def _import_app():
    if "app" in sys.modules:
        del sys.modules["app"]
    try:
        importlib.import_module("app")
    except Exception as e:
        pytest.fail(f"app.py import failed with error: {e}")

@patch("auth.get_audit_repo")
@patch("utils.session_manager.navigate")
@patch("utils.session_manager.current_path", return_value="/vendor/7")
@patch("use_cases.bootstrap.run_startup")
@patch("use_cases.auth_flow.load_current_session")
def test_app_renders_public_page_for_anonymous(
    mock_load_session,
    mock_run_startup,
    _mock_path,
    mock_navigate,
    mock_get_audit_repo,
):
    st.session_state.clear()
    st.session_state.gate_config = DEFAULT_CONFIG
    st.session_state.return_to = None
    mock_get_audit_repo.return_value = MagicMock()
    mock_run_startup.return_value = StartupResult(status="CONTINUE", planned_steps=())
    mock_load_session.return_value = AuthFlowResult(status="ANONYMOUS", reason="no_token")

    _import_app()

    mock_run_startup.assert_called_once()
    mock_load_session.assert_called_once()
    mock_navigate.assert_not_called()

@patch("auth.get_audit_repo")
@patch("utils.session_manager.navigate")
@patch("utils.session_manager.current_path", return_value="/messages/42")
@patch("use_cases.bootstrap.run_startup")
@patch("use_cases.auth_flow.load_current_session")
def test_app_remembers_protected_path_and_redirects_to_auth(
    mock_load_session,
    mock_run_startup,
    _mock_path,
    mock_navigate,
    mock_get_audit_repo,
):
    st.session_state.clear()
    st.session_state.gate_config = DEFAULT_CONFIG
    st.session_state.return_to = None
    mock_get_audit_repo.return_value = MagicMock()
    mock_run_startup.return_value = StartupResult(status="CONTINUE", planned_steps=())
    mock_load_session.return_value = AuthFlowResult(status="ANONYMOUS", reason="no_token")

    _import_app()

    mock_navigate.assert_called_once_with("/auth")
    assert st.session_state.return_to == "/messages/42"

@patch("auth.get_audit_repo")
@patch("utils.session_manager.navigate")
@patch("utils.session_manager.current_path", return_value="/start")
@patch("use_cases.bootstrap.run_startup")
@patch("use_cases.auth_flow.load_current_session")
def test_app_start_gate_resumes_deep_link(
    mock_load_session,
    mock_run_startup,
    _mock_path,
    mock_navigate,
    mock_get_audit_repo,
):
    st.session_state.clear()
    st.session_state.gate_config = DEFAULT_CONFIG
    st.session_state.return_to = "/messages/42"
    mock_get_audit_repo.return_value = MagicMock()
    mock_run_startup.return_value = StartupResult(status="CONTINUE", planned_steps=())
    user = UserSession(id="u1", role="buyer", onboarding_complete=True, welcome_completed=True)
    mock_load_session.return_value = AuthFlowResult(status="AUTHENTICATED", reason="authenticated", session=user)

    _import_app()

    mock_navigate.assert_called_once_with("/messages/42")
    assert st.session_state.return_to is None
