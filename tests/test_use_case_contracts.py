from unittest.mock import patch

from use_cases import auth_flow, bootstrap, navigation_flow, start_flow


@patch("use_cases.auth_flow.session_manager.restore_token_from_cookie")
def test_auth_flow_contract(_) -> None:
    assert hasattr(auth_flow, "load_current_session")
    auth_flow.session_manager.st.session_state.clear()
    result = auth_flow.load_current_session()
    assert isinstance(result, auth_flow.AuthFlowResult)
    assert result.status in {"AUTHENTICATED", "ANONYMOUS"}


@patch("use_cases.bootstrap.auth.init_audit_db")
@patch("use_cases.bootstrap.auth.get_setting", return_value=None)
def test_bootstrap_contract(_, __) -> None:
    assert hasattr(bootstrap, "run_startup")
    bootstrap.session_manager.st.session_state.clear()
    result = bootstrap.run_startup()
    assert isinstance(result, bootstrap.StartupResult)
    assert result.status in {"CONTINUE", "STOP"}
    assert isinstance(result.planned_steps, tuple)


def test_start_flow_contract() -> None:
    decision = start_flow.evaluate_start(None, None)
    assert isinstance(decision, start_flow.StartDecision)
    assert isinstance(decision.action, start_flow.StartAction)
    assert decision.target.startswith("/")


def test_navigation_contract() -> None:
    decision = navigation_flow.route_request("/", None, None)
    assert isinstance(decision, navigation_flow.NavigationDecision)
    assert decision.status in {"RENDER", "REDIRECT"}
