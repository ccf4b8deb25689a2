"""Application layer contracts for orchestrating high-level flows."""

from .auth_flow import AuthFlowResult, AuthFlowStatus, load_current_session
from .bootstrap import StartupResult, StartupStatus, run_startup
from .navigation_flow import NavigationDecision, route_request
from .protected_route import GuardResult, guard_route
from .redirect_policy import GateConfig, is_gate_path, is_safe_return_path, load_gate_config, sanitize_redirect
from .route_flow import Page, Paths, Route, RouteMatch, normalize_path, resolve_route
from .session_models import UserSession, has_known_identity, in_audience, is_admin, is_business, needs_gate, session_from_payload
from .start_flow import StartAction, StartDecision, evaluate_start

__all__ = [
    "AuthFlowResult",
    "AuthFlowStatus",
    "GateConfig",
    "GuardResult",
    "NavigationDecision",
    "Page",
    "Paths",
    "Route",
    "RouteMatch",
    "StartAction",
    "StartDecision",
    "StartupResult",
    "StartupStatus",
    "UserSession",
    "evaluate_start",
    "guard_route",
    "has_known_identity",
    "in_audience",
    "is_admin",
    "is_business",
    "is_gate_path",
    "is_safe_return_path",
    "load_current_session",
    "load_gate_config",
    "needs_gate",
    "normalize_path",
    "resolve_route",
    "route_request",
    "run_startup",
    "sanitize_redirect",
    "session_from_payload",
]
