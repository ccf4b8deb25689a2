"""Protected-route wrapper applied by the page router before rendering."""

from dataclasses import dataclass
from typing import Literal, Optional

from use_cases import rbac_policy
from use_cases.redirect_policy import DEFAULT_CONFIG, GateConfig, sanitize_redirect
from use_cases.route_flow import Paths, Route
from use_cases.session_models import UserSession, needs_gate

GuardStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class GuardResult:
    """Result contract for the wrapper; ``stored_redirect`` is the memory to keep."""

    status: GuardStatus
    reason: str
    target: Optional[str] = None
    stored_redirect: Optional[str] = None
    redirect_recorded: bool = False


def guard_route(
    route: Route,
    session: Optional[UserSession],
    current_path: str,
    stored_redirect: Optional[str],
    config: Optional[GateConfig] = None,
) -> GuardResult:
    config = config or DEFAULT_CONFIG

    if not route.protected:
        return GuardResult(status="CONTINUE", reason="public", stored_redirect=stored_redirect)

    if session is None:
        remembered = sanitize_redirect(current_path, config)
        if remembered is None:
            # Gate or unsafe path: keep whatever was remembered before.
            return GuardResult(status="STOP", reason="auth_required", target=Paths.AUTH, stored_redirect=stored_redirect)
        return GuardResult(
            status="STOP",
            reason="auth_required",
            target=Paths.AUTH,
            stored_redirect=remembered,
            redirect_recorded=True,
        )

    if route.require_onboarding and needs_gate(session):
        return GuardResult(status="STOP", reason="gate_pending", target=Paths.START, stored_redirect=stored_redirect)

    if route.audience is not None and not rbac_policy.enforce(session, route.audience, current_path):
        return GuardResult(status="STOP", reason="audience_denied", target=Paths.START, stored_redirect=stored_redirect)

    return GuardResult(status="CONTINUE", reason="authenticated", stored_redirect=stored_redirect)
