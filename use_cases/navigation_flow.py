"""Per-navigation routing orchestration: legacy redirects, start gate, protected pages."""

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional

from use_cases import protected_route, start_flow
from use_cases.redirect_policy import GateConfig
from use_cases.route_flow import Page, Paths, resolve_route
from use_cases.session_models import UserSession

NavigationStatus = Literal["RENDER", "REDIRECT"]

SETUP_PAGES = (Page.WELCOME, Page.CHOOSE_ACCOUNT_TYPE, Page.ONBOARDING)


@dataclass(frozen=True)
class NavigationDecision:
    """
    What the shell should do for one requested path.

    ``stored_redirect`` is always the redirect memory to write back, whether
    or not it changed. ``reason`` names the rule that produced the decision.
    """

    status: NavigationStatus
    path: str
    reason: str
    page: Page = Page.NOT_FOUND
    params: Dict[str, str] = field(default_factory=dict)
    target: Optional[str] = None
    stored_redirect: Optional[str] = None
    consumed_redirect: Optional[str] = None
    discarded_redirect: Optional[str] = None
    recorded_redirect: Optional[str] = None


def route_request(
    raw_path: Optional[str],
    session: Optional[UserSession],
    stored_redirect: Optional[str],
    config: Optional[GateConfig] = None,
) -> NavigationDecision:
    match = resolve_route(raw_path)

    if match.redirect_to is not None:
        return NavigationDecision(
            status="REDIRECT",
            path=match.path,
            reason="legacy_path",
            target=match.redirect_to,
            stored_redirect=stored_redirect,
        )

    if match.route.page == Page.START:
        decision = start_flow.evaluate_start(session, stored_redirect, config)
        resumed = decision.action == start_flow.StartAction.RESUME_REDIRECT
        return NavigationDecision(
            status="REDIRECT",
            path=match.path,
            reason=decision.action.value,
            page=Page.START,
            target=decision.target,
            stored_redirect=decision.stored_redirect,
            consumed_redirect=decision.target if resumed else None,
            discarded_redirect=decision.discarded_redirect,
        )

    if match.route.page == Page.AUTH and session is not None:
        return NavigationDecision(
            status="REDIRECT",
            path=match.path,
            reason="already_authenticated",
            page=Page.AUTH,
            target=Paths.START,
            stored_redirect=stored_redirect,
        )

    guard = protected_route.guard_route(match.route, session, match.path, stored_redirect, config)
    if guard.status == "STOP":
        return NavigationDecision(
            status="REDIRECT",
            path=match.path,
            reason=guard.reason,
            page=match.route.page,
            target=guard.target,
            stored_redirect=guard.stored_redirect,
            recorded_redirect=guard.stored_redirect if guard.redirect_recorded else None,
        )

    # Memory never survives a welcome or onboarding interruption.
    discarded = None
    if session is not None and match.route.page in SETUP_PAGES and stored_redirect:
        discarded, stored_redirect = stored_redirect, None

    return NavigationDecision(
        status="RENDER",
        path=match.path,
        reason=guard.reason,
        page=match.route.page,
        params=match.params,
        stored_redirect=stored_redirect,
        discarded_redirect=discarded,
    )


def audit_decision(decision: NavigationDecision, session: Optional[UserSession]) -> None:
    """Write redirect-memory changes and start-gate outcomes to the audit log."""
    import auth
    from infrastructure.repositories.sqlite_audit_repository import AuditAction

    repo = auth.get_audit_repo()
    actor_id = session.id if session else None
    actor_role = session.role if session else None

    if decision.recorded_redirect:
        repo.log_action(
            AuditAction.REDIRECT_STORED, target_type="redirect", actor_user_id=actor_id,
            actor_role=actor_role, target_id=decision.recorded_redirect, metadata={"reason": decision.reason}
        )
    if decision.consumed_redirect:
        repo.log_action(
            AuditAction.REDIRECT_CONSUMED, target_type="redirect", actor_user_id=actor_id,
            actor_role=actor_role, target_id=decision.consumed_redirect
        )
    if decision.discarded_redirect:
        repo.log_action(
            AuditAction.REDIRECT_DISCARDED, target_type="redirect", actor_user_id=actor_id,
            actor_role=actor_role, target_id=decision.discarded_redirect, metadata={"action": decision.reason},
            result="discard"
        )
    if decision.page == Page.START:
        repo.log_action(
            AuditAction.GATE_REDIRECT, target_type="route", actor_user_id=actor_id,
            actor_role=actor_role, target_id=decision.target, metadata={"action": decision.reason}
        )
