"""Start gate: decides where a user lands from session and redirect memory."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from use_cases.redirect_policy import DEFAULT_CONFIG, GateConfig, sanitize_redirect
from use_cases.route_flow import Page, Paths, resolve_route
from use_cases.session_models import UserSession, has_known_identity, in_audience, is_admin, is_business


class StartAction(str, Enum):
    AUTH = "AUTH"
    WELCOME = "WELCOME"
    CHOOSE_ACCOUNT_TYPE = "CHOOSE_ACCOUNT_TYPE"
    ONBOARDING = "ONBOARDING"
    BUSINESS_DASHBOARD = "BUSINESS_DASHBOARD"
    CONSUMER_HOME = "CONSUMER_HOME"
    ADMIN = "ADMIN"
    RESUME_REDIRECT = "RESUME_REDIRECT"


@dataclass(frozen=True)
class StartDecision:
    """
    Result contract for the start gate.

    ``stored_redirect`` is the redirect memory after evaluation; the caller
    writes it back. ``discarded_redirect`` holds a stored value that was
    dropped instead of followed, for auditing.
    """

    action: StartAction
    target: str
    stored_redirect: Optional[str] = None
    discarded_redirect: Optional[str] = None


def _default_home(user: UserSession) -> StartDecision:
    if is_business(user):
        return StartDecision(action=StartAction.BUSINESS_DASHBOARD, target=Paths.DASHBOARD)
    return StartDecision(action=StartAction.CONSUMER_HOME, target=Paths.DISCOVER)


def _resumable(session: UserSession, stored_redirect: Optional[str], config: GateConfig) -> Optional[str]:
    """A stored path is followed only if it still renders for this user."""
    candidate = sanitize_redirect(stored_redirect, config)
    if candidate is None:
        return None
    match = resolve_route(candidate)
    if match.redirect_to is not None or match.route.page == Page.NOT_FOUND:
        return None
    if not in_audience(session, match.route.audience):
        return None
    return candidate


def _cleared(decision: StartDecision, stored_redirect: Optional[str]) -> StartDecision:
    if not stored_redirect:
        return decision
    return StartDecision(
        action=decision.action,
        target=decision.target,
        stored_redirect=None,
        discarded_redirect=stored_redirect,
    )


def evaluate_start(
    session: Optional[UserSession],
    stored_redirect: Optional[str],
    config: Optional[GateConfig] = None,
) -> StartDecision:
    """Apply the ordered gate rules. First matching rule wins; no I/O."""
    config = config or DEFAULT_CONFIG

    if session is None:
        return _cleared(StartDecision(action=StartAction.AUTH, target=Paths.AUTH), stored_redirect)

    if not session.welcome_completed:
        return _cleared(StartDecision(action=StartAction.WELCOME, target=Paths.WELCOME), stored_redirect)

    # Admins never resume a deep link.
    if is_admin(session):
        return _cleared(StartDecision(action=StartAction.ADMIN, target=Paths.ADMIN), stored_redirect)

    business = is_business(session)

    if not has_known_identity(session):
        return _cleared(
            StartDecision(action=StartAction.CHOOSE_ACCOUNT_TYPE, target=Paths.CHOOSE_ACCOUNT_TYPE),
            stored_redirect,
        )

    if not session.onboarding_complete:
        if business:
            decision = StartDecision(action=StartAction.ONBOARDING, target=Paths.ONBOARDING)
        else:
            decision = StartDecision(action=StartAction.CONSUMER_HOME, target=Paths.DISCOVER)
        return _cleared(decision, stored_redirect)

    resumable = _resumable(session, stored_redirect, config)
    if resumable is not None:
        return StartDecision(action=StartAction.RESUME_REDIRECT, target=resumable, stored_redirect=None)

    return _cleared(_default_home(session), stored_redirect)
