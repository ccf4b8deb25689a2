"""Session DTOs shared across application layers."""

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional

Role = Literal["buyer", "vendor", "restaurant", "service_provider", "admin"]
AccountType = Literal["user", "business", "unknown"]

KNOWN_ROLES = frozenset({"buyer", "vendor", "restaurant", "service_provider", "admin"})
BUSINESS_ROLES = frozenset({"vendor", "restaurant", "service_provider"})
KNOWN_ACCOUNT_TYPES = frozenset({"user", "business"})


@dataclass(frozen=True)
class UserSession:
    """Authenticated user as reported by the backend. Anonymous is ``None``."""

    id: str
    role: Optional[str] = None
    account_type: Optional[str] = None
    onboarding_complete: bool = False
    welcome_completed: bool = False


def is_admin(user: UserSession) -> bool:
    return user.role == "admin"


def is_business(user: UserSession) -> bool:
    return user.role in BUSINESS_ROLES or user.account_type == "business"


def in_audience(user: UserSession, audience: Optional[str]) -> bool:
    """Pure audience check; admins belong to every audience."""
    if audience is None or is_admin(user):
        return True
    return audience == "business" and is_business(user)


def has_known_identity(user: UserSession) -> bool:
    return user.role in KNOWN_ROLES or user.account_type in KNOWN_ACCOUNT_TYPES


def needs_gate(user: UserSession) -> bool:
    """True while the start gate would hold the user on a setup screen."""
    if not user.welcome_completed:
        return True
    if is_admin(user):
        return False
    if not has_known_identity(user):
        return True
    return is_business(user) and not user.onboarding_complete


def _normalize_label(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip().lower()
    return value or None


def session_from_payload(payload: Optional[Mapping[str, Any]]) -> Optional[UserSession]:
    """
    Build a session from the ``/api/auth/user`` JSON body.
    Flags must be real booleans to count as set; a body without an id is anonymous.
    """
    if not isinstance(payload, Mapping):
        return None
    user_id = payload.get("id")
    if user_id is None or str(user_id).strip() == "":
        return None

    return UserSession(
        id=str(user_id),
        role=_normalize_label(payload.get("role")),
        account_type=_normalize_label(payload.get("accountType")),
        onboarding_complete=payload.get("onboardingComplete") is True,
        welcome_completed=payload.get("welcomeCompleted") is True,
    )
