"""Audience checks for role-restricted pages."""

from typing import Optional
from use_cases.session_models import UserSession, in_audience


def enforce(user: Optional[UserSession], audience: Optional[str], path: str = "") -> bool:
    """
    Evaluates if the user belongs to the page audience.
    Returns True if authorized, False otherwise.
    """
    import auth
    from infrastructure.repositories.sqlite_audit_repository import AuditAction

    if audience is None:
        authorized = True
    else:
        authorized = user is not None and in_audience(user, audience)

    if not authorized:
        auth.get_audit_repo().log_action(
             AuditAction.ROUTE_DENIED,
             target_type="route",
             actor_user_id=user.id if user else None,
             actor_role=user.role if user else None,
             target_id=path or None,
             metadata={"audience": audience, "reason": "insufficient_rights"},
             result="deny"
        )

    return authorized
