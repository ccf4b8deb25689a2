"""Session loading orchestration (application layer)."""

from dataclasses import dataclass
from typing import Literal, Optional

import auth
from use_cases.session_models import UserSession
from utils import session_manager

AuthFlowStatus = Literal["AUTHENTICATED", "ANONYMOUS"]


@dataclass(frozen=True)
class AuthFlowResult:
    """Result contract for session loading."""

    status: AuthFlowStatus
    reason: str
    session: Optional[UserSession] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.session.id if self.session is not None else None


def load_current_session() -> AuthFlowResult:
    """Fetch the session for this run. Fetch failures fail closed to anonymous."""
    session_manager.init_session_state()
    session_manager.restore_token_from_cookie()

    token = session_manager.st.session_state.get("auth_token")
    if not token:
        session_manager.st.session_state.auth_user = None
        return AuthFlowResult(status="ANONYMOUS", reason="no_token")

    try:
        session = auth.fetch_current_session(token)
    except auth.BackendUnavailableError:
        # Keep the token; the next run may reach the backend again.
        session_manager.st.session_state.auth_user = None
        return AuthFlowResult(status="ANONYMOUS", reason="session_fetch_failed")

    session_manager.st.session_state.auth_user = session
    if session is None:
        session_manager.drop_local_session()
        return AuthFlowResult(status="ANONYMOUS", reason="session_rejected")

    return AuthFlowResult(status="AUTHENTICATED", reason="authenticated", session=session)
