from infrastructure.api.rise_local_api import LoginRejectedError, RiseLocalApi, SessionFetchError
from infrastructure.repositories.sqlite_audit_repository import AuditAction, SQLiteAuditRepository
from use_cases.session_models import UserSession, session_from_payload
import logging
import os
import streamlit as st
from typing import Optional, Tuple

log = logging.getLogger(__name__)

class InvalidCredentialsError(Exception):
    pass

class BackendUnavailableError(Exception):
    pass

AUDIT_DB = "audit.db"
DEFAULT_API_BASE_URL = "http://localhost:5000"
DEFAULT_API_TIMEOUT = 5.0

def get_secret(key):
    try:
        return st.secrets.get(key)
    except FileNotFoundError:
        return None

def get_setting(key, default=None):
    return get_secret(key) or os.getenv(key) or default

_api = None
_audit_repo = None

def get_api() -> RiseLocalApi:
    global _api
    base_url = get_setting("API_BASE_URL", DEFAULT_API_BASE_URL)
    try:
        timeout = float(get_setting("API_TIMEOUT_SECONDS", DEFAULT_API_TIMEOUT))
    except (TypeError, ValueError):
        timeout = DEFAULT_API_TIMEOUT
    if _api is None or _api.base_url != base_url.rstrip("/") or _api.timeout != timeout:
        _api = RiseLocalApi(base_url, timeout=timeout)
    return _api

def get_audit_repo() -> SQLiteAuditRepository:
    global _audit_repo
    db_path = get_setting("AUDIT_DB", AUDIT_DB)
    if _audit_repo is None or _audit_repo.db_path != db_path:
        _audit_repo = SQLiteAuditRepository(db_path)
    return _audit_repo

def init_audit_db():
    get_audit_repo().init_audit_db()

def fetch_current_session(token) -> Optional[UserSession]:
    """
    Ask the backend who owns the token. None means anonymous (no token,
    token rejected, or a malformed user). Raises BackendUnavailableError when
    the backend could not answer; callers treat that as anonymous too.
    """
    if not token:
        return None
    try:
        payload = get_api().fetch_current_user(token)
    except SessionFetchError as e:
        log.warning(f"Session fetch failed, treating visitor as anonymous: {e}")
        get_audit_repo().log_action(
            AuditAction.SESSION_FETCH_FAILED,
            target_type="session",
            metadata={"error_message": str(e)[:200]},
            result="fail"
        )
        raise BackendUnavailableError(str(e)) from e
    session = session_from_payload(payload)
    if payload is not None and session is None:
        log.warning("Session endpoint returned a user without an id; treating as anonymous.")
    return session

def login(email, password) -> Tuple[str, Optional[UserSession]]:
    email = email.strip()
    try:
        body = get_api().login(email, password)
    except LoginRejectedError as e:
        get_audit_repo().log_action(
            AuditAction.LOGIN_FAIL,
            target_type="auth",
            metadata={"reason": "rejected"},
            result="fail"
        )
        raise InvalidCredentialsError(str(e)) from e
    except SessionFetchError as e:
        log.error(f"Login failed, backend unavailable: {e}")
        raise BackendUnavailableError("Rise Local is temporarily unavailable. Please try again.") from e

    session = session_from_payload(body.get("user"))
    get_audit_repo().log_action(
        AuditAction.LOGIN_SUCCESS,
        target_type="auth",
        actor_user_id=session.id if session else None,
        actor_role=session.role if session else None,
    )
    return body["token"], session

def complete_welcome(token, user: UserSession, role=None) -> bool:
    done = get_api().complete_welcome(token, role=role)
    get_audit_repo().log_action(
        AuditAction.WELCOME_COMPLETE,
        target_type="welcome",
        actor_user_id=user.id,
        actor_role=user.role,
        metadata={"role": role} if role else None,
        result="success" if done else "fail"
    )
    return done

def logout(token, user: Optional[UserSession] = None):
    get_api().logout(token)
    get_audit_repo().log_action(
        AuditAction.LOGOUT,
        target_type="auth",
        actor_user_id=user.id if user else None,
        actor_role=user.role if user else None,
    )
