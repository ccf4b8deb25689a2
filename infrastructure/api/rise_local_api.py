import requests
import logging
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

class SessionFetchError(RuntimeError):
    pass

class LoginRejectedError(RuntimeError):
    pass

class RiseLocalApi:
    """Thin client for the marketplace backend auth endpoints."""

    def __init__(self, base_url: str, timeout: float = 5.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def fetch_current_user(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        GET /api/auth/user. Returns the user JSON, or None when the backend
        says the caller is not signed in. Anything else raises SessionFetchError.
        """
        if not token:
            return None
        try:
            resp = requests.get(
                f"{self.base_url}/api/auth/user",
                headers=self._headers(token),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            log.warning(f"⚠️ Network error while fetching session: {e}")
            raise SessionFetchError(f"Session fetch network error: {e}") from e

        if resp.status_code in (401, 403):
            return None
        if resp.status_code != 200:
            log.error(f"❌ Session endpoint returned HTTP {resp.status_code}")
            raise SessionFetchError(f"Session endpoint error: HTTP {resp.status_code}")
        try:
            body = resp.json()
        except ValueError as e:
            raise SessionFetchError("Session endpoint returned invalid JSON") from e
        # The endpoint answers `null` for a session without a user row.
        if body is None:
            return None
        if not isinstance(body, dict):
            raise SessionFetchError("Session endpoint returned an unexpected body")
        return body

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """POST /api/auth/login. Returns {"token": ..., "user": {...}}."""
        try:
            resp = requests.post(
                f"{self.base_url}/api/auth/login",
                json={"email": email, "password": password},
                headers=self._headers(None),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise SessionFetchError(f"Login network error: {e}") from e

        if resp.status_code in (400, 401, 403, 423, 429):
            try:
                message = resp.json().get("message")
            except (ValueError, AttributeError):
                message = None
            raise LoginRejectedError(message or "Invalid email or password.")
        if resp.status_code != 200:
            raise SessionFetchError(f"Login endpoint error: HTTP {resp.status_code}")

        try:
            body = resp.json()
        except ValueError as e:
            raise SessionFetchError("Login endpoint returned invalid JSON") from e
        if not isinstance(body, dict) or not body.get("token"):
            raise SessionFetchError("Login response did not include a token")
        return body

    def complete_welcome(self, token: str, role: Optional[str] = None) -> bool:
        """POST /api/welcome/complete, optionally picking buyer/vendor."""
        payload = {"role": role} if role else {}
        try:
            resp = requests.post(
                f"{self.base_url}/api/welcome/complete",
                json=payload,
                headers=self._headers(token),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            log.error(f"❌ Network error while completing welcome: {e}")
            return False
        if resp.status_code not in (200, 204):
            log.error(f"❌ Welcome completion failed: HTTP {resp.status_code}")
            return False
        return True

    def logout(self, token: Optional[str]) -> bool:
        if not token:
            return False
        try:
            resp = requests.post(
                f"{self.base_url}/api/auth/logout",
                headers=self._headers(token),
                timeout=self.timeout
            )
            return resp.status_code in (200, 204)
        except requests.RequestException as e:
            log.warning(f"⚠️ Logout request failed: {e}")
            return False
