"""
Client for the login/signup backend.

The dashboard only uses the result as a navigation gate: a 2xx response
lets the user through, anything else shows the server's message verbatim.
"""

import logging
from dataclasses import dataclass
from typing import Any

import requests

from .config import AUTH_BASE_URL, HTTP_TIMEOUT_SEC, LOGIN_PATH, SIGNUP_PATH
from .errors import AuthError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    email: str
    token: str | None = None
    payload: dict[str, Any] | None = None


def _error_message(resp: requests.Response) -> str:
    """Pull the user-facing message out of a failed response."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value
    text = (resp.text or "").strip()
    if text:
        return text
    return resp.reason or f"HTTP {resp.status_code}"


class AuthClient:
    def __init__(
        self,
        base_url: str = AUTH_BASE_URL,
        session: requests.Session | None = None,
        timeout: float = HTTP_TIMEOUT_SEC,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def login(self, email: str, password: str) -> AuthResult:
        body = self._post(LOGIN_PATH, {"email": email, "password": password})
        token = body.get("token") if isinstance(body, dict) else None
        logger.info("Login succeeded for %s", email)
        return AuthResult(email=email, token=token, payload=body if isinstance(body, dict) else None)

    def signup(self, name: str, email: str, password: str) -> AuthResult:
        body = self._post(SIGNUP_PATH, {"name": name, "email": email, "password": password})
        logger.info("Signup succeeded for %s", email)
        return AuthResult(email=email, payload=body if isinstance(body, dict) else None)

    def _post(self, path: str, payload: dict[str, str]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Auth request to %s failed: %s", url, e)
            raise AuthError(f"Could not reach the login server: {e}") from e

        if not resp.ok:
            message = _error_message(resp)
            logger.info("Auth request to %s rejected (%s): %s", url, resp.status_code, message)
            raise AuthError(message, status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError:
            return None
