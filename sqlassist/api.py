"""HTTP client for the NL→SQL backend.

The backend issues an HttpOnly JWT cookie on login, so one `requests.Session`
per browser session carries the credentials. When the login response also
contains an `access_token` it is sent as a bearer token as well.
"""
import logging
from typing import Any, Optional, Sequence

import requests
from pydantic import ValidationError

from sqlassist.config import get_settings
from sqlassist.errors import BackendError, UnauthorizedError
from sqlassist.models import InferResult, Profile, QueryHistory, SchemaInfo
from sqlassist.schema import normalize_schema

logger = logging.getLogger(__name__)

SESSION_EXPIRED = "Your session has expired. Please log in again."

# (filename, content, mime type)
UploadFile = tuple[str, bytes, str]


def error_message(response: requests.Response, default: str) -> str:
    """User-facing message from an error body: detail, message or error"""
    try:
        body = response.json()
    except ValueError:
        return default

    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return default


class BackendClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        settings = get_settings()
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session or requests.Session()
        self.token: Optional[str] = None

    def _request(self, method: str, path: str, default_error: str, **kwargs) -> Any:
        headers = dict(kwargs.pop("headers", None) or {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        logger.debug("%s %s", method, path)
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise BackendError(default_error) from e

        if response.status_code == 401:
            logger.warning("%s %s unauthorized", method, path)
            raise UnauthorizedError(error_message(response, SESSION_EXPIRED), 401)

        if not response.ok:
            logger.warning("%s %s returned %s", method, path, response.status_code)
            raise BackendError(error_message(response, default_error), response.status_code)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(default_error, response.status_code) from e

    # ---- auth ----

    def login(self, email: str, password: str) -> Profile:
        data = self._request(
            "POST", "/auth/login", "Could not log in.",
            json={"email": email, "password": password},
        )
        data = data if isinstance(data, dict) else {}
        token = data.get("access_token")
        if isinstance(token, str) and token:
            self.token = token
        user = data.get("user") if isinstance(data.get("user"), dict) else data
        return Profile(id=str(user.get("id") or ""), email=str(user.get("email") or email))

    def register(self, email: str, password: str) -> None:
        self._request(
            "POST", "/auth/register", "Could not create the account.",
            json={"email": email, "password": password},
        )

    def me(self) -> Profile:
        """Current user; raises UnauthorizedError when there is no valid session"""
        data = self._request("GET", "/auth/me", "Could not validate the session.")
        if not isinstance(data, dict) or not data:
            raise UnauthorizedError(SESSION_EXPIRED, 401)
        return Profile(id=str(data.get("id") or ""), email=str(data.get("email") or ""))

    def logout(self) -> None:
        try:
            self._request("POST", "/auth/logout", "Could not log out.", json={})
        finally:
            self.token = None
            self.session.cookies.clear()

    # ---- queries ----

    def history(self) -> list[QueryHistory]:
        data = self._request("GET", "/history", "Could not load the query history.")
        if not isinstance(data, list):
            return []
        try:
            return [QueryHistory.model_validate(item) for item in data]
        except ValidationError as e:
            logger.warning("malformed history entry: %s", e)
            raise BackendError("Could not load the query history.") from e

    def upload(self, mode: str, engine: str, files: Sequence[UploadFile]) -> str:
        """Send database scripts; returns the new database id"""
        data = self._request(
            "POST", "/upload", "Error uploading the file.",
            data={"mode": mode, "engine": engine},
            files=[("files", f) for f in files],
        )
        database_id = data.get("database_id") if isinstance(data, dict) else None
        if not database_id:
            raise BackendError("The backend did not return a database_id")
        return str(database_id)

    def schema(self, database_id: str) -> SchemaInfo:
        data = self._request("GET", f"/schema/{database_id}", "Could not load the schema.")
        return normalize_schema(data, database_id)

    def infer(self, database_id: str, natural_query: str) -> InferResult:
        data = self._request(
            "POST", "/infer", "An error occurred while processing the query.",
            json={"database_id": database_id, "natural_query": natural_query},
        )
        return InferResult.model_validate(data if isinstance(data, dict) else {})

    def speech_infer(self, database_id: str, audio: UploadFile) -> InferResult:
        data = self._request(
            "POST", "/speech-infer", "An error occurred while processing the audio.",
            data={"database_id": database_id},
            files={"audio": audio},
        )
        return InferResult.model_validate(data if isinstance(data, dict) else {})
