"""
HTTP client for the VibeCheck API.

The client holds the explicit session (token and user id) returned by login
and turns error responses back into the domain exceptions the server raised.
"""
import logging
from datetime import date
from typing import Any, Dict, Optional
import httpx
from vibecheck.core.config import settings
from vibecheck.core.exceptions import (
    Conflict, NotAMember, NotFound, RecordOwnerMismatch, TransientIO, ValidationError, VibeCheckError,
    error_for_code,
)
from vibecheck.client.offline_queue import OfflineVibeRecord

logger = logging.getLogger(__name__)

_STATUS_FALLBACKS = {
    403: NotAMember,
    404: NotFound,
    409: Conflict,
    422: ValidationError,
}


def error_from_response(response: httpx.Response) -> VibeCheckError:
    """Map an error response to the matching domain exception."""
    try:
        body = response.json()
    except ValueError:
        body = {}

    message = None
    code = None
    if isinstance(body, dict):
        message = body.get("error") or body.get("detail")
        details = body.get("details")
        if isinstance(details, dict):
            code = details.get("code")
    if message is not None and not isinstance(message, str):
        message = str(message)

    if code:
        return error_for_code(code, message)
    error_cls = _STATUS_FALLBACKS.get(response.status_code, VibeCheckError)
    return error_cls(message or f"Request failed with status {response.status_code}")


class VibeClient:
    """Thin synchronous client over httpx."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Optional[httpx.Client] = None
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.token = token
        self.user_id: Optional[int] = None
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=timeout or settings.HTTP_TIMEOUT)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self._http.request(method, f"{self.base_url}{path}", headers=headers, **kwargs)
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} could not reach the API: {e}")
            raise TransientIO(f"Could not reach the server: {e}") from e

        if response.status_code >= 500:
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise TransientIO(f"Server error {response.status_code}")
        if response.is_error:
            raise error_from_response(response)
        return response.json()

    # Session

    def register(self, name: str, email: str, password: str = "") -> Dict[str, Any]:
        return self._request("POST", "/auth/signup", json={"name": name, "email": email, "password": password})

    def login(self, email: str, password: str = "") -> int:
        """Start a session; returns the user id."""
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["access_token"]
        self.user_id = data["user_id"]
        return self.user_id

    def logout(self) -> None:
        if self.token:
            self._request("POST", "/auth/logout", params={"token": self.token})
        self.token = None
        self.user_id = None

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/users/me")

    # Pairing

    def create_relationship(self) -> Dict[str, Any]:
        """Returns ``{"relationship_id": ..., "code": ...}``."""
        return self._request("POST", "/relationships")

    def join_relationship(self, code: str) -> int:
        return self._request("POST", "/relationships/join", json={"code": code})["relationship_id"]

    def get_relationship(self, relationship_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/relationships/{relationship_id}")

    def list_relationships(self) -> Any:
        return self._request("GET", "/users/me/relationships")

    # Vibes

    def submit_vibe(
        self,
        relationship_id: int,
        mood: int,
        note: Optional[str] = None,
        vibe_date: Optional[date] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"mood": mood, "note": note}
        if vibe_date is not None:
            payload["date"] = vibe_date.isoformat()
        return self._request("POST", f"/relationships/{relationship_id}/vibes", json=payload)

    def submit_offline_record(self, record: OfflineVibeRecord) -> Dict[str, Any]:
        """
        Replay a queued vibe under the date it was captured on.
        Only the user who captured it may replay it; anyone else leaves it queued.
        """
        if record.user_id != self.user_id:
            raise RecordOwnerMismatch(
                f"Offline vibe {record.id} belongs to user {record.user_id}, not the logged-in user"
            )
        return self.submit_vibe(record.relationship_id, record.mood, record.note, vibe_date=record.captured_on)

    def get_vibes(self, relationship_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/relationships/{relationship_id}/vibes")
