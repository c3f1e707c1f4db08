"""HTTP client for one collection endpoint, speaking the shared error taxonomy."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from visacms.services.errors import (
    CmsError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
}

_STATUS_ERRORS = {
    400: ValidationError,
    404: NotFoundError,
    409: ConflictError,
}


def _error_for(response: httpx.Response) -> CmsError:
    """Build the exception matching *response*'s status and ``{error}`` body."""
    try:
        message = response.json().get("error") or response.reason_phrase
    except (ValueError, AttributeError):
        message = response.text or response.reason_phrase
    error_cls = _STATUS_ERRORS.get(response.status_code, StoreError)
    return error_cls(str(message))


class CollectionClient:
    """List/create/update/delete against ``path`` using an existing :class:`httpx.Client`.

    Any ``httpx.Client`` works, including FastAPI's ``TestClient``.
    """

    def __init__(self, http: httpx.Client, path: str) -> None:
        self._http = http
        self._path = path

    def _send(self, method: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = self._http.request(
                method, self._path, json=payload, headers=_NO_CACHE_HEADERS
            )
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, self._path, exc)
            raise StoreError(str(exc)) from exc

        if response.status_code >= 400:
            raise _error_for(response)
        return response.json()

    def list(self) -> List[Dict[str, Any]]:
        data = self._send("GET")
        if not isinstance(data, list):
            raise StoreError(f"Expected a list from {self._path}")
        return data

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._send("POST", payload)["data"]

    def update(self, key: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._send("PUT", {**payload, "slug": key})["data"]

    def delete(self, key: str) -> Dict[str, Any]:
        return self._send("DELETE", {"slug": key})["data"]
