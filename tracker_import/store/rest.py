from __future__ import annotations

import logging
import re
from typing import Any

import requests

from .base import PersistenceError

"""REST resource store.

Talks to the tracker backend: one collection endpoint per resource
(`/anime`, `/games`, ...) with GET list, POST create, PUT update and
DELETE delete. Responses shaped `{"success": ..., "data": ...}` are
unwrapped to `data`.

Error message policy (the message is what the user sees):
- JSON error body: `message`, else `error`, else "Request failed with <status>"
- non-JSON body: HTML <title> / <pre> text, else "Server returned <status> <reason>"
- broken JSON: "Invalid JSON response: <first 100 chars>"
- transport failure: the transport message
"""

__all__ = [
    "RestResourceStore",
    "DEFAULT_TIMEOUT_SECONDS",
]

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
NETWORK_ERROR_MESSAGE = "Network error - please check your connection"

_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_PRE_RE = re.compile(r"<pre>(.*?)</pre>", re.IGNORECASE | re.DOTALL)


class RestResourceStore:
    """ResourceStore backed by the tracker REST API.

    Usable as a context manager; the owned requests.Session is closed on exit.
    """

    def __init__(
        self,
        base_url: str,
        endpoint: str,
        *,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    @property
    def collection_url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    def item_url(self, record_id: Any) -> str:
        return f"{self.collection_url}/{record_id}"

    def list(self) -> list[dict[str, Any]]:
        data = self._request("GET", self.collection_url)
        if data is None:
            return []
        if not isinstance(data, list):
            raise PersistenceError(f"unexpected list response: {type(data).__name__}")
        return data

    def create(self, record: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", self.collection_url, json=record) or {}

    def update(self, record_id: Any, partial: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", self.item_url(record_id), json=partial) or {}

    def delete(self, record_id: Any) -> None:
        self._request("DELETE", self.item_url(record_id))

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> RestResourceStore:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def _request(self, method: str, url: str, json: Any = None) -> Any:
        logger.debug("store request start method=%s url=%s", method, url)
        try:
            resp = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            message = str(e) or NETWORK_ERROR_MESSAGE
            logger.debug("store request failed method=%s url=%s err=%s", method, url, message)
            raise PersistenceError(message) from e

        if resp.status_code == 204 or not resp.content:
            if not resp.ok:
                raise PersistenceError(
                    f"Server returned {resp.status_code} {resp.reason}", status_code=resp.status_code
                )
            return None

        content_type = resp.headers.get("content-type", "")
        if "application/json" not in content_type:
            text = resp.text
            logger.debug(
                "non-JSON response url=%s status=%s body=%s", url, resp.status_code, text[:200]
            )
            raise PersistenceError(_html_error_message(resp, text), status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise PersistenceError(
                f"Invalid JSON response: {resp.text[:100]}", status_code=resp.status_code
            ) from e

        if not resp.ok:
            message = None
            if isinstance(data, dict):
                message = data.get("message") or data.get("error")
            message = message or f"Request failed with {resp.status_code}"
            logger.debug("store request rejected url=%s status=%s message=%s", url, resp.status_code, message)
            raise PersistenceError(str(message), status_code=resp.status_code)

        if isinstance(data, dict):
            # 2xx bodies can still carry success=false
            if data.get("success") is False:
                raise PersistenceError(
                    str(data.get("message") or data.get("error") or "Request failed"),
                    status_code=resp.status_code,
                )
            if "data" in data:
                return data["data"]
        return data


def _html_error_message(resp: requests.Response, text: str) -> str:
    for pattern in (_TITLE_RE, _PRE_RE):
        m = pattern.search(text)
        if m:
            return m.group(1).strip()
    return f"Server returned {resp.status_code} {resp.reason}"
