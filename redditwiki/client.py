"""HTTP access to the Reddit API: a thin client and list options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import requests


class RedditAPIError(Exception):
    """Raised when the API answers with an error status or an unreadable body."""

    def __init__(self, message: str, status_code: int | None = None, url: str = "") -> None:
        self.message = message
        self.status_code = status_code
        self.url = url
        prefix = f"{status_code} " if status_code is not None else ""
        super().__init__(f"{prefix}{message}" + (f" ({url})" if url else ""))


@dataclass(frozen=True)
class ListOptions:
    """Paging options for listing endpoints."""

    limit: int = 0
    after: str = ""
    before: str = ""

    def to_params(self) -> dict[str, str]:
        """Return the query parameters, leaving out unset options."""
        params: dict[str, str] = {}
        if self.limit:
            params["limit"] = str(self.limit)
        if self.after:
            params["after"] = self.after
        if self.before:
            params["before"] = self.before
        return params


class Client:
    """Sends requests to the API and decodes JSON replies."""

    timeout: float = 30.0

    def __init__(self, base_url: str, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._url(path)
        response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        if not response.ok:
            message = response.text.strip() or response.reason or "request failed"
            raise RedditAPIError(message, response.status_code, url)
        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RedditAPIError("invalid JSON in response", response.status_code, url) from exc

    def get_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET a path and return the decoded JSON body, or None if it is empty."""
        query = {key: value for key, value in (params or {}).items() if value is not None}
        return self._request("GET", path, params=query)

    def post_form(self, path: str, form: Mapping[str, str]) -> Any:
        """POST a url-encoded form and return the decoded JSON body, or None if it is empty."""
        return self._request("POST", path, data=dict(form))