"""HTTP client abstraction for the GitHub release API.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, cast, runtime_checkable

from docship import __version__
from docship.core.result import Err, Ok, Result
from docship.core.structured import as_json_object

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]

JsonObject = dict[str, Any]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """HTTP operations needed to publish a release."""

    def post_json(
        self,
        url: str,
        payload: Mapping[str, object],
        headers: Mapping[str, str] | None = None,
    ) -> Result[JsonObject, HttpError]:
        """POST a JSON body and parse the JSON object in the response."""
        ...

    def upload_file(
        self,
        url: str,
        path: Path,
        content_type: str,
        headers: Mapping[str, str] | None = None,
    ) -> Result[JsonObject, HttpError]:
        """POST a file's bytes as the request body."""
        ...


class RealHttpClient:
    """HTTP client using urllib with system certificates."""

    def __init__(self, timeout: float = 60.0, user_agent: str = f"docship/{__version__}") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _post(
        self,
        url: str,
        body: bytes,
        content_type: str,
        headers: Mapping[str, str] | None,
    ) -> Result[JsonObject, HttpError]:
        all_headers = {
            "User-Agent": self.user_agent,
            "Content-Type": content_type,
            "Content-Length": str(len(body)),
        }
        if headers:
            all_headers.update(headers)

        try:
            req = urllib.request.Request(url, data=body, headers=all_headers, method="POST")
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                raw: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=_error_message(e)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        try:
            data = as_json_object(json.loads(raw.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        return Ok(cast(JsonObject, data))

    def post_json(
        self,
        url: str,
        payload: Mapping[str, object],
        headers: Mapping[str, str] | None = None,
    ) -> Result[JsonObject, HttpError]:
        body = json.dumps(payload).encode("utf-8")
        return self._post(url, body, "application/json", headers)

    def upload_file(
        self,
        url: str,
        path: Path,
        content_type: str,
        headers: Mapping[str, str] | None = None,
    ) -> Result[JsonObject, HttpError]:
        try:
            body = path.read_bytes()
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=f"cannot read {path}: {e}"))
        return self._post(url, body, content_type, headers)


def _error_message(e: urllib.error.HTTPError) -> str:
    """Prefer GitHub's JSON ``message`` over the bare HTTP reason."""
    try:
        data = as_json_object(json.loads(e.read().decode("utf-8")))
    except (OSError, ValueError):
        return str(e.reason)
    if data is not None and isinstance(data.get("message"), str):
        return cast(str, data["message"])
    return str(e.reason)


class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are keyed by URL; unknown URLs answer 404.

    Usage:
        client = MockHttpClient()
        client.set_response("https://api.github.com/repos/o/r/releases", {"id": 1})
        result = client.post_json("https://api.github.com/repos/o/r/releases", {})
        assert result == Ok({"id": 1})
    """

    def __init__(self) -> None:
        self._responses: dict[str, JsonObject | HttpError] = {}
        self.calls: list[tuple[str, str, object]] = []

    def set_response(self, url: str, response: JsonObject | HttpError) -> None:
        self._responses[url] = response

    def _respond(self, url: str) -> Result[JsonObject, HttpError]:
        if url not in self._responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        response = self._responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def post_json(
        self,
        url: str,
        payload: Mapping[str, object],
        headers: Mapping[str, str] | None = None,
    ) -> Result[JsonObject, HttpError]:
        self.calls.append(("post_json", url, dict(payload)))
        return self._respond(url)

    def upload_file(
        self,
        url: str,
        path: Path,
        content_type: str,
        headers: Mapping[str, str] | None = None,
    ) -> Result[JsonObject, HttpError]:
        self.calls.append(("upload_file", url, path))
        return self._respond(url)
