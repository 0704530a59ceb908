from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional

import httpx
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from .fixtures import RETRY_ATTEMPTS, RETRY_BACKOFF_SECONDS

logger = logging.getLogger(__name__)

SESSION_COOKIE_RE = re.compile(r"JSESSIONID=[^;]+")


@dataclass(frozen=True)
class RetryPolicy:
    """Linear backoff on transport failures: waits ``backoff_seconds * n`` before attempt n+1.

    HTTP error statuses are responses, not failures, and are never retried.
    """

    attempts: int = RETRY_ATTEMPTS
    backoff_seconds: float = RETRY_BACKOFF_SECONDS
    sleep: Callable[[float], None] = time.sleep

    def with_attempts(self, attempts: int) -> "RetryPolicy":
        return replace(self, attempts=attempts)

    def retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_incrementing(start=self.backoff_seconds, increment=self.backoff_seconds),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self.sleep,
            reraise=True,
        )

    def call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        return self.retrying()(fn, *args, **kwargs)


@dataclass
class ApiResponse:
    status: int
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def field(self, key: str) -> Any:
        return self.data.get(key) if isinstance(self.data, dict) else None

    def has(self, key: str) -> bool:
        return isinstance(self.data, dict) and key in self.data

    def as_list(self) -> List[Any]:
        return self.data if isinstance(self.data, list) else []


def parse_body(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def extract_session_cookie(headers: httpx.Headers) -> Optional[str]:
    for value in headers.get_list("set-cookie"):
        match = SESSION_COOKIE_RE.search(value)
        if match:
            return match.group(0)
    return None


def resolve_created_id(data: Any) -> Optional[Any]:
    """Id of a created record: ``id``, falling back to ``trainerId`` (login-shaped register replies)."""
    if not isinstance(data, dict):
        return None
    return data.get("id") or data.get("trainerId") or None


class ApiClient:
    """JSON client bound to one base URL and one session cookie."""

    def __init__(
        self,
        base_url: str,
        retry: Optional[RetryPolicy] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.retry = retry or RetryPolicy()
        self.session_cookie = ""
        self._http = httpx.Client(timeout=timeout, transport=transport)

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def reset_session(self) -> None:
        self.session_cookie = ""

    def get(self, path: str, *, authenticated: bool = True, retry: Optional[RetryPolicy] = None) -> ApiResponse:
        return self.request("GET", path, authenticated=authenticated, retry=retry)

    def post(self, path: str, body: Any, *, authenticated: bool = True) -> ApiResponse:
        return self.request("POST", path, body, authenticated=authenticated)

    def delete(self, path: str) -> ApiResponse:
        return self.request("DELETE", path)

    def probe(self, path: str) -> ApiResponse:
        """Single-attempt, session-less GET used for reachability checks."""
        return self.get(path, authenticated=False, retry=self.retry.with_attempts(1))

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        authenticated: bool = True,
        retry: Optional[RetryPolicy] = None,
    ) -> ApiResponse:
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if authenticated and self.session_cookie:
            headers["Cookie"] = self.session_cookie
        kwargs: Dict[str, Any] = {"headers": headers}
        if body is not None:
            kwargs["content"] = json.dumps(body, ensure_ascii=False)

        logger.debug("API %s", method, extra={"url": url})
        policy = retry or self.retry
        resp: httpx.Response = policy.call(self._http.request, method, url, **kwargs)
        # The session is tracked explicitly, not through the client's jar
        self._http.cookies.clear()
        if authenticated:
            cookie = extract_session_cookie(resp.headers)
            if cookie:
                self.session_cookie = cookie
        logger.debug("API %s response", method, extra={"url": url, "status_code": resp.status_code})
        return ApiResponse(status=resp.status_code, data=parse_body(resp.text))
