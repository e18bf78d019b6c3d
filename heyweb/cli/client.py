"""
HTTP client used by the CLI and the conversation orchestrator.
Wraps httpx.Client with unified error handling and retries on network errors.
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger("heyweb.cli.client")

_SENSITIVE_HEADERS = ("authorization", "x-api-key")


class APIError(Exception):
    """Base exception for backend API errors.

    Subclasses set ``label`` and ``hint``; ``user_friendly_message`` renders
    them around the raw message for terminal output.
    """

    label = "[ERROR]"
    hint = ""

    def __init__(self, message: str, status_code: Optional[int] = None, response_text: str = ""):
        self.message = message
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(self.message)

    def user_friendly_message(self) -> str:
        lines = [f"{self.label} {self.message}"]
        if self.response_text:
            lines.append(f"Response: {self.response_text[:200]}")
        if self.hint:
            lines.append(self.hint)
        return "\n".join(lines)


class NetworkError(APIError):
    label = "[OFFLINE] Unable to reach the HeyWeb backend:"
    hint = "Start it with `heyweb serve` or point --api-base / HEYWEB_API_BASE at a running one."


class TimeoutError(APIError):
    label = "[TIMEOUT]"
    hint = "Raise --timeout or HEYWEB_CLI_TIMEOUT for slow completions."


class HTTPStatusError(APIError):
    label = "[SERVER ERROR]"


class JSONParseError(APIError):
    label = "[BAD RESPONSE]"


class APIClient:
    """Synchronous HeyWeb backend client.

    Transport failures (refused connections, timeouts) are retried up to
    ``retry_times`` attempts. Error statuses and undecodable bodies are
    raised on the first response.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        timeout: float = 30.0,
        retry_times: int = 1,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.retry_times = max(1, retry_times)
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            trust_env=False,
            transport=transport,
        )

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def get(self, path: str, **kwargs) -> Any:
        return self._request("GET", path, **kwargs)

    def post(self, path: str, json: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self._request("POST", path, json=json, **kwargs)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.get("headers") or {}
        logger.debug(
            "%s %s%s headers=%s",
            method,
            self.base_url,
            path,
            {k: ("***" if k.lower() in _SENSITIVE_HEADERS else v) for k, v in headers.items()},
        )
        for attempt in range(1, self.retry_times + 1):
            try:
                response = self._http.request(method, path, **kwargs)
            except httpx.HTTPError as exc:
                error = _transport_error(exc, attempt)
                logger.warning("%s %s failed (attempt %d/%d): %s", method, path, attempt, self.retry_times, exc)
                if attempt == self.retry_times:
                    raise error from exc
                continue
            return self._process_response(response)
        raise NetworkError("request was not attempted")

    def _process_response(self, response: httpx.Response) -> Any:
        if response.is_error:
            body = response.text
            raise HTTPStatusError(
                f"HTTP {response.status_code}: {body[:100]}",
                status_code=response.status_code,
                response_text=body,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise JSONParseError(f"backend returned non-JSON content ({exc})", response_text=response.text) from exc


def _transport_error(exc: httpx.HTTPError, attempt: int) -> APIError:
    if isinstance(exc, httpx.ConnectTimeout):
        return NetworkError("connection timed out; the server may be unreachable")
    if isinstance(exc, httpx.TimeoutException):
        return TimeoutError(f"no response after {attempt} attempt(s)")
    return NetworkError(str(exc) or type(exc).__name__)
