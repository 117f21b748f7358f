"""
HTTP Transport - Authenticated, retrying connection to the public API
"""

import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import requests
from requests.auth import HTTPBasicAuth

from langfuse_cli import __version__
from langfuse_cli.api.classifier import classify
from langfuse_cli.api.exceptions import APIError, ConfigurationError, TimeoutError
from langfuse_cli.api.retry import RetryPolicy, parse_retry_after, retry_on_failure
from langfuse_cli.observability import mainLogger

CONNECT_TIMEOUT = 10
READ_TIMEOUT = 30

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")
BODY_METHODS = ("POST", "PUT")

REDACTED = "[REDACTED]"


@dataclass(frozen=True)
class Credentials:
    """Host and API key pair used for every request"""
    host: str
    public_key: str = field(repr=False)
    secret_key: str = field(repr=False)

    def __post_init__(self):
        missing = [
            name for name in ("host", "public_key", "secret_key")
            if not isinstance(getattr(self, name), str) or not getattr(self, name).strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}",
                missing_fields=missing,
            )


@dataclass
class RawResponse:
    """Status, decoded body and headers of one HTTP exchange"""
    status: int
    body: Any
    headers: Mapping[str, str] = field(default_factory=dict)


def debug_enabled() -> bool:
    """Wire logging is opt-in through DEBUG=1"""
    return os.getenv("DEBUG") == "1"


def _redact_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    return {
        key: (REDACTED if key.lower() == "authorization" else value)
        for key, value in headers.items()
    }


def _decode_body(response) -> Any:
    """JSON-decode the body when the server says it is JSON, else raw text"""
    content_type = response.headers.get("Content-Type", "") or ""
    if "json" in content_type.lower():
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text or None


class Transport:
    """
    Owns the HTTP session for one set of credentials

    Every request carries HTTP Basic authentication. GET and POST are
    retried on transient failures according to the retry policy; the
    response is then handed to the classifier by request().
    """

    def __init__(
        self,
        credentials: Credentials,
        retry_policy: Optional[RetryPolicy] = None,
        session: Optional[requests.Session] = None,
        connect_timeout: float = CONNECT_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
        debug: Optional[bool] = None,
    ):
        """
        Initialize the transport

        Args:
            credentials: Host and key pair
            retry_policy: Retry settings (default: RetryPolicy())
            session: Session to send through (default: a new requests.Session)
            connect_timeout: Seconds to wait for the connection
            read_timeout: Seconds to wait for the response
            debug: Log headers and bodies (default: DEBUG=1 in the environment)
        """
        if not isinstance(credentials, Credentials):
            raise ConfigurationError("Transport requires Credentials")

        self.credentials = credentials
        self.base_url = credentials.host.rstrip("/")
        self.retry_policy = retry_policy or RetryPolicy()
        self.timeout: Tuple[float, float] = (connect_timeout, read_timeout)
        self.debug = debug_enabled() if debug is None else debug

        self.session = session or requests.Session()
        self.session.auth = HTTPBasicAuth(credentials.public_key, credentials.secret_key)
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": f"lf-cli/{__version__}",
        })

        self._send_with_retry = retry_on_failure(self.retry_policy)(self._send_once)

        mainLogger.debug(
            "Transport initialized",
            host=self.base_url,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            max_retries=self.retry_policy.max_retries,
        )

    def _send_once(
        self,
        method: str,
        path: str,
        payload: Optional[Mapping[str, Any]] = None,
        timeout: Union[float, Tuple[float, float], None] = None,
    ):
        """Issue a single HTTP request and return the requests response"""
        url = f"{self.base_url}{path}"
        kwargs: Dict[str, Any] = {"timeout": timeout or self.timeout}
        if method in BODY_METHODS:
            kwargs["json"] = dict(payload) if payload is not None else None
        elif payload:
            kwargs["params"] = dict(payload)

        if self.debug:
            mainLogger.debug(
                "HTTP request",
                method=method,
                url=url,
                headers=_redact_headers(self.session.headers),
                params=kwargs.get("params"),
                body=kwargs.get("json"),
            )

        start_time = time.time()
        response = self.session.request(method, url, **kwargs)
        duration = time.time() - start_time

        mainLogger.debug(
            "HTTP response",
            method=method,
            path=path,
            status=response.status_code,
            duration_seconds=round(duration, 3),
        )
        if self.debug:
            mainLogger.debug(
                "HTTP response detail",
                headers=dict(response.headers),
                body=response.text,
            )
        return response

    def send(
        self,
        method: str,
        path: str,
        payload: Optional[Mapping[str, Any]] = None,
        timeout: Union[float, Tuple[float, float], None] = None,
        retry: bool = True,
    ) -> RawResponse:
        """
        Send a request and return the raw outcome

        Args:
            method: GET, POST, PUT or DELETE
            path: API path starting with "/"
            payload: Query parameters (GET/DELETE) or JSON body (POST/PUT)
            timeout: Override of the (connect, read) timeouts
            retry: Apply the retry policy

        Returns:
            RawResponse with the decoded body

        Raises:
            TimeoutError: The connection or read timed out
            APIError: The connection failed (DNS, refused, reset) or
                requests rejected the request (bad URL, redirect loop)
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        sender = self._send_with_retry if retry else self._send_once
        try:
            response = sender(method, path, payload=payload, timeout=timeout)
        except requests.Timeout as e:
            raise TimeoutError(
                "Request timed out. Please check your network connection and host URL.",
                original_error=e,
            ) from e
        except requests.ConnectionError as e:
            raise APIError(f"Connection failed: {e}", original_error=e) from e
        except requests.RequestException as e:
            raise APIError(f"Request failed: {e}", original_error=e) from e

        return RawResponse(
            status=response.status_code,
            body=_decode_body(response),
            headers=response.headers,
        )

    def request(
        self,
        method: str,
        path: str,
        payload: Optional[Mapping[str, Any]] = None,
        timeout: Union[float, Tuple[float, float], None] = None,
        retry: bool = True,
    ) -> Any:
        """Send a request and classify the response (see send() and classify())"""
        raw = self.send(method, path, payload, timeout=timeout, retry=retry)
        return classify(raw.status, raw.body, retry_after=parse_retry_after(raw))

    def close(self) -> None:
        self.session.close()
