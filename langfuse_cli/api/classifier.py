"""
Response Classifier - HTTP status and body to payload or typed error
"""

import json
from typing import Any

from langfuse_cli.api.exceptions import (
    APIError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
)


def extract_error_message(body: Any) -> str:
    """Prefer body['message'], then body['error'], then the whole body"""
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        if message:
            return message if isinstance(message, str) else json.dumps(message, default=str)
        return json.dumps(body, default=str)
    if body is None:
        return ""
    return body if isinstance(body, str) else str(body)


def classify(status: int, body: Any, retry_after: float = None) -> Any:
    """
    Return the body of a successful response or raise the matching error

    Args:
        status: HTTP status code
        body: Decoded JSON body, or the raw text when it was not JSON
        retry_after: Seconds from a Retry-After header, attached to 429s

    Returns:
        body unchanged for 2xx statuses

    Raises:
        AuthenticationError: 401
        NotFoundError: 404
        RateLimitError: 429
        APIError: Any other status, with status_code set
    """
    if 200 <= status <= 299:
        return body
    if status == 401:
        raise AuthenticationError()
    if status == 404:
        raise NotFoundError(f"Resource not found: {extract_error_message(body)}")
    if status == 429:
        raise RateLimitError(retry_after=retry_after)
    if 400 <= status <= 499:
        raise APIError(
            f"Client error ({status}): {extract_error_message(body)}",
            status_code=status,
        )
    if 500 <= status <= 599:
        raise APIError(
            f"Server error ({status}): {extract_error_message(body)}",
            status_code=status,
        )
    raise APIError(f"Unexpected response status: {status}", status_code=status)
