"""HTTP error helpers for extracting backend error details."""

from __future__ import annotations

from typing import Any

import requests

DEFAULT_ERROR_MESSAGE = "API request failed"


def _parse_code(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    return None


def extract_error_detail(response: requests.Response) -> tuple[str, int | None, Any]:
    """Extract the message, service code and payload from an error response.

    The message is taken from ``message``, then ``error``, then ``detail``.
    Non JSON bodies are returned as plain text.

    Returns:
        Tuple of (message, code, payload).
    """
    try:
        payload: Any = response.json()
    except ValueError:
        return (response.text or DEFAULT_ERROR_MESSAGE, None, None)

    if not isinstance(payload, dict):
        return (str(payload), None, payload)

    message = payload.get("message") or payload.get("error") or payload.get("detail")
    if message is None:
        message = DEFAULT_ERROR_MESSAGE
    elif not isinstance(message, str):
        message = str(message)
    return (message, _parse_code(payload.get("code")), payload)
