"""HTTP transport shared by every client call."""

import logging
from typing import Any, Optional

import requests

from dragdropdo.config import ClientConfig
from dragdropdo.exceptions import D3APIError, D3ClientError
from dragdropdo.utils.http_errors import extract_error_detail

logger = logging.getLogger(__name__)


class Transport:
    """Issues HTTP requests against the D3 business API and pre-signed URLs.

    A single ``requests.Session`` is kept for connection reuse. The configured
    timeout is applied as both connect and read timeout on every request.
    """

    def __init__(
        self, config: ClientConfig, session: Optional[requests.Session] = None
    ) -> None:
        """Initialize the transport.

        Args:
            config: Client configuration. Its API key must be set.
            session: Optional session to use instead of a fresh one.
        """
        self.base_url = config.base_url
        self.timeout = config.timeout
        self.headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config.require_api_key()}",
        }
        self.headers.update(config.headers)
        self._session = session or requests.Session()

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        body: Any = None,
    ) -> requests.Response:
        """Send a raw request to an absolute URL.

        No API headers are attached; the caller passes every header it needs.

        Raises:
            D3ClientError: If the request fails at the network level.
        """
        try:
            return self._session.request(
                method,
                url,
                headers=headers,
                data=body,
                timeout=(self.timeout, self.timeout),
            )
        except requests.RequestException as e:
            raise D3ClientError(f"Network error: {e}") from e

    def request_json(
        self, method: str, endpoint: str, payload: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Call an API endpoint and return its decoded JSON body.

        Args:
            method: HTTP method.
            endpoint: Path relative to the base URL, starting with ``/``.
            payload: Optional JSON request body.

        Returns:
            The decoded response body.

        Raises:
            D3APIError: If the service returns a non-success status.
            D3ClientError: On network failures or an undecodable body.
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                headers=self.headers,
                json=payload,
                timeout=(self.timeout, self.timeout),
            )
        except requests.RequestException as e:
            raise D3ClientError(f"Network error: {e}") from e

        if not response.ok:
            message, code, details = extract_error_detail(response)
            logger.warning(
                "%s %s failed: status=%d message=%s",
                method,
                endpoint,
                response.status_code,
                message,
            )
            raise D3APIError(message, response.status_code, code, details)

        try:
            return response.json()
        except ValueError as e:
            raise D3ClientError(f"Invalid JSON response from {endpoint}") from e

    def request_data(
        self, method: str, endpoint: str, payload: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Call an API endpoint and return the ``data`` object of its body."""
        body = self.request_json(method, endpoint, payload)
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise D3ClientError(f"Response from {endpoint} has no data object")
        return data

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()
