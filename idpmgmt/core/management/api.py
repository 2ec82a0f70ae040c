"""Low-level HTTP client for the Management API.

Handles bearer authentication, error mapping and HTTP operations.
"""
from __future__ import annotations
import logging
from http import HTTPStatus
from typing import Optional, Dict, Any

import requests

from .exceptions import (
    ManagementAPIError,
    RemoteValidationError,
    InsufficientPermissionsError,
    NotFoundError,
    RateLimitError,
    TransportError,
    MalformedResponseError,
)

REQUEST_TIMEOUT = 5

logger = logging.getLogger(__name__)

_STATUS_ERRORS = {
    400: RemoteValidationError,
    401: InsufficientPermissionsError,
    403: InsufficientPermissionsError,
    404: NotFoundError,
    429: RateLimitError,
}


class ManagementAPI:
    """HTTP client for the Management API v2.

    The caller supplies an already issued Management API token; no token
    refresh happens here.

    Usage:
        api = ManagementAPI("tenant.eu.auth0.com", token)
        response = api.get("/clients", params={"fields": "client_id"})
    """

    def __init__(self, domain: str, token: str, timeout: float = REQUEST_TIMEOUT):
        """Initialize the client.

        Args:
            domain: Tenant domain, or a full base URL for non-standard deployments
            token: Management API access token
            timeout: Per-request timeout in seconds
        """
        if not domain:
            raise ValueError("domain is required")
        if domain.startswith(("http://", "https://")):
            base = domain.rstrip("/")
        else:
            base = f"https://{domain.strip('/')}"
        if not base.endswith("/api/v2"):
            base = f"{base}/api/v2"
        self.base_url = base
        self.timeout = timeout
        self._token = token

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = dict(extra or {})
        headers["Authorization"] = f"Bearer {self._token}"
        headers.setdefault("Content-Type", "application/json")
        headers.setdefault("Accept", "application/json")
        return headers

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        headers = self._headers(kwargs.pop("headers", None))
        sender = getattr(requests, method.lower())
        logger.debug(f"{method} {url}")
        try:
            resp = sender(url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning(f"{method} {url} failed before a response: {exc}")
            raise TransportError(url, exc) from exc
        logger.debug(f"{method} {url} -> {resp.status_code}")
        self._handle_error(resp, url)
        return resp

    def get(self, path: str, params: Optional[Dict] = None, **kwargs) -> requests.Response:
        """Execute GET request.

        Args:
            path: API endpoint path (e.g., "/clients")
            params: Query parameters
            **kwargs: Additional arguments for requests.get

        Returns:
            Response object

        Raises:
            ManagementAPIError: On HTTP error
            TransportError: On connection failure or timeout
        """
        return self._send("GET", path, params=params, **kwargs)

    def post(self, path: str, json: Optional[Dict] = None, **kwargs) -> requests.Response:
        """Execute POST request.

        Args:
            path: API endpoint path
            json: JSON payload
            **kwargs: Additional arguments for requests.post

        Returns:
            Response object

        Raises:
            ManagementAPIError: On HTTP error
            TransportError: On connection failure or timeout
        """
        return self._send("POST", path, json=json, **kwargs)

    def patch(self, path: str, json: Optional[Dict] = None, **kwargs) -> requests.Response:
        """Execute PATCH request.

        Args:
            path: API endpoint path
            json: Partial JSON payload
            **kwargs: Additional arguments for requests.patch

        Returns:
            Response object

        Raises:
            ManagementAPIError: On HTTP error
            TransportError: On connection failure or timeout
        """
        return self._send("PATCH", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> requests.Response:
        """Execute DELETE request.

        Raises:
            ManagementAPIError: On HTTP error
            TransportError: On connection failure or timeout
        """
        return self._send("DELETE", path, **kwargs)

    def json(self, resp: requests.Response) -> Any:
        """Decode a successful response body.

        Raises:
            MalformedResponseError: If the body is not valid JSON
        """
        try:
            return resp.json()
        except ValueError as exc:
            logger.warning(f"Non-JSON body from {resp.url} (status {resp.status_code})")
            raise MalformedResponseError(resp.status_code, resp.url, resp.text or "") from exc

    def _handle_error(self, resp: requests.Response, endpoint: str) -> None:
        """Map error responses to typed exceptions.

        The API reports errors as ``{"statusCode", "error", "message"}``; when
        the body is not JSON the HTTP reason phrase and raw text are used.

        Raises:
            ManagementAPIError: If response status indicates error
        """
        if resp.status_code < 400:
            return

        try:
            phrase = HTTPStatus(resp.status_code).phrase
        except ValueError:
            phrase = "Error"
        error, message = phrase, resp.text

        try:
            body: Any = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get("error") or phrase
            message = body.get("message") or message

        exc_class = _STATUS_ERRORS.get(resp.status_code, ManagementAPIError)
        exc = exc_class(resp.status_code, error, message, endpoint)
        logger.warning(f"Management API error on {endpoint}: {exc}")
        raise exc
