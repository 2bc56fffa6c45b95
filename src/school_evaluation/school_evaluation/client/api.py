"""Thin HTTP client for the evaluation REST API, using httpx."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from ..core.constants import DEFAULT_API_TIMEOUT, GENERIC_ERROR_MESSAGE
from ..core.exceptions import AuthorizationError, NotFoundError, TransportError, ValidationError

logger = logging.getLogger(__name__)


def _server_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, Mapping):
        message = body.get("detail") or body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class ApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_API_TIMEOUT,
        headers: Optional[Mapping[str, str]] = None,
        cookies: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers=dict(headers or {}),
            cookies=dict(cookies or {}),
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (None for empty bodies).

        Raises:
            NotFoundError: 404
            AuthorizationError: 401/403
            ValidationError: 400/422
            TransportError: connection failures and any other error status
        """

        try:
            response = self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(GENERIC_ERROR_MESSAGE) from e

        if response.status_code >= 400:
            message = _server_message(response) or GENERIC_ERROR_MESSAGE
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, message)
            if response.status_code == 404:
                raise NotFoundError(message)
            if response.status_code in (401, 403):
                raise AuthorizationError(message)
            if response.status_code in (400, 422):
                raise ValidationError(message)
            raise TransportError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(GENERIC_ERROR_MESSAGE, status_code=response.status_code) from e

    def get(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, *, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
