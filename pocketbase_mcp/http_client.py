"""
Minimal async HTTP client for the PocketBase REST API.

The client owns the session state for one server instance: the PocketBase
base URL and the current auth token. Every tool call makes at most one
request through it; there are no retries and no connection pooling across
calls.

The session is shared mutable state without locking. Concurrent calls that
change the URL or token race with in-flight requests, last write wins. A
request already in flight keeps the URL and token it started with.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .errors import ApiError, AuthError


logger = logging.getLogger(__name__)

SUPERUSER_AUTH_ENDPOINT = "/api/collections/_superusers/auth-with-password"
BODY_METHODS = ("POST", "PATCH", "PUT")


def _normalize_base_url(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


def _decode_body(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


class HttpClient:
    """
    HTTP client holding the PocketBase session (base URL + token).

    The token is sent verbatim in the Authorization header, without a
    "Bearer " prefix, which is what PocketBase expects.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: PocketBase base URL (a trailing slash is stripped)
            token: Optional pre-issued auth token
            timeout: Request timeout in seconds (httpx default when omitted)
            transport: Optional httpx transport, used by tests
        """
        self._base_url = _normalize_base_url(base_url)
        self._token: Optional[str] = token or None
        self._timeout = timeout
        self._transport = transport

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        self._token = token or None

    def clear_token(self) -> None:
        self._token = None

    def get_base_url(self) -> str:
        return self._base_url

    def set_base_url(self, url: str) -> None:
        self._base_url = _normalize_base_url(url)

    def _client_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if self._timeout is not None:
            options["timeout"] = self._timeout
        if self._transport is not None:
            options["transport"] = self._transport
        return options

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
        use_auth: bool = True,
    ) -> Any:
        """
        Perform a single request against PocketBase.

        Args:
            method: HTTP method (GET, POST, PATCH, PUT, DELETE)
            endpoint: Path starting with "/", already percent-encoded
            body: JSON body, only sent for POST, PATCH and PUT
            query: Query parameters; None and "" values are dropped
            use_auth: Attach the stored token when one is held

        Returns:
            The decoded JSON body, or None when the body is empty or not JSON

        Raises:
            AuthError: PocketBase answered 401 or 403
            ApiError: Any other error status, or the request never completed
        """
        method = method.upper()
        url = self._base_url + endpoint

        params = {}
        for key, value in (query or {}).items():
            if value is not None and value != "":
                params[key] = str(value)

        headers = {"Content-Type": "application/json"}
        if use_auth and self._token:
            headers["Authorization"] = self._token

        content = None
        if body is not None and method in BODY_METHODS:
            content = json.dumps(body)

        try:
            async with httpx.AsyncClient(**self._client_options()) as client:
                response = await client.request(
                    method,
                    url,
                    params=params or None,
                    headers=headers,
                    content=content,
                )
        except httpx.RequestError as e:
            logger.warning("PocketBase request failed: %s %s (%s)", method, endpoint, e)
            raise ApiError(
                f"Request failed: {e}",
                details={"method": method, "endpoint": endpoint},
            ) from e

        logger.debug("PocketBase %s %s -> %s", method, endpoint, response.status_code)
        decoded = _decode_body(response.text)

        if not response.is_success:
            message = None
            if isinstance(decoded, dict):
                message = decoded.get("message")
            if not isinstance(message, str) or not message:
                message = f"HTTP error {response.status_code}"

            details = {"method": method, "endpoint": endpoint, "response": decoded}
            if response.status_code in (401, 403):
                raise AuthError(message, status_code=response.status_code, details=details)
            raise ApiError(message, status_code=response.status_code, details=details)

        return decoded

    async def authenticate(self, identity: str, password: str) -> Optional[str]:
        """
        Authenticate as a superuser and store the returned token.

        Args:
            identity: Superuser email
            password: Superuser password

        Returns:
            The stored token, or None when PocketBase returned none
        """
        response = await self.request(
            "POST",
            SUPERUSER_AUTH_ENDPOINT,
            {"identity": identity, "password": password},
            use_auth=False,
        )
        token = response.get("token") if isinstance(response, dict) else None
        self.set_token(token)
        return self._token
