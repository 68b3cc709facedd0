"""HTTP client for the FocusFlow backend."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from focusflow.errors import AuthenticationError, BackendError
from focusflow.services.config_service import ConfigService, get_config_service
from focusflow.utils.logger import get_logger


class APIClient:
    """Async HTTP client for the hosted backend (REST tables and auth)."""

    def __init__(
        self,
        config_service: ConfigService | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config_service = config_service or get_config_service()
        self.config = self.config_service.config
        self.base_url = self.config.backend.url.rstrip("/")
        self.timeout = self.config.backend.timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def user_id(self) -> str | None:
        """Id of the signed-in user, if any."""
        credentials = self.config_service.load_credentials()
        if credentials:
            return credentials.get("user_id")
        return None

    def _get_headers(self, skip_auth: bool = False) -> dict[str, str]:
        """Get HTTP headers with authentication."""
        anon_key = self.config.backend.anon_key
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "apikey": anon_key,
        }

        token = None
        if not skip_auth:
            credentials = self.config_service.load_credentials()
            if credentials and "token" in credentials:
                token = credentials["token"]
        headers["Authorization"] = f"Bearer {token or anon_key}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> APIClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        retry: int | None = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make an HTTP request to the backend.

        Server errors and transport failures are retried with exponential
        backoff; client errors are raised immediately.

        Raises:
            AuthenticationError: On 401 responses
            BackendError: On any other failure
        """
        if retry is None:
            retry = self.config.backend.retry

        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"
        request_headers = self._get_headers(skip_auth=skip_auth)
        if headers:
            request_headers.update(headers)

        logger = get_logger()
        last_exception: BackendError | None = None
        for attempt in range(retry + 1):
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json,
                    params=params,
                    headers=request_headers,
                )
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                error = _error_from_response(e.response)
                # Don't retry client errors (4xx)
                if 400 <= e.response.status_code < 500:
                    raise error from e
                last_exception = error
            except httpx.RequestError as e:
                last_exception = BackendError(f"Cannot reach backend: {e}")

            logger.warning(
                "%s %s failed (attempt %d/%d): %s",
                method,
                url,
                attempt + 1,
                retry + 1,
                last_exception,
            )
            if attempt < retry:
                await asyncio.sleep(2**attempt)

        assert last_exception is not None
        raise last_exception

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request(
            "POST", path, json=json, params=params, headers=headers, skip_auth=skip_auth
        )

    async def patch(
        self,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make a PATCH request."""
        return await self.request("PATCH", path, json=json, params=params, headers=headers)


def _error_from_response(response: httpx.Response) -> BackendError:
    """Build a typed error from an error response body."""
    message = response.reason_phrase or "request failed"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = (
            body.get("message")
            or body.get("error_description")
            or body.get("msg")
            or body.get("error")
            or message
        )

    if response.status_code == 401:
        return AuthenticationError(str(message), status_code=401)
    return BackendError(f"{response.status_code}: {message}", status_code=response.status_code)


def get_client() -> APIClient:
    """Get an API client instance."""
    return APIClient()
