"""
typed_fetch/client/http_client.py

WHAT THIS FILE IS FOR
---------------------
This module provides the public, asynchronous HTTP client of the
package.

It exists to:
- Hold an immutable base URL and default headers per client instance
- Merge per-call header overrides over the defaults
- Expose GET / POST / PUT / PATCH / DELETE with one uniform return type
- Delegate the actual call + outcome classification to request_executor

Every method returns a `Result`:
    SuccessResponse(data=..., headers=...)
    FailureResponse(error=ErrorResponse(...), headers=... | None)

Callers never need try/except around a call for network or HTTP
failures; they branch on `result.ok`.

DEFAULT HEADERS
---------------
`Content-Type: application/json` is seeded first, then the headers from
ClientConfig are merged over it. Per-call headers (RequestConfig) are
merged over the client defaults for that call only.

URL JOINING
-----------
- base_url + endpoint, verbatim (no slash normalization)
- an endpoint that is already an absolute http(s) URL is used as-is

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- Retries, caching, or circuit breaking
- Timeouts beyond passing `timeout_seconds` to httpx
- Response schema validation

DESIGN INTENT
-------------
The client holds no mutable state after construction, so one instance
can serve any number of concurrent calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx
import structlog

from typed_fetch.client.request_executor import execute_request
from typed_fetch.schemas.config_schema import ClientConfig, RequestConfig
from typed_fetch.utils.headers import assemble_headers, to_headers_object
from typed_fetch.utils.logger import configure_logging

if TYPE_CHECKING:
    from typed_fetch.schemas.result_schema import Result
    from typed_fetch.utils.settings import ClientSettings

logger = structlog.get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/json"
ABSOLUTE_URL_PREFIXES = ("http://", "https://")


class HttpClient:
    """
    Thin async client returning uniform results.

    - Immutable base URL + default headers
    - One httpx call per method invocation
    - Designed failures are returned, not raised

    TRANSPORT INJECTION
    -------------------
    `transport` is handed to a fresh httpx.AsyncClient on every call, and
    that client closes it on exit. Only pass transports that keep working
    after `aclose()` (httpx.ASGITransport, httpx.MockTransport). A pooled
    httpx.AsyncHTTPTransport is closed after its first request.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        config = config or ClientConfig()

        self._base_url = config.url or ""
        self._default_headers = assemble_headers({"Content-Type": DEFAULT_CONTENT_TYPE}, config.headers)
        self._transport = transport
        self._timeout = timeout_seconds

        logger.debug(
            "http_client_created",
            base_url=self._base_url,
            header_names=sorted(self._default_headers),
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_settings(
        cls,
        settings: "ClientSettings",
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "HttpClient":
        """
        Build a client from loaded ClientSettings.

        Also applies `settings.log_level` to structlog.
        """
        configure_logging(settings.log_level)
        config = ClientConfig(url=settings.base_url, headers=dict(settings.default_headers))
        return cls(config, transport=transport, timeout_seconds=settings.timeout_seconds)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def default_headers(self) -> Dict[str, str]:
        return dict(self._default_headers)

    # ------------------------------------------------------------------ #
    # Public methods
    # ------------------------------------------------------------------ #
    async def get(self, endpoint: str, options: Optional[RequestConfig] = None) -> "Result[Any]":
        return await self._request("GET", endpoint, None, options)

    async def post(
        self,
        endpoint: str,
        body: Any = None,
        options: Optional[RequestConfig] = None,
    ) -> "Result[Any]":
        return await self._request("POST", endpoint, body, options)

    async def put(
        self,
        endpoint: str,
        body: Any,
        options: Optional[RequestConfig] = None,
    ) -> "Result[Any]":
        return await self._request("PUT", endpoint, body, options)

    async def patch(
        self,
        endpoint: str,
        body: Any,
        options: Optional[RequestConfig] = None,
    ) -> "Result[Any]":
        return await self._request("PATCH", endpoint, body, options)

    async def delete(
        self,
        endpoint: str,
        body: Any = None,
        options: Optional[RequestConfig] = None,
    ) -> "Result[Any]":
        return await self._request("DELETE", endpoint, body, options)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #
    def _build_url(self, endpoint: str) -> str:
        """
        Join base URL and endpoint.

        Example:
            base_url="http://api.local/v1", endpoint="/users"
            -> "http://api.local/v1/users"
        """
        if endpoint.startswith(ABSOLUTE_URL_PREFIXES):
            return endpoint
        return f"{self._base_url}{endpoint}"

    def _build_headers(self, options: Optional[RequestConfig]) -> httpx.Headers:
        overrides = options.headers if options else None
        return to_headers_object(assemble_headers(self._default_headers, overrides))

    async def _request(
        self,
        method: str,
        endpoint: str,
        body: Any,
        options: Optional[RequestConfig],
    ) -> "Result[Any]":
        url = self._build_url(endpoint)
        headers = self._build_headers(options)
        return await execute_request(
            url,
            method=method,
            headers=headers,
            body=body,
            transport=self._transport,
            timeout=self._timeout,
        )
