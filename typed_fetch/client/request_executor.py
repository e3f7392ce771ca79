"""
typed_fetch/client/request_executor.py

WHAT THIS FILE IS FOR
---------------------
This module performs exactly ONE HTTP call and converts every designed
outcome into a `Result` (SuccessResponse | FailureResponse).

It is responsible for:
- Serializing an optional JSON body
- Sending the request through an httpx.AsyncClient (redirects followed)
- Classifying the outcome:
    * transport failure   -> FailureResponse, status_code=None, headers=None
    * non-2xx response    -> FailureResponse built from the error body
    * 2xx response        -> SuccessResponse with parsed JSON data
- Collecting response headers into a flat dict
- Closing the response stream in all cases

CALL FLOW CONTEXT
-----------------
HttpClient.get/post/put/patch/delete()
  -> HttpClient._request()          (URL join + header merge)
      -> execute_request()          (this module)
          -> parse_error_from_response()   (non-2xx only)

ERROR BODY RULES
----------------
For a non-2xx response the body is read as text and parsed as JSON:

1) valid JSON object:
     message = body["message"] or "Unknown error occurred"
     name    = body["name"]    or "application_error"
2) JSON syntax error:
     message = generic "Internal server error ..." text
3) reading the body fails (httpx / OS error):
     message = str(error)
4) anything else:
     message = response reason phrase, or "Request failed"

status_code is always the HTTP status and headers are always present.

SUCCESS BODY RULES
------------------
- Empty body (e.g. 204)      -> data=None
- Valid JSON                 -> data=<parsed>
- Invalid JSON / read error  -> FailureResponse carrying the HTTP status

WHAT THIS FILE IS NOT FOR
-------------------------
This module MUST NOT:
- Retry requests
- Cache responses
- Merge or default headers (HttpClient does that)
- Log request or response bodies
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import httpx
import structlog

from typed_fetch.schemas.result_schema import ErrorResponse, FailureResponse, Result, SuccessResponse
from typed_fetch.utils.headers import extract_headers_dict

logger = structlog.get_logger(__name__)

DEFAULT_ERROR_NAME = "application_error"
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
UNPROCESSABLE_ERROR_MESSAGE = (
    "Internal server error. We are unable to process your request right now, please try again later."
)
REQUEST_FAILED_MESSAGE = "Request failed"
UNRESOLVED_REQUEST_MESSAGE = "Unable to fetch data. The request could not be resolved."
UNPARSEABLE_SUCCESS_MESSAGE = "Unable to parse the response body as JSON."

# No HTTP response was obtained
TRANSPORT_ERRORS = (httpx.RequestError, httpx.InvalidURL)

# Failures while streaming a body that did arrive
BODY_READ_ERRORS = (httpx.HTTPError, httpx.StreamError, OSError)


def _text_field(parsed: Any, key: str) -> Optional[str]:
    if not isinstance(parsed, dict):
        return None
    value = parsed.get(key)
    if not value:
        return None
    return value if isinstance(value, str) else str(value)


async def parse_error_from_response(response: httpx.Response) -> ErrorResponse:
    """
    Build an ErrorResponse from a non-2xx response, best effort.

    Never raises; each failure mode degrades to a more generic message.
    """
    status_code = response.status_code

    try:
        await response.aread()
        parsed = json.loads(response.text)
        return ErrorResponse(
            message=_text_field(parsed, "message") or UNKNOWN_ERROR_MESSAGE,
            status_code=status_code,
            name=_text_field(parsed, "name") or DEFAULT_ERROR_NAME,
        )
    except json.JSONDecodeError:
        logger.info("http_error_body_unparseable", status_code=status_code)
        return ErrorResponse(
            message=UNPROCESSABLE_ERROR_MESSAGE,
            status_code=status_code,
            name=DEFAULT_ERROR_NAME,
        )
    except BODY_READ_ERRORS as exc:
        logger.warning("http_error_body_read_failed", status_code=status_code, error=str(exc))
        return ErrorResponse(
            message=str(exc) or REQUEST_FAILED_MESSAGE,
            status_code=status_code,
            name=DEFAULT_ERROR_NAME,
        )
    except Exception as exc:  # noqa: BLE001
        logger.warning("http_error_body_unexpected", status_code=status_code, error=repr(exc))
        return ErrorResponse(
            message=response.reason_phrase or REQUEST_FAILED_MESSAGE,
            status_code=status_code,
            name=DEFAULT_ERROR_NAME,
        )


async def _parse_success(response: httpx.Response, headers: Dict[str, str]) -> Result[Any]:
    try:
        await response.aread()
    except BODY_READ_ERRORS as exc:
        logger.warning("http_success_body_read_failed", status_code=response.status_code, error=str(exc))
        return FailureResponse(
            error=ErrorResponse(
                message=str(exc) or REQUEST_FAILED_MESSAGE,
                status_code=response.status_code,
                name=DEFAULT_ERROR_NAME,
            ),
            headers=headers,
        )

    if not response.content.strip():
        return SuccessResponse(data=None, headers=headers)

    try:
        data = response.json()
    except ValueError:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        logger.warning("http_success_body_unparseable", status_code=response.status_code)
        return FailureResponse(
            error=ErrorResponse(
                message=UNPARSEABLE_SUCCESS_MESSAGE,
                status_code=response.status_code,
                name=DEFAULT_ERROR_NAME,
            ),
            headers=headers,
        )

    return SuccessResponse(data=data, headers=headers)


async def execute_request(
    url: str,
    *,
    method: str,
    headers: httpx.Headers,
    body: Any = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    timeout: Optional[float] = None,
) -> Result[Any]:
    """
    Send one request and return a Result.

    Args:
        url: Absolute request URL.
        method: HTTP method (GET, POST, PUT, PATCH, DELETE).
        headers: Final request headers.
        body: JSON-serializable payload; None sends no body.
        transport: Optional httpx transport (ASGI / mock in tests).
        timeout: Seconds for httpx; None disables timeouts.

    Raises:
        TypeError: body is not JSON-serializable (before any I/O).
    """
    content = json.dumps(body) if body is not None else None

    async with httpx.AsyncClient(transport=transport, timeout=timeout, follow_redirects=True) as client:
        try:
            request = client.build_request(method, url, headers=headers, content=content)
            logger.debug("http_request_dispatch", method=method, url=url)
            response = await client.send(request, stream=True)
        except TRANSPORT_ERRORS as exc:
            logger.warning("http_request_unresolved", method=method, url=url, error=str(exc))
            return FailureResponse(
                error=ErrorResponse(
                    name=DEFAULT_ERROR_NAME,
                    status_code=None,
                    message=UNRESOLVED_REQUEST_MESSAGE,
                ),
                headers=None,
            )

        try:
            response_headers = extract_headers_dict(response)

            if not response.is_success:
                error = await parse_error_from_response(response)
                logger.warning(
                    "http_request_failed",
                    method=method,
                    url=url,
                    status_code=error.status_code,
                    error_name=error.name,
                )
                return FailureResponse(error=error, headers=response_headers)

            return await _parse_success(response, response_headers)
        finally:
            await response.aclose()
