# -------------------------------------------------------------------
# typed_fetch/schemas/result_schema.py
#
# WHAT THIS FILE IS FOR
# --------------------
# This module defines the **uniform result shape** returned by every
# HttpClient call.
#
# A call never raises for designed failures. Instead it returns one of
# two models:
#
#   SuccessResponse   status="success", data=<parsed JSON>, error=None
#   FailureResponse   status="error",   data=None, error=ErrorResponse
#
# Callers branch on `result.ok` (or `result.status`) instead of
# wrapping calls in try/except.
#
# EXCLUSIVITY
# -----------
# `data` and `error` cannot both be populated:
# - SuccessResponse.error is typed as None
# - FailureResponse.data is typed as None
# Passing a value for the "other" field fails validation.
#
# HEADERS
# -------
# - SuccessResponse.headers is always present
# - FailureResponse.headers is None ONLY when no HTTP response was
#   received (transport failure)
#
# WHAT THIS FILE IS NOT FOR
# ------------------------
# This module does NOT perform HTTP calls or parse response bodies.
# That logic lives in typed_fetch/client/request_executor.py.
# -------------------------------------------------------------------

from __future__ import annotations

from typing import Dict, Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """
    Error details carried by a FailureResponse.

    `status_code` is None when the request never produced an HTTP
    response (DNS, connection refused, timeout).
    """

    model_config = ConfigDict(frozen=True)

    message: str
    status_code: Optional[int] = None
    name: str


class SuccessResponse(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True, extra="forbid")

    status: Literal["success"] = "success"
    data: T
    error: None = None
    headers: Dict[str, str]

    @property
    def ok(self) -> bool:
        return True


class FailureResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    status: Literal["error"] = "error"
    data: None = None
    error: ErrorResponse
    headers: Optional[Dict[str, str]] = None

    @property
    def ok(self) -> bool:
        return False


Result = Union[SuccessResponse[T], FailureResponse]
