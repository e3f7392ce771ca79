# tests/test_result_schema.py
from __future__ import annotations

import pytest
from pydantic import ValidationError

from typed_fetch.schemas.result_schema import ErrorResponse, FailureResponse, SuccessResponse


def test_success_result_carries_data_and_no_error() -> None:
    result = SuccessResponse(data={"data": "test"}, headers={})

    assert result.ok
    assert result.status == "success"
    assert result.data == {"data": "test"}
    assert result.error is None


def test_failure_result_carries_error_and_no_data() -> None:
    result = FailureResponse(
        error=ErrorResponse(message="Error", status_code=400, name="test_error"),
        headers={},
    )

    assert not result.ok
    assert result.status == "error"
    assert result.data is None
    assert result.error.status_code == 400


def test_failure_headers_default_to_none() -> None:
    result = FailureResponse(error=ErrorResponse(message="down", name="application_error"))

    assert result.headers is None
    assert result.error.status_code is None


def test_success_rejects_error_payload() -> None:
    with pytest.raises(ValidationError):
        SuccessResponse(
            data={"x": 1},
            error=ErrorResponse(message="nope", name="application_error"),
            headers={},
        )


def test_failure_rejects_data_payload() -> None:
    with pytest.raises(ValidationError):
        FailureResponse(
            data={"x": 1},
            error=ErrorResponse(message="nope", name="application_error"),
        )


def test_success_requires_headers() -> None:
    with pytest.raises(ValidationError):
        SuccessResponse(data=None)


def test_results_are_immutable() -> None:
    result = SuccessResponse(data=1, headers={})

    with pytest.raises(ValidationError):
        result.data = 2  # type: ignore[misc]
