"""Typed async HTTP client returning uniform success/failure results."""

from typed_fetch.client.http_client import HttpClient
from typed_fetch.exceptions import ConfigurationError, TypedFetchError
from typed_fetch.schemas.config_schema import ClientConfig, HeadersInput, RequestConfig
from typed_fetch.schemas.result_schema import ErrorResponse, FailureResponse, Result, SuccessResponse
from typed_fetch.utils.logger import configure_logging

__version__ = "1.0.0"

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "ErrorResponse",
    "FailureResponse",
    "HeadersInput",
    "HttpClient",
    "RequestConfig",
    "Result",
    "SuccessResponse",
    "TypedFetchError",
    "configure_logging",
]
