"""Custom exception types for clearer error handling."""


class TypedFetchError(Exception):
    """Base exception for the package."""


class ConfigurationError(TypedFetchError):
    """Raised when client settings are missing or invalid."""
