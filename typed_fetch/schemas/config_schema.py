"""Client and per-call configuration types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple, Union

import httpx

# Accepted header inputs:
# - httpx.Headers (case-insensitive collection)
# - sequence of (name, value) pairs
# - plain mapping
HeadersInput = Union[httpx.Headers, Sequence[Tuple[str, str]], Mapping[str, str]]


@dataclass(frozen=True)
class ClientConfig:
    """Construction-time settings for HttpClient."""

    url: Optional[str] = None
    headers: Optional[HeadersInput] = None


@dataclass(frozen=True)
class RequestConfig:
    """Options scoped to a single call."""

    headers: Optional[HeadersInput] = None
