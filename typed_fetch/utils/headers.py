"""
typed_fetch/utils/headers.py

WHAT THIS FILE IS FOR
---------------------
Pure helpers for building request headers and reading response headers.

- header_items():        normalize any accepted header input into pairs
- assemble_headers():    merge base headers with per-call overrides
- to_headers_object():   flat mapping -> httpx.Headers
- extract_headers_dict(): httpx.Response -> flat mapping

MERGE RULES
-----------
- Header names are compared case-insensitively
- Override entries replace base entries with the same name
- Within one input, later entries win over earlier ones
- The casing of the last writer is kept as the output key

All three input shapes (httpx.Headers, pair sequence, mapping) produce
the same merged result for the same logical name/value set.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Iterable, List, Optional, Tuple

import httpx

from typed_fetch.schemas.config_schema import HeadersInput


def header_items(headers: HeadersInput) -> List[Tuple[str, str]]:
    """
    Classify a header input and return its (name, value) pairs in order.

    Raises:
        TypeError: input is not one of the accepted shapes.
    """
    # httpx.Headers is itself a Mapping; check it first so repeated
    # headers stay separate and the caller's name casing is kept.
    if isinstance(headers, httpx.Headers):
        encoding = headers.encoding
        return [(name.decode(encoding), value.decode(encoding)) for name, value in headers.raw]

    if isinstance(headers, Mapping):
        return [(str(k), str(v)) for k, v in headers.items()]

    if isinstance(headers, (str, bytes)):
        raise TypeError("Headers must be a mapping or a sequence of (name, value) pairs, not a string")

    items: List[Tuple[str, str]] = []
    for pair in headers:
        if isinstance(pair, (str, bytes)) or len(pair) != 2:
            raise TypeError(f"Header pair must have exactly two items, got {pair!r}")
        name, value = pair
        items.append((str(name), str(value)))
    return items


def _set_header(combined: Dict[str, str], name: str, value: str) -> None:
    lowered = name.lower()
    for existing in [k for k in combined if k.lower() == lowered]:
        del combined[existing]
    combined[name] = value


def _merge_into(combined: Dict[str, str], pairs: Iterable[Tuple[str, str]]) -> None:
    for name, value in pairs:
        _set_header(combined, name, value)


def assemble_headers(
    base_headers: Mapping[str, str],
    additional_headers: Optional[HeadersInput] = None,
) -> Dict[str, str]:
    """
    Merge `additional_headers` over `base_headers`.

    Returns a new dict; neither input is mutated.
    """
    combined: Dict[str, str] = {}
    _merge_into(combined, base_headers.items())

    if not additional_headers:
        return combined

    _merge_into(combined, header_items(additional_headers))
    return combined


def to_headers_object(header_dict: Mapping[str, str]) -> httpx.Headers:
    headers = httpx.Headers()
    for key, value in header_dict.items():
        headers[key] = value
    return headers


def extract_headers_dict(response: httpx.Response) -> Dict[str, str]:
    # httpx lower-cases names and joins repeated headers with ", "
    return {key: value for key, value in response.headers.items()}
