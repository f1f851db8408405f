"""Normalization of raw query parameter values into tokens."""

from __future__ import annotations

from typing import Any

from pyquery2sql._constants import TOKEN_SEPARATOR
from pyquery2sql._errors import ERR_MSG_UNSUPPORTED_INPUT, UnsupportedInputTypeError


def _require_str(value: Any) -> str:
    if not isinstance(value, str):
        raise UnsupportedInputTypeError(
            ERR_MSG_UNSUPPORTED_INPUT,
            f"unexpected query parameter type: {type(value).__name__}",
        )
    return value


def tokenize(value: Any, preserve_groups: bool = False) -> list[str]:
    """Convert a raw parameter value into an ordered list of trimmed tokens.

    Args:
        value: ``None``, a string, or a list/tuple of strings.
        preserve_groups: Keep each string whole instead of splitting it on
            commas. Used for WHERE values, where each list element is one
            group of comma-separated expressions.

    Returns:
        Trimmed, non-empty tokens in input order.

    Raises:
        UnsupportedInputTypeError: If the value has any other shape.
    """
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        elements = [_require_str(v) for v in value]
    else:
        elements = [_require_str(value)]

    if preserve_groups:
        raw = elements
    else:
        raw = [token for element in elements for token in element.split(TOKEN_SEPARATOR)]

    tokens = []
    for token in raw:
        token = token.strip()
        if token:
            tokens.append(token)
    return tokens
