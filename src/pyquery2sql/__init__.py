"""pyquery2sql - Translate HTTP query parameters into validated, parameterized SQL."""

from __future__ import annotations

__version__ = "0.1.0"

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

from pyquery2sql._errors import (
    ConfigurationError,
    InvalidDataTypeError,
    QueryValidationError,
    TranslationError,
    UnsupportedInputTypeError,
    ValidationIssue,
)
from pyquery2sql._translator import Translator
from pyquery2sql.registry import DataType, FieldRegistry, FieldSpec
from pyquery2sql.result import Result

__all__ = [
    "translate",
    "translate_async",
    "translate_later",
    "DataType",
    "FieldRegistry",
    "FieldSpec",
    "Result",
    "TranslationError",
    "ConfigurationError",
    "InvalidDataTypeError",
    "UnsupportedInputTypeError",
    "QueryValidationError",
    "ValidationIssue",
]

Callback = Callable[[Exception | None, Result | None], None]


def translate(
    params: Mapping[str, Any],
    registry: FieldRegistry,
    *,
    max_limit: int | None = None,
    default_limit: int | None = None,
) -> Result:
    """Translate query parameters into validated query parts.

    Recognized keys are ``fields``, ``whereAnd`` (or ``where``), ``whereOr``,
    ``whereJoin``, ``orderBy``, ``offset`` and ``limit``. Each value may be
    absent, a string (optionally comma-delimited) or a list of strings.

    Args:
        params: Raw query parameters.
        registry: Fields the query may reference.
        max_limit: Ceiling for ``limit``. Defaults to 20.
        default_limit: ``limit`` when the request has none. Defaults to
            ``max_limit``.

    Returns:
        Result with SELECT, WHERE, ORDER BY and LIMIT clauses and the
        values bound to the WHERE placeholders.

    Raises:
        QueryValidationError: If any WHERE value or ``whereJoin`` is invalid.
            Carries every issue found.
        ConfigurationError: If a parameter value has an unsupported type.
    """
    translator = Translator(registry, max_limit=max_limit, default_limit=default_limit)
    return translator.translate(params)


async def translate_async(
    params: Mapping[str, Any],
    registry: FieldRegistry,
    *,
    max_limit: int | None = None,
    default_limit: int | None = None,
) -> Result:
    """Like ``translate``, but yields to the event loop once before running."""
    await asyncio.sleep(0)
    return translate(params, registry, max_limit=max_limit, default_limit=default_limit)


def translate_later(
    params: Mapping[str, Any],
    registry: FieldRegistry,
    callback: Callback,
    *,
    max_limit: int | None = None,
    default_limit: int | None = None,
) -> asyncio.Handle:
    """Schedule a translation on the running loop and report it to ``callback``.

    ``callback(error, result)`` is called exactly once, after the current
    loop iteration, with either ``(None, result)`` or ``(error, None)``.

    Raises:
        RuntimeError: If no event loop is running.
    """
    loop = asyncio.get_running_loop()

    def run() -> None:
        try:
            result = translate(
                params, registry, max_limit=max_limit, default_limit=default_limit
            )
        except Exception as e:
            callback(e, None)
        else:
            callback(None, result)

    return loop.call_soon(run)
