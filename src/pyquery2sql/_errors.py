"""Exception hierarchy for query-parameter-to-SQL translation."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any


class TranslationError(Exception):
    """Base exception for query translation errors.

    Provides dual messaging: a sanitized user-facing message and
    internal details for logging.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class ConfigurationError(TranslationError):
    """Raised when the registry or tokenizer API is misused.

    Signals an integration bug; never collected per request.
    """


class InvalidDataTypeError(ConfigurationError):
    """Raised when a field is registered with an unknown data type."""


class UnsupportedInputTypeError(ConfigurationError):
    """Raised when a raw parameter value is neither a string nor a list of strings."""


@dataclass(frozen=True)
class ValidationIssue:
    """A single user-input problem found during translation."""

    message: str
    data: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "data": self.data}


class QueryValidationError(TranslationError):
    """Raised once per translation when any validation issue was collected."""

    def __init__(self, user_message: str, issues: list[ValidationIssue]) -> None:
        details = "; ".join(issue.message for issue in issues)
        super().__init__(user_message, f"{user_message}: {details}")
        self.issues = tuple(issues)

    def to_list(self) -> list[dict[str, Any]]:
        return [issue.to_dict() for issue in self.issues]


class ValidationErrors:
    """Per-call collector of validation issues, inspected once at the end."""

    def __init__(self) -> None:
        self._issues: list[ValidationIssue] = []

    def add(self, message: str, data: dict[str, Any] | None = None) -> None:
        self._issues.append(ValidationIssue(message, data))

    def raise_if_any(self) -> None:
        if self._issues:
            raise QueryValidationError(ERR_MSG_QUERY_VALIDATION, self._issues)

    def __bool__(self) -> bool:
        return bool(self._issues)

    def __len__(self) -> int:
        return len(self._issues)

    def __iter__(self) -> Iterator[ValidationIssue]:
        return iter(self._issues)


# Sanitized user-facing error message constants
ERR_MSG_QUERY_VALIDATION = "Query Validation Error"
ERR_MSG_INVALID_DATA_TYPE = "invalid field data type"
ERR_MSG_UNSUPPORTED_INPUT = "unsupported query parameter type"
