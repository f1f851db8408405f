"""Defaults and bounds for query translation."""

DEFAULT_LIMIT = 20
"""Page size and ceiling used when the caller supplies neither."""

MIN_LIMIT = 1

MIN_OFFSET = 0

TOKEN_SEPARATOR = ","
"""Separates tokens within a single query parameter value."""

NULL_VALUE = "__NULL__"
"""Sentinel a client sends (case-insensitively) to compare a field with NULL."""
