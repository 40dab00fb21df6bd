"""Exceptions raised by gql-opgen collaborators.

The selection builder and renderer never raise for structurally valid
introspection input; these cover configuration, schema loading and
schema fetching.
"""


class OpgenError(Exception):
    """Base exception for gql-opgen."""


class ConfigError(OpgenError):
    """Raised when the configuration cannot be loaded or validated."""


class SchemaLoadError(OpgenError):
    """Raised when a local schema file cannot be read or parsed."""


class SchemaFetchError(OpgenError):
    """Raised when the introspection query against an endpoint fails."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
