class JsonDBError(Exception):
    """Base class for every error raised by the store."""


class InvalidKey(JsonDBError, ValueError):
    """Keys must be non-empty strings that stay inside the data directory."""


class MissingDefault(JsonDBError, ValueError):
    """`ensure` was called without a default value."""


class TypeMismatch(JsonDBError, TypeError):
    """The stored value has the wrong shape for the requested operation."""


class UnknownOperator(JsonDBError, ValueError):
    """The math operator name is not one of the known aliases."""


class CorruptDocument(JsonDBError):
    """A document on disk could not be read or decoded (strict mode only)."""

    def __init__(self, path, cause: Exception):
        super().__init__(f"Could not read {path}: {cause}")
        self.path = path
        self.cause = cause


class InvalidPath(JsonDBError, ValueError):
    """A path expression was given but addresses no location."""
