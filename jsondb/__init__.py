from .base import KVStore
from .clone import CloneLevel
from .errors import (
    CorruptDocument,
    InvalidKey,
    InvalidPath,
    JsonDBError,
    MissingDefault,
    TypeMismatch,
    UnknownOperator,
)
from .observed import ObservedDict, ObservedList
from .operators import Operator
from .store import DocumentHandle, JsonDB, ReadResult, ReadStatus

__all__ = [
    "KVStore",
    "JsonDB",
    "CloneLevel",
    "Operator",
    "DocumentHandle",
    "ReadResult",
    "ReadStatus",
    "ObservedDict",
    "ObservedList",
    "JsonDBError",
    "InvalidKey",
    "InvalidPath",
    "MissingDefault",
    "TypeMismatch",
    "UnknownOperator",
    "CorruptDocument",
]
