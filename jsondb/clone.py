import copy
from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")


class CloneLevel(str, Enum):
    """How default values handed to `ensure` are duplicated before storage."""

    NONE = "none"        # caller and store share the same object
    SHALLOW = "shallow"  # top-level container copied, nested ones shared
    DEEP = "deep"        # nothing shared at any depth


def clone(value: T, level: CloneLevel) -> T:
    if level is CloneLevel.NONE:
        return value
    if level is CloneLevel.SHALLOW:
        return copy.copy(value)
    return copy.deepcopy(value)
