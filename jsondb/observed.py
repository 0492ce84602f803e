"""Containers that write their document back to disk when mutated.

Only the wrapped container itself is observed. Containers nested inside it
are handed out as plain dicts and lists, so changes made through them are
persisted by the next observed mutation or an explicit `save()`.
"""
from collections.abc import MutableMapping, MutableSequence
from typing import Any, Callable


class _Observed:
    def __init__(self, target, save: Callable[[], None]):
        self._target = target
        self._save = save

    @property
    def data(self):
        """The underlying plain container."""
        return self._target

    def save(self):
        self._save()

    def __len__(self) -> int:
        return len(self._target)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._target!r}>"


class ObservedDict(_Observed, MutableMapping):
    def __getitem__(self, key):
        return self._target[key]

    def __setitem__(self, key, value):
        self._target[key] = value
        self._save()

    def __delitem__(self, key):
        del self._target[key]
        self._save()

    def __iter__(self):
        return iter(self._target)

    def __eq__(self, other):
        if isinstance(other, ObservedDict):
            other = other.data
        return self._target == other


class ObservedList(_Observed, MutableSequence):
    def __getitem__(self, index):
        return self._target[index]

    def __setitem__(self, index, value):
        self._target[index] = value
        self._save()

    def __delitem__(self, index):
        del self._target[index]
        self._save()

    def insert(self, index, value):
        self._target.insert(index, value)
        self._save()

    def append(self, value):
        self._target.append(value)
        self._save()

    def extend(self, values):
        self._target.extend(values)
        self._save()

    def __eq__(self, other):
        if isinstance(other, ObservedList):
            other = other.data
        return self._target == other


def unwrap(value: Any) -> Any:
    if isinstance(value, _Observed):
        return value.data
    return value


def observe(value: Any, save: Callable[[], None]) -> Any:
    """Wrap dicts and lists; scalars cannot be mutated in place and pass through."""
    if isinstance(value, dict):
        return ObservedDict(value, save)
    if isinstance(value, list):
        return ObservedList(value, save)
    return value
