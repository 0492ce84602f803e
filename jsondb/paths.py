"""Nested access into decoded JSON documents.

Paths are dotted strings such as ``"a.b.0.c"``. Bracket indices are accepted
as well, so ``"a[0].c"`` and ``"a.0.c"`` address the same location. Segments
made of digits index into lists; against a dict they are plain string keys.
"""
import re
from typing import Any, Union

_SEGMENT = re.compile(r"[^.\[\]]+")

Segment = Union[str, int]


def parse(path: str) -> list[Segment]:
    """Split a path expression into its segments.

    >>> parse("a.b[0].c")
    ['a', 'b', 0, 'c']
    """
    if not isinstance(path, str):
        path = str(path)
    return [int(s) if s.isdigit() else s for s in _SEGMENT.findall(path)]


def _child(container: Any, segment: Segment) -> tuple[bool, Any]:
    if isinstance(container, dict):
        key = str(segment)
        if key in container:
            return True, container[key]
    elif isinstance(container, list) and isinstance(segment, int):
        if segment < len(container):
            return True, container[segment]
    return False, None


def get(doc: Any, path: str, default: Any = None) -> Any:
    """Return the value at `path`, or `default` when any segment is missing."""
    current = doc
    for segment in parse(path):
        found, current = _child(current, segment)
        if not found:
            return default
    return current


def has(doc: Any, path: str) -> bool:
    segments = parse(path)
    if not segments:
        return False
    current = doc
    for segment in segments:
        found, current = _child(current, segment)
        if not found:
            return False
    return True


def _assign(container: Union[dict, list], segment: Segment, value: Any):
    if isinstance(container, list):
        # Gaps left by a far index are filled with nulls.
        container.extend([None] * (segment + 1 - len(container)))
        container[segment] = value
    else:
        container[str(segment)] = value


def set(doc: Union[dict, list], path: str, value: Any) -> Union[dict, list]:
    """Write `value` at `path` inside `doc`, mutating and returning it.

    Missing or scalar intermediates are replaced by a new container: a list
    when the following segment is an index, a dict otherwise.
    """
    segments = parse(path)
    if not segments:
        raise ValueError(f"Empty path expression: {path!r}")

    current = doc
    for segment, following in zip(segments, segments[1:]):
        if isinstance(current, list) and not isinstance(segment, int):
            raise TypeError(f"Cannot address list with non-index segment {segment!r}")
        found, child = _child(current, segment)
        if not found or not isinstance(child, (dict, list)):
            child = [] if isinstance(following, int) else {}
            _assign(current, segment, child)
        current = child

    last = segments[-1]
    if isinstance(current, list) and not isinstance(last, int):
        raise TypeError(f"Cannot address list with non-index segment {last!r}")
    _assign(current, last, value)
    return doc
