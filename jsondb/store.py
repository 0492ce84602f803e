import json
import logging
import os
import threading
import weakref
from contextlib import nullcontext
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from jsondb import operators, paths
from jsondb.base import KVStore
from jsondb.clone import CloneLevel, clone
from jsondb.errors import (
    CorruptDocument,
    InvalidKey,
    InvalidPath,
    MissingDefault,
    TypeMismatch,
)
from jsondb.observed import observe, unwrap

logger = logging.getLogger(__name__)

SUFFIX = ".json"


class ReadStatus(str, Enum):
    LOADED = "loaded"    # decoded from an existing file
    CREATED = "created"  # file was missing and has been initialized to {}
    RESET = "reset"      # file was unreadable and has been overwritten with {}


@dataclass(frozen=True)
class ReadResult:
    value: Any
    status: ReadStatus


class DocumentHandle:
    """A document loaded for editing, written back only on `save()`.

    Used as a context manager it saves when the block exits cleanly and
    discards the changes when the block raises.
    """

    def __init__(self, store: "JsonDB", key: str, value: Any):
        self._store = store
        self.key = key
        self.value = value

    def save(self):
        self._store.set(self.key, self.value)

    def __enter__(self) -> "DocumentHandle":
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.save()

    def __repr__(self) -> str:
        return f"<DocumentHandle {self.key}={self.value!r}>"


class JsonDB(KVStore):
    """One pretty-printed JSON document per key, under the store's directory.

    Nothing is cached: every call reads its document from disk and every
    mutation writes the whole document back. Concurrent read-modify-write
    cycles on the same key can lose updates; ``locking=True`` serializes
    them within a single process.
    """

    def __init__(self, *args, **kwargs):
        self._observe = kwargs.pop("observe", False)
        self._clone_level = CloneLevel(kwargs.pop("clone_level", CloneLevel.DEEP))
        self._strict = kwargs.pop("strict", False)
        self._locking = kwargs.pop("locking", False)
        super().__init__(*args, **kwargs)

    def setup(self):
        self._data_dir = Path(os.path.abspath(self._path))
        # Entries disappear once no caller holds the key's lock.
        self._locks = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def __repr__(self) -> str:
        return f"<JsonDB@{self._data_dir}>"

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def clone_level(self) -> CloneLevel:
        return self._clone_level

    # Keys and files

    def path_for(self, key: str) -> Path:
        path = Path(os.path.normpath(self._data_dir / f"{key}{SUFFIX}"))
        if not path.is_relative_to(self._data_dir):
            raise InvalidKey(f"Key {key!r} resolves outside {self._data_dir}")
        return path

    def keys(self) -> list[str]:
        return sorted(
            file.relative_to(self._data_dir).with_suffix("").as_posix()
            for file in self._data_dir.rglob(f"*{SUFFIX}")
            if file.is_file()
        )

    def _key(self, key: Any) -> str:
        if not isinstance(key, str) or not key:
            raise InvalidKey(f"Keys must be non-empty strings, got {key!r}")
        return key

    def _check_path(self, path: Optional[str]) -> Optional[str]:
        if path is not None and not paths.parse(path):
            raise InvalidPath(f"Path expression addresses nothing: {path!r}")
        return path

    def _lock(self, key: str):
        if not self._locking:
            return nullcontext()
        with self._locks_guard:
            return self._locks.setdefault(key, threading.RLock())

    # Disk I/O

    def _dump(self, file: Path, doc: Any):
        # Encode before opening so an unserializable value leaves the file untouched.
        text = json.dumps(doc, indent=2, ensure_ascii=False)
        file.parent.mkdir(parents=True, exist_ok=True)
        file.write_text(text, encoding="utf-8")

    def _write(self, key: str, doc: Any):
        logger.debug("Writing %s", key)
        self._dump(self.path_for(key), doc)

    def read(self, key: str) -> ReadResult:
        """Load a whole document, initializing it to ``{}`` if it cannot be read."""
        file = self.path_for(self._key(key))
        try:
            with file.open("rt", encoding="utf-8") as f:
                return ReadResult(json.load(f), ReadStatus.LOADED)
        except FileNotFoundError:
            logger.debug("Initializing %s", file)
            status = ReadStatus.CREATED
        except (OSError, ValueError) as e:
            if self._strict:
                raise CorruptDocument(file, e) from e
            logger.warning("Resetting unreadable document %s: %s", file, e)
            status = ReadStatus.RESET
        self._dump(file, {})
        return ReadResult({}, status)

    def _wrap(self, key: str, root: Any, value: Any) -> Any:
        if not self._observe:
            return value
        return observe(value, lambda: self._write(key, root))

    # Core operations

    def get(self, key: Any, path: Optional[str] = None) -> Any:
        path = self._check_path(path)
        if key is None:
            return None
        key = self._key(str(key))
        root = self.read(key).value
        value = root if path is None else paths.get(root, path)
        return self._wrap(key, root, value)

    def _place(self, root: Any, path: Optional[str], value: Any) -> Any:
        if path is None:
            return value
        if root is None:
            root = {}
        if not isinstance(root, (dict, list)):
            raise TypeMismatch(f"Cannot set {path!r} on a {type(root).__name__} document")
        try:
            return paths.set(root, path, value)
        except TypeError as e:
            raise TypeMismatch(str(e)) from e

    def _set(self, key: str, value: Any, path: Optional[str]) -> Any:
        value = unwrap(value)
        root = None if path is None else self.read(key).value
        root = self._place(root, path, value)
        self._write(key, root)
        return root

    def set(self, key: Any, value: Any, path: Optional[str] = None) -> Any:
        """Store `value` as the document, or at `path` inside it.

        Returns the whole document as written.
        """
        key = self._key(key)
        path = self._check_path(path)
        with self._lock(key):
            root = self._set(key, value, path)
        return self._wrap(key, root, root)

    def has(self, key: Any, path: Optional[str] = None) -> bool:
        path = self._check_path(path)
        if key is None:
            return False
        key = self._key(str(key))
        if path is None:
            return self.path_for(key).is_file()
        return paths.has(self.read(key).value, path)

    def delete(self, key: Any) -> bool:
        file = self.path_for(self._key(key))
        with self._lock(key):
            existed = file.is_file()
            file.unlink(missing_ok=True)
        return existed

    def open(self, key: Any) -> DocumentHandle:
        key = self._key(key)
        return DocumentHandle(self, key, self.read(key).value)

    # Convenience operations

    def ensure(self, key: Any, default: Any, path: Optional[str] = None) -> Any:
        """Return the value at the location, writing a copy of `default` there first if absent."""
        key = self._key(key)
        path = self._check_path(path)
        if default is None:
            raise MissingDefault(f"ensure({key!r}) needs a default value")
        with self._lock(key):
            if self.has(key, path):
                return self.get(key, path)
            value = clone(unwrap(default), self._clone_level)
            root = self._set(key, value, path)
        return self._wrap(key, root, value)

    def push(self, key: Any, value: Any, path: Optional[str] = None) -> Any:
        key = self._key(key)
        path = self._check_path(path)
        with self._lock(key):
            root = self.read(key).value
            target = root if path is None else paths.get(root, path)
            if not isinstance(target, list):
                raise TypeMismatch(f"Cannot push onto {type(target).__name__} at {key!r}")
            target.append(unwrap(value))
            self._write(key, root)
        return self._wrap(key, root, target)

    def math(
        self,
        key: Any,
        operator: Union[str, operators.Operator],
        operand: Union[int, float],
        path: Optional[str] = None,
    ) -> Union[int, float]:
        key = self._key(key)
        op = operators.Operator.resolve(operator)
        path = self._check_path(path)
        with self._lock(key):
            root = self.read(key).value
            base = root if path is None else paths.get(root, path)
            result = operators.apply(op, base, operand)
            self._write(key, self._place(root, path, result))
        return result
