from abc import ABCMeta, abstractmethod
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar


K = TypeVar("K")
V = TypeVar("V")


class KVStore(Generic[K, V], metaclass=ABCMeta):
    def __init__(self, path: Path = Path("data")):
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)
        self._path = path
        self.setup()

    @abstractmethod
    def setup(self):
        ...

    @abstractmethod
    def get(self, key: K, path: Optional[str] = None) -> V:
        ...

    @abstractmethod
    def set(self, key: K, value: V, path: Optional[str] = None) -> Any:
        ...

    @abstractmethod
    def has(self, key: K, path: Optional[str] = None) -> bool:
        ...

    @abstractmethod
    def delete(self, key: K) -> bool:
        ...

    def __getitem__(self, key: K) -> V:
        return self.get(key)

    def __setitem__(self, key: K, value: V):
        self.set(key, value)

    def __delitem__(self, key: K):
        if not self.delete(key):
            raise KeyError(key)

    def __contains__(self, key: K) -> bool:
        return self.has(key)
