"""Backing store for cart state."""

import copy
from typing import Any, Protocol


class CartStore(Protocol):
    """Key-value storage a cart loads from and saves to."""

    def get(self, key: str) -> Any | None: ...

    def put(self, key: str, value: Any) -> None: ...

    def forget(self, key: str) -> None: ...


class InMemoryStore:
    """Process-local store; values are copied in and out."""

    def __init__(self, data: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(data) if data else {}

    def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._data.get(key))

    def put(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def forget(self, key: str) -> None:
        self._data.pop(key, None)
