"""Version-stamped memoization for derived graph views.

The engine keeps a single monotonically increasing mutation counter.
Each cached view remembers the version it was computed at; a read
compares that stamp with the current version and recomputes on
mismatch. Several views can share one invalidation signal without
any of them having to be cleared explicitly.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class VersionedCache(Generic[T]):
    """Lazily computed value tied to a mutation version.

    Parameters
    ----------
    compute:
        Zero-argument callable producing a fresh value.
    """

    def __init__(self, compute: Callable[[], T]) -> None:
        self._compute = compute
        self._value: T | None = None
        self._version: int | None = None

    def get(self, version: int) -> T:
        """Return the cached value, recomputing if it predates ``version``."""
        if self._version != version:
            self._value = self._compute()
            self._version = version
        return self._value  # type: ignore[return-value]

    def is_fresh(self, version: int) -> bool:
        return self._version == version
