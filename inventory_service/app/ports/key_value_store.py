"""Port: embedded key-value store with bucket namespaces.

The store owns the database handle: it opens it (connect), reports readiness
(ready/ping) and hands out scoped transactions. Transactions yield objects with
`bucket(name)` / `create_bucket_if_not_exists(name)`; buckets expose
get/put/delete/cursor over byte keys.
"""
from __future__ import annotations

from typing import Any, AsyncContextManager, Protocol


class KeyValueStore(Protocol):
    @property
    def ready(self) -> bool: ...

    @property
    def location(self) -> str: ...

    async def connect(self) -> None: ...

    async def ping(self) -> bool:
        """True when the handle answers and the inventory namespace exists."""
        ...

    async def close(self) -> None: ...

    def read_transaction(self) -> AsyncContextManager[Any]:
        """Read-only snapshot; writes inside it raise StorageError."""
        ...

    def write_transaction(self) -> AsyncContextManager[Any]:
        """Committed on clean exit, rolled back entirely on any exception."""
        ...
