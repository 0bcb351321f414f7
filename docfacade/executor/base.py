from __future__ import annotations

from typing import Any, Mapping, Protocol

from ..config import ReadPreferenceMode
from ..operations.models import Operation


class BatchCursor(Protocol):
    """
    Protocol for cursors that hand out results one batch at a time.

    Returned by executors for read operations that produce a result stream
    (e.g. ListCollectionsOperation).
    """

    def has_next(self) -> bool:
        """Return True if another batch is available."""
        ...

    def next(self) -> list[Mapping[str, Any]]:
        """Return the next batch of documents."""
        ...

    def close(self) -> None:
        """Release any server-side resources held by the cursor."""
        ...


class OperationExecutor(Protocol):
    """
    Protocol for the collaborator that runs operations against a server.

    Handles never talk to the server directly; everything goes through
    one of these two methods. Implementations own blocking, timeouts and
    error reporting, and errors they raise reach the caller unchanged.
    """

    def execute_write(self, operation: Operation) -> Any:
        """Run a write operation on the primary."""
        ...

    def execute_read(self, operation: Operation, read_preference: ReadPreferenceMode) -> Any:
        """Run a read operation on a server selected by ``read_preference``."""
        ...
