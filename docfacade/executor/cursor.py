from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Mapping

from pymongo.command_cursor import CommandCursor
from pymongo.errors import InvalidOperation

from .base import BatchCursor

_EXHAUSTED = object()


class BatchCursorIterator:
    """
    Iterator over the documents of a batch cursor.

    A new batch is only requested once the previous one is used up, and
    empty batches are skipped. The iterator owns the cursor: it is closed
    when iteration finishes, when iteration fails, when close() is called,
    or when the iterator is garbage collected, even if it was never
    iterated.

    Usage:
        with iter_batch_cursor(cursor) as documents:
            for document in documents:
                ...
    """

    def __init__(self, cursor: BatchCursor) -> None:
        self._cursor = cursor
        self._batch: Iterator[Mapping[str, Any]] = iter(())
        self._closed = False

    def __iter__(self) -> "BatchCursorIterator":
        return self

    def __next__(self) -> Mapping[str, Any]:
        if self._closed:
            raise StopIteration
        try:
            while True:
                document = next(self._batch, _EXHAUSTED)
                if document is not _EXHAUSTED:
                    return document
                if not self._cursor.has_next():
                    break
                self._batch = iter(self._cursor.next())
        except Exception:
            self.close()
            raise
        self.close()
        raise StopIteration

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._cursor.close()

    def __enter__(self) -> "BatchCursorIterator":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def __del__(self) -> None:
        # _closed is unset when __init__ did not complete.
        if not getattr(self, "_closed", True):
            self.close()


def iter_batch_cursor(cursor: BatchCursor) -> BatchCursorIterator:
    return BatchCursorIterator(cursor)


class PyMongoBatchCursor:
    """
    BatchCursor over a pymongo CommandCursor.

    pymongo already fetches results in server batches, so each ``next()``
    call returns the single document that ``has_next()`` peeked at.
    """

    def __init__(self, cursor: CommandCursor) -> None:
        self._cursor = cursor
        self._peeked: Any = None

    def has_next(self) -> bool:
        if self._peeked is None:
            self._peeked = next(self._cursor, _EXHAUSTED)
        return self._peeked is not _EXHAUSTED

    def next(self) -> list[Mapping[str, Any]]:
        if not self.has_next():
            raise InvalidOperation("cursor is exhausted")
        document, self._peeked = self._peeked, None
        return [document]

    def close(self) -> None:
        self._cursor.close()
