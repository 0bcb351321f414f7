from .base import BatchCursor, OperationExecutor
from .cursor import BatchCursorIterator, PyMongoBatchCursor, iter_batch_cursor
from .pymongo_executor import MongoClientExecutor

__all__ = [
    "OperationExecutor",
    "BatchCursor",
    "MongoClientExecutor",
    "BatchCursorIterator",
    "PyMongoBatchCursor",
    "iter_batch_cursor",
]
