from .client import DocumentClient
from .collection import CollectionHandle
from .config import CollectionOptions, CreateCollectionOptions, DatabaseOptions
from .database import DatabaseHandle
from .executor import MongoClientExecutor, OperationExecutor

__all__ = [
    "DocumentClient",
    "DatabaseHandle",
    "CollectionHandle",
    "DatabaseOptions",
    "CollectionOptions",
    "CreateCollectionOptions",
    "OperationExecutor",
    "MongoClientExecutor",
]
