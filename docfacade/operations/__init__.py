from .models import (
    CommandReadOperation,
    CommandWriteOperation,
    CreateCollectionOperation,
    DropCollectionOperation,
    DropDatabaseOperation,
    ListCollectionsOperation,
    Operation,
    OperationType,
)

__all__ = [
    "Operation",
    "OperationType",
    "CommandWriteOperation",
    "CommandReadOperation",
    "DropDatabaseOperation",
    "ListCollectionsOperation",
    "CreateCollectionOperation",
    "DropCollectionOperation",
]
