"""Services package."""

from activity_log.services.storage import (
    ActivityPageMapper,
    ActivityStorageInterface,
    AuthenticationError,
    ClearAllError,
    ClearAllResult,
    ConnectionError,
    NotFoundError,
    NotionActivityStorage,
    NotionClient,
    PropertyNames,
    StorageError,
)

__all__ = [
    "ActivityPageMapper",
    "ActivityStorageInterface",
    "AuthenticationError",
    "ClearAllError",
    "ClearAllResult",
    "ConnectionError",
    "NotFoundError",
    "NotionActivityStorage",
    "NotionClient",
    "PropertyNames",
    "StorageError",
]
