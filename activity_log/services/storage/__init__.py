"""
Storage Services Package

Provides the abstract storage interface and the Notion implementation.
The HTTP layer only depends on the interface, so the backend is swappable.
"""

from activity_log.services.storage.interface import (
    ActivityStorageInterface,
    AuthenticationError,
    ClearAllError,
    ClearAllResult,
    ConnectionError,
    NotFoundError,
    StorageError,
)
from activity_log.services.storage.mapper import ActivityPageMapper, PropertyNames
from activity_log.services.storage.notion import NotionActivityStorage, NotionClient

__all__ = [
    # Interface
    "ActivityStorageInterface",
    "ClearAllResult",
    # Exceptions
    "AuthenticationError",
    "ClearAllError",
    "ConnectionError",
    "NotFoundError",
    "StorageError",
    # Notion implementation
    "ActivityPageMapper",
    "NotionActivityStorage",
    "NotionClient",
    "PropertyNames",
]
