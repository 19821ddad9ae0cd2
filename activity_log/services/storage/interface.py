"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap Notion for a real database later
2. Use in-memory fakes in tests
3. Keep the HTTP layer decoupled from the Notion page schema

The interface is intentionally small: create, list, archive, archive-all.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from activity_log.models.activity import Activity, ActivityInput


class ClearAllResult(BaseModel):
    """Outcome of a successful clear-all."""
    archived_ids: list[str] = Field(default_factory=list)

    @property
    def archived_count(self) -> int:
        return len(self.archived_ids)


class ActivityStorageInterface(ABC):
    """
    Abstract interface for activity storage operations.

    Deleting is a soft delete: records are archived, never removed,
    and archived records never appear in `get_activities`.
    """

    @abstractmethod
    async def create_activity(self, activity: ActivityInput) -> dict[str, Any]:
        """
        Store a new activity.

        Returns:
            The store's representation of the created record (includes "id")

        Raises:
            StorageError: If the store rejects the record or is unreachable
        """

    @abstractmethod
    async def get_activities(self) -> list[Activity]:
        """
        List active records, newest first (date desc, then time desc).

        Raises:
            StorageError: If the query fails
        """

    @abstractmethod
    async def delete_activity(self, activity_id: str) -> bool:
        """
        Archive a record by ID.

        Returns:
            True if archived

        Raises:
            NotFoundError: If the ID does not resolve to a record
            StorageError: If the update fails
        """

    @abstractmethod
    async def clear_all_activities(self) -> ClearAllResult:
        """
        Archive every active record.

        Not atomic: if some archives fail the others stay archived.

        Raises:
            ClearAllError: If at least one archive failed
            StorageError: If listing the records failed
        """


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class ConnectionError(StorageError):
    """Could not reach the storage backend."""
    pass


class AuthenticationError(StorageError):
    """Storage backend rejected the credentials."""
    pass


class ClearAllError(StorageError):
    """
    One or more archive calls of a clear-all failed.

    The records in `archived_ids` were archived and are not restored.
    """

    def __init__(self, archived_ids: list[str], failed: dict[str, str]):
        self.archived_ids = archived_ids
        self.failed = failed
        failed_list = ", ".join(sorted(failed))
        super().__init__(
            f"Failed to archive {len(failed)} of "
            f"{len(failed) + len(archived_ids)} activities "
            f"({len(archived_ids)} archived); failed ids: {failed_list}"
        )
