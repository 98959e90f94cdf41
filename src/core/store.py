"""In-memory record store behind a small repository interface.

Records are plain dicts keyed by integer id inside named collections
("projects", "tasks"). Ids are assigned per collection and never reused.
"""

import copy
import logging
from typing import Any, Protocol

from src.core.config import constants


logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Raised when a store operation is given malformed input."""


class RecordNotFoundError(KeyError):
    """Raised when a record id does not exist in a collection."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Record not found"


class Repository(Protocol):
    """Interface the services depend on; swap the in-memory store for a real backend here."""

    async def create_record(self, *, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a record and return it with its assigned id."""
        ...

    async def get_record(self, *, collection: str, record_id: int) -> dict[str, Any]:
        """Return one record or raise RecordNotFoundError."""
        ...

    async def list_records(
        self,
        *,
        collection: str,
        filters: dict[str, Any] | None = None,
        page: int = 1,
        per_page: int = constants.DEFAULT_PER_PAGE_LIMIT,
    ) -> list[dict[str, Any]]:
        """Return records matching all equality filters, ordered by id."""
        ...

    async def update_record(self, *, collection: str, record_id: int, data: dict[str, Any]) -> dict[str, Any]:
        """Merge ``data`` into a record and return the result."""
        ...

    async def delete_record(self, *, collection: str, record_id: int) -> None:
        """Remove a record or raise RecordNotFoundError."""
        ...


class InMemoryStore:
    """Pure Python in-memory implementation of Repository.

    Every record handed in or out is deep-copied so callers can never mutate
    stored state without going through ``update_record``.
    """

    def __init__(self) -> None:
        """Initialize empty store."""
        self._collections: dict[str, dict[int, dict[str, Any]]] = {}
        self._next_ids: dict[str, int] = {}

    def _collection(self, collection: str) -> dict[int, dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def _require(self, collection: str, record_id: int) -> dict[str, Any]:
        if not isinstance(record_id, int) or isinstance(record_id, bool):
            raise DatabaseError(f"Record ID must be an integer, got {type(record_id)}")

        records = self._collections.get(collection, {})
        if record_id not in records:
            raise RecordNotFoundError(f"Record not found in {collection}: {record_id}")
        return records[record_id]

    async def create_record(self, *, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Create a new record in the specified collection.

        Args:
            collection: Name of the collection
            data: Record data to store (any ``id`` key is ignored)

        Returns:
            Created record including its integer id

        Raises:
            DatabaseError: If data is not a dictionary
        """
        if not isinstance(data, dict):
            raise DatabaseError(f"Data must be a dictionary, got {type(data)}")

        record_id = self._next_ids.get(collection, 1)
        self._next_ids[collection] = record_id + 1

        record = {**copy.deepcopy(data), "id": record_id}
        self._collection(collection)[record_id] = record
        logger.debug("store_create", extra={"collection": collection, "record_id": record_id})

        return copy.deepcopy(record)

    async def get_record(self, *, collection: str, record_id: int) -> dict[str, Any]:
        """Get a record by ID.

        Raises:
            RecordNotFoundError: If record not found
            DatabaseError: If record_id is not an integer
        """
        return copy.deepcopy(self._require(collection, record_id))

    async def list_records(
        self,
        *,
        collection: str,
        filters: dict[str, Any] | None = None,
        page: int = 1,
        per_page: int = constants.DEFAULT_PER_PAGE_LIMIT,
    ) -> list[dict[str, Any]]:
        """List records from the collection.

        Args:
            collection: Name of the collection
            filters: Field/value pairs that must all match exactly
            page: Page number (1-indexed)
            per_page: Number of records per page

        Returns:
            Matching records ordered by id
        """
        if page < 1 or per_page < 1:
            raise DatabaseError(f"Invalid pagination: page={page}, per_page={per_page}")

        records = [self._collection(collection)[key] for key in sorted(self._collection(collection))]
        if filters:
            records = [r for r in records if all(r.get(field) == value for field, value in filters.items())]

        start_index = (page - 1) * per_page
        return [copy.deepcopy(r) for r in records[start_index : start_index + per_page]]

    async def update_record(self, *, collection: str, record_id: int, data: dict[str, Any]) -> dict[str, Any]:
        """Merge data into an existing record.

        Raises:
            RecordNotFoundError: If record not found
            DatabaseError: If data is not a dictionary
        """
        if not isinstance(data, dict):
            raise DatabaseError(f"Data must be a dictionary, got {type(data)}")

        record = self._require(collection, record_id)
        record.update({key: copy.deepcopy(value) for key, value in data.items() if key != "id"})
        logger.debug("store_update", extra={"collection": collection, "record_id": record_id})

        return copy.deepcopy(record)

    async def delete_record(self, *, collection: str, record_id: int) -> None:
        """Delete a record from the collection.

        Raises:
            RecordNotFoundError: If record not found
        """
        self._require(collection, record_id)
        del self._collections[collection][record_id]
        logger.debug("store_delete", extra={"collection": collection, "record_id": record_id})

    def count(self, collection: str) -> int:
        """Return the number of records in a collection."""
        return len(self._collections.get(collection, {}))


async def list_all_records(
    store: Repository,
    *,
    collection: str,
    filters: dict[str, Any] | None = None,
) -> list[dict[str, Any]]:
    """Page through a collection until exhausted."""
    records: list[dict[str, Any]] = []
    page = 1
    while True:
        batch = await store.list_records(collection=collection, filters=filters, page=page)
        if not batch:
            return records
        records.extend(batch)
        page += 1


# Process-wide store, replaced per app instance in the lifespan
_store: InMemoryStore = InMemoryStore()


def get_store() -> Repository:
    """FastAPI dependency returning the active store."""
    return _store


def reset_store() -> InMemoryStore:
    """Replace the process-wide store with an empty one and return it."""
    global _store  # noqa: PLW0603
    _store = InMemoryStore()
    return _store
