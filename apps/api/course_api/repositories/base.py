"""Persistence interface consumed by the service layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, TypeVar


@dataclass(slots=True)
class UserRecord:
    id: int
    first_name: str
    last_name: str
    email_address: str
    password: str


@dataclass(slots=True)
class CourseRecord:
    id: int
    title: str
    description: str
    user_id: int
    estimated_time: str | None = None
    materials_needed: str | None = None


RecordT = TypeVar("RecordT", UserRecord, CourseRecord)


class StorageError(Exception):
    """Raised when the persistence layer cannot complete an operation."""


class UniqueConstraintError(StorageError):
    def __init__(self, kind: type, field_name: str, value: Any) -> None:
        self.kind = kind
        self.field_name = field_name
        self.value = value
        super().__init__(f"{kind.__name__}.{field_name} must be unique")


class ForeignKeyConstraintError(StorageError):
    def __init__(self, kind: type, field_name: str, value: Any) -> None:
        self.kind = kind
        self.field_name = field_name
        self.value = value
        super().__init__(f"{kind.__name__}.{field_name}={value!r} references a missing record")


class RecordNotFoundError(StorageError):
    def __init__(self, kind: type, record_id: int) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.__name__} {record_id} does not exist")


class Store(ABC):
    """Async CRUD collaborator over user and course records."""

    @abstractmethod
    async def find_one(self, kind: type[RecordT], **filters: Any) -> RecordT | None:
        """Return the first record of ``kind`` whose fields equal ``filters``."""

    @abstractmethod
    async def find_all(self, kind: type[RecordT], **filters: Any) -> list[RecordT]:
        """Return every matching record ordered by id."""

    @abstractmethod
    async def create(self, kind: type[RecordT], **fields: Any) -> RecordT:
        """Persist a new record and return it with its assigned id."""

    @abstractmethod
    async def update(self, kind: type[RecordT], record_id: int, **fields: Any) -> None:
        """Overwrite the given fields of an existing record."""

    @abstractmethod
    async def destroy(self, kind: type[RecordT], record_id: int) -> None:
        """Delete an existing record."""


__all__ = [
    "CourseRecord",
    "ForeignKeyConstraintError",
    "RecordNotFoundError",
    "RecordT",
    "StorageError",
    "Store",
    "UniqueConstraintError",
    "UserRecord",
]
