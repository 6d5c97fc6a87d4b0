"""In-memory store used by the API scaffold and tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, fields, replace
from typing import Any, Literal

from course_api.repositories.base import (
    CourseRecord,
    ForeignKeyConstraintError,
    RecordNotFoundError,
    RecordT,
    StorageError,
    Store,
    UniqueConstraintError,
    UserRecord,
)

_UNIQUE_FIELDS: dict[type, tuple[str, ...]] = {
    UserRecord: ("email_address",),
    CourseRecord: (),
}

StoreOperation = Literal["find_one", "find_all", "create", "update", "destroy"]

_FOREIGN_KEYS: dict[type, dict[str, type]] = {
    UserRecord: {},
    CourseRecord: {"user_id": UserRecord},
}


@dataclass(slots=True)
class InMemoryStore(Store):
    """Simple, deterministic persistence layer for scaffolding and tests."""

    tables: dict[type, dict[int, Any]] = field(
        default_factory=lambda: {UserRecord: {}, CourseRecord: {}}
    )
    next_ids: dict[type, int] = field(default_factory=lambda: {UserRecord: 1, CourseRecord: 1})
    write_count: int = 0
    failure_message: str | None = None
    failure_operation: StoreOperation | None = None
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def fail_next(self, message: str = "Injected storage failure", *, operation: StoreOperation | None = None) -> None:
        """Make the next store operation (or the next ``operation`` call) raise ``StorageError``."""
        self.failure_message = message
        self.failure_operation = operation

    async def find_one(self, kind: type[RecordT], **filters: Any) -> RecordT | None:
        self._maybe_raise("find_one")
        for record in self._table(kind).values():
            if _matches(record, filters):
                return replace(record)
        return None

    async def find_all(self, kind: type[RecordT], **filters: Any) -> list[RecordT]:
        self._maybe_raise("find_all")
        table = self._table(kind)
        return [replace(table[record_id]) for record_id in sorted(table) if _matches(table[record_id], filters)]

    async def create(self, kind: type[RecordT], **values: Any) -> RecordT:
        async with self._lock:
            self._maybe_raise("create")
            self._check_columns(kind, values)
            self._check_unique(kind, values)
            self._check_foreign_keys(kind, values)

            record_id = self.next_ids[kind]
            record = kind(id=record_id, **values)
            self._table(kind)[record_id] = record
            self.next_ids[kind] = record_id + 1
            self.write_count += 1
            return replace(record)

    async def update(self, kind: type[RecordT], record_id: int, **values: Any) -> None:
        async with self._lock:
            self._maybe_raise("update")
            table = self._table(kind)
            current = table.get(record_id)
            if current is None:
                raise RecordNotFoundError(kind, record_id)
            self._check_columns(kind, values)
            self._check_unique(kind, values, exclude_id=record_id)
            self._check_foreign_keys(kind, values)

            table[record_id] = replace(current, **values)
            self.write_count += 1

    async def destroy(self, kind: type[RecordT], record_id: int) -> None:
        async with self._lock:
            self._maybe_raise("destroy")
            table = self._table(kind)
            if record_id not in table:
                raise RecordNotFoundError(kind, record_id)
            del table[record_id]
            self.write_count += 1

    def _table(self, kind: type) -> dict[int, Any]:
        table = self.tables.get(kind)
        if table is None:
            raise StorageError(f"Unknown record type {kind.__name__}")
        return table

    def _maybe_raise(self, operation: StoreOperation) -> None:
        if self.failure_message is None:
            return
        if self.failure_operation is not None and self.failure_operation != operation:
            return
        message = self.failure_message
        self.failure_message = None
        self.failure_operation = None
        raise StorageError(message)

    @staticmethod
    def _check_columns(kind: type, values: dict[str, Any]) -> None:
        columns = {column.name for column in fields(kind)} - {"id"}
        unknown = set(values) - columns
        if unknown:
            raise StorageError(f"Unknown {kind.__name__} columns: {', '.join(sorted(unknown))}")

    def _check_unique(self, kind: type, values: dict[str, Any], *, exclude_id: int | None = None) -> None:
        for field_name in _UNIQUE_FIELDS.get(kind, ()):
            if field_name not in values:
                continue
            for record_id, record in self._table(kind).items():
                if record_id != exclude_id and getattr(record, field_name) == values[field_name]:
                    raise UniqueConstraintError(kind, field_name, values[field_name])

    def _check_foreign_keys(self, kind: type, values: dict[str, Any]) -> None:
        for field_name, target in _FOREIGN_KEYS.get(kind, {}).items():
            if field_name in values and values[field_name] not in self._table(target):
                raise ForeignKeyConstraintError(kind, field_name, values[field_name])


def _matches(record: Any, filters: dict[str, Any]) -> bool:
    return all(getattr(record, name) == value for name, value in filters.items())
