"""Course service layer."""

from __future__ import annotations

import logging

from course_api.domain.ownership import ensure_owner
from course_api.errors import OwnershipViolation, ResourceNotFound, StorageFailure, storage_guard
from course_api.repositories.base import CourseRecord, RecordNotFoundError, Store, UserRecord
from course_api.schemas.auth import AuthPrincipal
from course_api.schemas.course import Course, CreateCourseRequest, UpdateCourseRequest
from course_api.services.users import to_user

logger = logging.getLogger(__name__)

_UPDATE_FIELDS = ("title", "description", "estimated_time", "materials_needed")


class CourseService:
    def __init__(self, store: Store) -> None:
        self._store = store

    async def list_courses(self) -> list[Course]:
        with storage_guard("courses.find_all"):
            records = await self._store.find_all(CourseRecord)
            owners = {user.id: user for user in await self._store.find_all(UserRecord)}
        return [self._to_course(record, owners.get(record.user_id)) for record in records]

    async def get_course(self, course_id: int) -> Course:
        record = await self.get_course_record(course_id)
        with storage_guard("courses.find_owner"):
            owner = await self._store.find_one(UserRecord, id=record.user_id)
        return self._to_course(record, owner)

    async def get_course_record(self, course_id: int) -> CourseRecord:
        with storage_guard("courses.find_one"):
            record = await self._store.find_one(CourseRecord, id=course_id)
        if record is None:
            raise ResourceNotFound()
        return record

    async def get_owned_course_record(self, *, principal: AuthPrincipal, course_id: int) -> CourseRecord:
        """Fetch a course and require the principal to own it."""
        record = await self.get_course_record(course_id)
        try:
            ensure_owner(principal, record.user_id)
        except OwnershipViolation:
            logger.warning(
                "courses.ownership_rejected course_id=%s principal_id=%s owner_id=%s",
                course_id,
                principal.user_id,
                record.user_id,
            )
            raise
        return record

    async def create_course(self, *, principal: AuthPrincipal, payload: CreateCourseRequest) -> CourseRecord:
        with storage_guard("courses.create"):
            record = await self._store.create(
                CourseRecord,
                title=payload.title,
                description=payload.description,
                estimated_time=payload.estimated_time,
                materials_needed=payload.materials_needed,
                user_id=principal.user_id,
            )
        logger.info("courses.created course_id=%s owner_id=%s", record.id, principal.user_id)
        return record

    async def update_course(self, *, course: CourseRecord, payload: UpdateCourseRequest) -> None:
        changes = payload.model_dump(include=set(_UPDATE_FIELDS), exclude_unset=True)
        with storage_guard("courses.update"):
            try:
                await self._store.update(CourseRecord, course.id, **changes)
            except RecordNotFoundError as exc:
                raise ResourceNotFound() from exc
        logger.info("courses.updated course_id=%s fields=%s", course.id, ",".join(sorted(changes)))

    async def delete_course(self, *, course: CourseRecord) -> None:
        with storage_guard("courses.destroy"):
            try:
                await self._store.destroy(CourseRecord, course.id)
            except RecordNotFoundError as exc:
                raise ResourceNotFound() from exc
        logger.info("courses.deleted course_id=%s owner_id=%s", course.id, course.user_id)

    @staticmethod
    def _to_course(record: CourseRecord, owner: UserRecord | None) -> Course:
        if owner is None:
            logger.error("courses.owner_missing course_id=%s owner_id=%s", record.id, record.user_id)
            raise StorageFailure()
        return Course(
            id=record.id,
            title=record.title,
            description=record.description,
            estimated_time=record.estimated_time,
            materials_needed=record.materials_needed,
            user_id=record.user_id,
            owner=to_user(owner),
        )
