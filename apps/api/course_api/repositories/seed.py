"""Seed data loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from course_api.adapters.auth import PasswordHasher
from course_api.repositories.base import CourseRecord, Store, UserRecord

logger = logging.getLogger(__name__)


class SeedUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email_address: str = Field(alias="emailAddress")
    password: str


class SeedCourse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId", ge=1)
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    estimated_time: str | None = Field(default=None, alias="estimatedTime")
    materials_needed: str | None = Field(default=None, alias="materialsNeeded")


class SeedData(BaseModel):
    users: list[SeedUser] = Field(default_factory=list)
    courses: list[SeedCourse] = Field(default_factory=list)


async def load_seed(store: Store, data: SeedData | dict[str, Any], hasher: PasswordHasher) -> tuple[int, int]:
    """Insert seed users then courses; course ``userId`` is the 1-based user position."""
    seed = data if isinstance(data, SeedData) else SeedData.model_validate(data)

    user_ids: list[int] = []
    for user in seed.users:
        record = await store.create(
            UserRecord,
            first_name=user.first_name,
            last_name=user.last_name,
            email_address=user.email_address,
            password=await hasher.hash_async(user.password),
        )
        user_ids.append(record.id)

    for course in seed.courses:
        if course.user_id > len(user_ids):
            raise ValueError(f"Seed course {course.title!r} references unknown user {course.user_id}")
        await store.create(
            CourseRecord,
            title=course.title,
            description=course.description,
            estimated_time=course.estimated_time,
            materials_needed=course.materials_needed,
            user_id=user_ids[course.user_id - 1],
        )

    logger.info("seed.loaded users=%s courses=%s", len(seed.users), len(seed.courses))
    return len(seed.users), len(seed.courses)


async def load_seed_file(store: Store, path: Path, hasher: PasswordHasher) -> tuple[int, int]:
    data = SeedData.model_validate(json.loads(path.read_text(encoding="utf-8")))
    return await load_seed(store, data, hasher)
