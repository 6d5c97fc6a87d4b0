"""Course API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from course_api.schemas.user import User


class CreateCourseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    description: str
    estimated_time: str | None = Field(default=None, alias="estimatedTime")
    materials_needed: str | None = Field(default=None, alias="materialsNeeded")


class UpdateCourseRequest(CreateCourseRequest):
    """Same shape as creation; unset optional fields keep their stored value."""


class Course(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: str
    estimated_time: str | None = Field(default=None, alias="estimatedTime")
    materials_needed: str | None = Field(default=None, alias="materialsNeeded")
    user_id: int = Field(alias="userId")
    owner: User
