"""Course routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from course_api.repositories.base import CourseRecord
from course_api.routes.dependencies import (
    get_authenticated_principal,
    get_course_service,
    get_owned_course,
    validated_course_update,
    validated_new_course,
)
from course_api.schemas.auth import AuthPrincipal
from course_api.schemas.course import Course, CreateCourseRequest, UpdateCourseRequest
from course_api.schemas.error import MessageResponse, OwnershipErrorResponse, ValidationErrorResponse
from course_api.services.courses import CourseService

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.get(
    "",
    response_model=list[Course],
    responses={401: {"model": MessageResponse}},
)
async def list_courses(
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> list[Course]:
    return await service.list_courses()


@router.get(
    "/{id}",
    response_model=Course,
    responses={401: {"model": MessageResponse}, 404: {"model": MessageResponse}},
)
async def get_course(
    course_id: Annotated[int, Path(alias="id")],
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> Course:
    return await service.get_course(course_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={
        201: {"description": "Course created", "headers": {"Location": {"schema": {"type": "string"}}}},
        400: {"model": ValidationErrorResponse},
        401: {"model": MessageResponse},
    },
)
async def create_course(
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    payload: Annotated[CreateCourseRequest, Depends(validated_new_course)],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> Response:
    record = await service.create_course(principal=principal, payload=payload)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": f"/courses/{record.id}"})


@router.put(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"model": ValidationErrorResponse},
        401: {"model": MessageResponse},
        403: {"model": OwnershipErrorResponse},
        404: {"model": MessageResponse},
    },
)
async def update_course(
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    payload: Annotated[UpdateCourseRequest, Depends(validated_course_update)],
    course: Annotated[CourseRecord, Depends(get_owned_course)],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> Response:
    await service.update_course(course=course, payload=payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        401: {"model": MessageResponse},
        403: {"model": OwnershipErrorResponse},
        404: {"model": MessageResponse},
    },
)
async def delete_course(
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    course: Annotated[CourseRecord, Depends(get_owned_course)],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> Response:
    await service.delete_course(course=course)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
