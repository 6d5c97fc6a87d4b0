"""User routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from course_api.routes.dependencies import get_authenticated_principal, get_user_service, validated_signup
from course_api.schemas.auth import AuthPrincipal
from course_api.schemas.error import MessageResponse, ValidationErrorResponse
from course_api.schemas.user import CreateUserRequest, User
from course_api.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=User,
    responses={401: {"model": MessageResponse}},
)
async def get_current_user(
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
) -> User:
    return UserService.current_user(principal)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={
        201: {"description": "User created", "headers": {"Location": {"schema": {"type": "string"}}}},
        400: {"model": ValidationErrorResponse},
    },
)
async def create_user(
    payload: Annotated[CreateUserRequest, Depends(validated_signup)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    await service.create_user(payload)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": "/"})
