"""Dependency wiring for routes.

Each protected route composes the request pipeline from these dependencies:
credentials are extracted, the principal authenticated, the payload checked
for required fields and finally ownership of the target course enforced.
FastAPI resolves them in declaration order and any stage can end the request
by raising an ``ApiError``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated, Any, TypeVar

from fastapi import Depends, Path, Request, Security
from fastapi.security import APIKeyHeader
from pydantic import BaseModel, ValidationError

from course_api.adapters.auth import BcryptPasswordHasher, PasswordHasher
from course_api.core.config import Settings, get_settings
from course_api.domain.credentials import parse_basic_authorization
from course_api.domain.validation import COURSE_RULES, USER_SIGNUP_RULES, FieldRule, collect_violations
from course_api.errors import ValidationFailed
from course_api.repositories.base import CourseRecord, Store
from course_api.schemas.auth import AuthPrincipal, Credentials
from course_api.schemas.course import CreateCourseRequest, UpdateCourseRequest
from course_api.schemas.user import CreateUserRequest
from course_api.services.authenticator import Authenticator
from course_api.services.courses import CourseService
from course_api.services.users import UserService

PayloadT = TypeVar("PayloadT", bound=BaseModel)

INVALID_JSON_MESSAGE = "Request body is not valid JSON"
NOT_AN_OBJECT_MESSAGE = "Request body must be a JSON object"

authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    scheme_name="basicAuth",
    description="HTTP Basic credentials: `Basic base64(emailAddress:password)`.",
)


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_password_hasher(settings: Annotated[Settings, Depends(get_settings)]) -> PasswordHasher:
    return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)


def get_authenticator(
    store: Annotated[Store, Depends(get_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> Authenticator:
    return Authenticator(store, hasher)


def get_user_service(
    store: Annotated[Store, Depends(get_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> UserService:
    return UserService(store, hasher)


def get_course_service(store: Annotated[Store, Depends(get_store)]) -> CourseService:
    return CourseService(store)


def get_credentials(
    authorization: Annotated[str | None, Security(authorization_header)],
) -> Credentials | None:
    return parse_basic_authorization(authorization)


async def get_authenticated_principal(
    authorization: Annotated[str | None, Security(authorization_header)],
    credentials: Annotated[Credentials | None, Depends(get_credentials)],
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> AuthPrincipal:
    """Authenticate the request and hand the principal to downstream stages."""
    return await authenticator.authenticate(credentials, header_present=bool(authorization))


def _field_label(model: type[BaseModel], loc: tuple[Any, ...]) -> str:
    if not loc:
        return "body"
    name = str(loc[0])
    field = model.model_fields.get(name)
    if field is not None and field.alias:
        return field.alias
    return name


async def _read_json_object(request: Request) -> dict[str, Any]:
    """Decode the request body here so it runs after authentication."""
    if not await request.body():
        return {}
    try:
        body = await request.json()
    except ValueError as exc:
        raise ValidationFailed([INVALID_JSON_MESSAGE]) from exc
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationFailed([NOT_AN_OBJECT_MESSAGE])
    return body


def validated_payload(
    model: type[PayloadT],
    rules: tuple[FieldRule, ...],
) -> Callable[..., Awaitable[PayloadT]]:
    """Build a dependency that presence-checks a JSON body then parses it into ``model``."""

    async def dependency(request: Request) -> PayloadT:
        body = await _read_json_object(request)
        violations = collect_violations(body, rules)
        if violations:
            raise ValidationFailed(violations)
        try:
            return model.model_validate(body)
        except ValidationError as exc:
            labels = dict.fromkeys(_field_label(model, error["loc"]) for error in exc.errors())
            raise ValidationFailed([f'Invalid value for "{label}"' for label in labels]) from exc

    dependency.__name__ = f"validated_{model.__name__}"
    return dependency


validated_signup = validated_payload(CreateUserRequest, USER_SIGNUP_RULES)
validated_new_course = validated_payload(CreateCourseRequest, COURSE_RULES)
validated_course_update = validated_payload(UpdateCourseRequest, COURSE_RULES)


async def get_owned_course(
    course_id: Annotated[int, Path(alias="id")],
    principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[CourseService, Depends(get_course_service)],
) -> CourseRecord:
    """Ownership stage: the course must exist and belong to the principal."""
    return await service.get_owned_course_record(principal=principal, course_id=course_id)
