"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from course_api import __version__
from course_api.adapters.auth import BcryptPasswordHasher
from course_api.core.config import Settings, get_settings
from course_api.errors import COURSE_NOT_FOUND_MESSAGE, INTERNAL_ERROR_MESSAGE, ApiError
from course_api.repositories.base import Store
from course_api.repositories.memory import InMemoryStore
from course_api.repositories.seed import load_seed_file
from course_api.routes import courses_router, root_router, users_router
from course_api.schemas.course import CreateCourseRequest, UpdateCourseRequest
from course_api.schemas.error import MessageResponse, ValidationErrorResponse
from course_api.schemas.user import CreateUserRequest

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND_MESSAGE = "Route Not Found"
INVALID_REQUEST_MESSAGE = "Invalid request"

_REQUEST_BODY_MODELS: dict[tuple[str, str], type[BaseModel]] = {
    ("/users", "post"): CreateUserRequest,
    ("/courses", "post"): CreateCourseRequest,
    ("/courses/{id}", "put"): UpdateCourseRequest,
}

_OPENAPI_RESPONSE_CODES: dict[str, dict[str, set[str]]] = {
    "/": {"get": {"200"}},
    "/users": {"get": {"200", "401"}, "post": {"201", "400"}},
    "/courses": {"get": {"200", "401"}, "post": {"201", "400", "401"}},
    "/courses/{id}": {
        "get": {"200", "401", "404"},
        "put": {"204", "400", "401", "403", "404"},
        "delete": {"204", "401", "403", "404"},
    },
}


def _apply_contract_response_codes(schema: dict) -> None:
    """Limit documented response codes to the API contract."""
    for path, methods in _OPENAPI_RESPONSE_CODES.items():
        path_item = schema.get("paths", {}).get(path)
        if not path_item:
            continue

        for method, allowed_codes in methods.items():
            operation = path_item.get(method)
            if not operation:
                continue

            responses = operation.setdefault("responses", {})
            for status_code in list(responses.keys()):
                if status_code not in allowed_codes:
                    responses.pop(status_code, None)

            for status_code in sorted(allowed_codes):
                responses.setdefault(status_code, {"description": "See API contract"})


def _apply_request_body_schemas(schema: dict) -> None:
    """Document JSON bodies that the pipeline decodes itself after authentication."""
    components = schema.setdefault("components", {}).setdefault("schemas", {})
    for (path, method), model in _REQUEST_BODY_MODELS.items():
        operation = schema.get("paths", {}).get(path, {}).get(method)
        if not operation:
            continue
        components[model.__name__] = model.model_json_schema(by_alias=True)
        operation["requestBody"] = {
            "required": True,
            "content": {"application/json": {"schema": {"$ref": f"#/components/schemas/{model.__name__}"}}},
        }


def create_app(store: Store | None = None, settings: Settings | None = None) -> FastAPI:
    explicit_settings = settings is not None
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.seed_path is not None:
            await load_seed_file(
                app.state.store,
                settings.seed_path,
                BcryptPasswordHasher(rounds=settings.bcrypt_rounds),
            )
        yield

    app = FastAPI(title="Course API", version=__version__, lifespan=lifespan)
    app.state.store = store if store is not None else InMemoryStore()
    if explicit_settings:
        app.dependency_overrides[get_settings] = lambda: settings

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.payload.model_dump(mode="json"))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = list(exc.errors())
        # A malformed course id can never name an existing course.
        if any(error.get("loc", ())[:1] == ("path",) for error in errors):
            payload = MessageResponse(message=COURSE_NOT_FOUND_MESSAGE)
            return JSONResponse(status_code=404, content=payload.model_dump())

        logger.info(
            "request.invalid method=%s path=%s error_types=%s",
            request.method,
            request.url.path,
            ",".join(sorted({str(error.get("type")) for error in errors})),
        )
        payload = ValidationErrorResponse(errors=[INVALID_REQUEST_MESSAGE])
        return JSONResponse(status_code=400, content=payload.model_dump())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_, exc: StarletteHTTPException) -> JSONResponse:
        message = ROUTE_NOT_FOUND_MESSAGE if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=MessageResponse(message=message).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request.failed method=%s path=%s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=MessageResponse(message=INTERNAL_ERROR_MESSAGE).model_dump())

    app.include_router(root_router)
    app.include_router(users_router)
    app.include_router(courses_router)

    def custom_openapi() -> dict:
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        _apply_contract_response_codes(schema)
        _apply_request_body_schemas(schema)
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app


app = create_app()
