"""Root route."""

from fastapi import APIRouter

from course_api.schemas.error import MessageResponse

router = APIRouter(tags=["Root"])

WELCOME_MESSAGE = "Welcome to the REST API project!"


@router.get("/", response_model=MessageResponse)
async def welcome() -> MessageResponse:
    return MessageResponse(message=WELCOME_MESSAGE)
