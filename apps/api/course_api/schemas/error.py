"""API error response schemas."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class ValidationErrorResponse(BaseModel):
    errors: list[str]


class OwnershipErrorResponse(BaseModel):
    error: str
