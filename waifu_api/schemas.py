"""
Pydantic schemas for response bodies.

These classes define the shapes of JSON data returned from the API endpoints
and feed the generated OpenAPI documentation.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    status: int
    message: str


class TokenResponse(BaseModel):
    id: str
    token: str


class PasswordResponse(BaseModel):
    password: str = Field(serialization_alias="pass")


class TagList(BaseModel):
    tags: List[str]


class TextResponse(BaseModel):
    text: str


ERROR_RESPONSES = {
    401: {"model": ErrorBody},
    403: {"model": ErrorBody},
    429: {"model": ErrorBody},
    500: {"model": ErrorBody},
}
