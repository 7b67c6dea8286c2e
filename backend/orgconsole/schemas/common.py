"""Shared response envelope for the REST surface."""

from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: Any = None
