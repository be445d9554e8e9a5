"""Admin login schemas."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    password: str


class SuccessResponse(BaseModel):
    success: bool = True
