"""Payloads of the admin authentication endpoints."""

from pydantic import BaseModel, Field


class AdminLogin(BaseModel):
    email: str = Field(..., examples=["example@email.com"])
    password: str = Field(..., examples=["password"])


class TokenResponse(BaseModel):
    token: str


class StatusMessage(BaseModel):
    status: bool
    message: str
