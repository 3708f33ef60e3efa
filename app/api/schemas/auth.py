from __future__ import annotations

from pydantic import BaseModel


class CreateAccountRequest(BaseModel):
    session_id: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class OkResponse(BaseModel):
    ok: bool
