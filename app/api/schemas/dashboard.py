from __future__ import annotations

from pydantic import BaseModel, Field


class DashboardResponse(BaseModel):
    email: str


class ChatMessageRequest(BaseModel):
    role: str = Field(..., min_length=1)
    content: str


class PromptOptimizerRequest(BaseModel):
    messages: list[ChatMessageRequest] = Field(default_factory=list)
    preferred_mode: str | None = None


class PromptOptimizerResponse(BaseModel):
    message: str
    mode: str
