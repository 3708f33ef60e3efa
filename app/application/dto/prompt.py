from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str


@dataclass(frozen=True)
class OptimizePromptInput:
    messages: list[ChatMessage]
    preferred_mode: str | None


@dataclass(frozen=True)
class OptimizePromptOutput:
    message: str
    mode: str
