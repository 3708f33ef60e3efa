from __future__ import annotations

from typing import Protocol

from app.application.dto.prompt import ChatMessage


class PromptOptimizerPort(Protocol):
    def complete(self, *, system_prompt: str, messages: list[ChatMessage]) -> str:
        ...
