from __future__ import annotations

import re
from typing import Literal


PromptMode = Literal["BASIC", "DETAIL"]

LONG_REQUEST_CHARS = 320

COMPLEX_INDICATORS = (
    "campaign",
    "strategy",
    "workflow",
    "analysis",
    "report",
    "framework",
    "integration",
    "presentation",
    "curriculum",
    "multi-step",
    "step-by-step",
    "brief",
    "plan",
)

_MODE_LINE = re.compile(r"Mode:\s*(\w+)", re.IGNORECASE)


def detect_prompt_mode(message: str | None) -> PromptMode:
    text = message or ""
    lower = text.lower()
    if len(text) > LONG_REQUEST_CHARS:
        return "DETAIL"
    if any(word in lower for word in COMPLEX_INDICATORS):
        return "DETAIL"
    return "BASIC"


def resolve_response_mode(content: str, fallback: str) -> str:
    match = _MODE_LINE.search(content)
    if match is None:
        return fallback
    return match.group(1).upper()
