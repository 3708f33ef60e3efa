from __future__ import annotations

import logging

import httpx

from app.application.dto.prompt import ChatMessage
from app.application.ports.prompt_optimizer_port import PromptOptimizerPort
from app.domain.exceptions import UpstreamServiceError


logger = logging.getLogger(__name__)

TEMPERATURE = 0.3


class MistralClient(PromptOptimizerPort):
    def __init__(
        self,
        *,
        api_key: str,
        api_base: str,
        model: str,
        timeout_seconds: float,
        transport: httpx.BaseTransport | None = None,
    ):
        self._api_key = api_key
        self._api_base = api_base.rstrip("/")
        self._model = model
        self._timeout = timeout_seconds
        self._transport = transport

    def complete(self, *, system_prompt: str, messages: list[ChatMessage]) -> str:
        body = {
            "model": self._model,
            "temperature": TEMPERATURE,
            "messages": [{"role": "system", "content": system_prompt}]
            + [{"role": message.role, "content": message.content} for message in messages],
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(f"{self._api_base}/chat/completions", json=body, headers=headers)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "mistral_client: request failed status=%s body=%s",
                exc.response.status_code,
                exc.response.text[:500],
            )
            raise UpstreamServiceError("Prompt optimizer request failed.") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("mistral_client: request error err=%s", exc)
            raise UpstreamServiceError("Prompt optimizer request failed.") from exc

        if not isinstance(payload, dict):
            logger.warning("mistral_client: unexpected response type=%s", type(payload).__name__)
            raise UpstreamServiceError("Prompt optimizer request failed.")

        choices = payload.get("choices") or []
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0] if isinstance(choices[0], dict) else {}
        message = first.get("message")
        if not isinstance(message, dict):
            return ""
        return str(message.get("content") or "")
