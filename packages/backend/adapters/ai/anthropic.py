"""Anthropic Messages API adapter.

Implements IAIService over HTTP with httpx. The credential is checked on
each call so a missing key surfaces as AIServiceNotConfiguredError rather
than a failed request.
"""

import logging
from typing import Any

import httpx

from core.exceptions import AIServiceError, AIServiceNotConfiguredError
from core.interfaces import ChatMessage, ChatOptions, ChatResponse, IAIService

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicAIService(IAIService):
    """LLM service backed by the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str | None,
        model: str,
        base_url: str = "https://api.anthropic.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the Anthropic service.

        Args:
            api_key: API key; None leaves the service unavailable
            model: Default model id for requests
            base_url: API root
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def is_available(self) -> bool:
        return bool(self._api_key)

    def get_service_info(self) -> dict[str, str | bool]:
        return {
            "provider": "anthropic",
            "model": self._model,
            "available": self.is_available(),
        }

    def _build_payload(self, messages: list[ChatMessage], options: ChatOptions) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": options.model or self._model,
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if options.system_prompt:
            payload["system"] = options.system_prompt
        return payload

    async def chat(
        self,
        messages: list[ChatMessage],
        options: ChatOptions | None = None,
    ) -> ChatResponse:
        if not self._api_key:
            raise AIServiceNotConfiguredError("ANTHROPIC_API_KEY is not set")

        options = options or ChatOptions()
        headers = {
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post("/v1/messages", json=self._build_payload(messages, options))
        except httpx.HTTPError as e:
            raise AIServiceError(f"Anthropic request failed: {e}") from e

        if response.status_code != 200:
            raise AIServiceError(
                f"Anthropic API returned {response.status_code}: {response.text[:200]}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise AIServiceError("Anthropic API returned invalid JSON") from e

        text = "".join(
            block.get("text", "")
            for block in data.get("content") or []
            if block.get("type") == "text"
        )
        usage = data.get("usage") or {}

        logger.debug(
            "Anthropic chat completed (model=%s, input=%s, output=%s tokens)",
            data.get("model"),
            usage.get("input_tokens"),
            usage.get("output_tokens"),
        )

        return ChatResponse(
            content=text,
            model=data.get("model", options.model or self._model),
            usage={k: v for k, v in usage.items() if isinstance(v, int)} or None,
            finish_reason=data.get("stop_reason"),
        )
