"""AI service interface definitions.

This module defines the contract for LLM calls, allowing different
providers (Anthropic API, a local server, test fakes) to be swapped
transparently.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class ChatMessage:
    """A message in a chat conversation."""

    role: str  # user, assistant
    content: str


@dataclass
class ChatOptions:
    """Options for chat completion."""

    model: str | None = None  # Specific model to use
    temperature: float = 0.0
    max_tokens: int = 1024
    system_prompt: str | None = None


@dataclass
class ChatResponse:
    """Response from a chat completion."""

    content: str
    model: str
    usage: dict[str, int] | None = None  # tokens used
    finish_reason: str | None = None


class IAIService(ABC):
    """Interface for LLM operations."""

    @abstractmethod
    async def chat(
        self,
        messages: list[ChatMessage],
        options: ChatOptions | None = None,
    ) -> ChatResponse:
        """Send a single-turn or multi-turn chat request.

        Args:
            messages: Conversation history
            options: Chat options, including the system prompt

        Returns:
            ChatResponse with generated content

        Raises:
            AIServiceNotConfiguredError: No credential is set.
            AIServiceError: The provider call failed.
        """
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the service has what it needs to make calls."""
        ...

    @abstractmethod
    def get_service_info(self) -> dict[str, str | bool]:
        """Get information about the AI service (provider, model, status)."""
        ...
