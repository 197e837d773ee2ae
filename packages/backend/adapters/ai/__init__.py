"""AI service implementations."""

from .anthropic import AnthropicAIService

__all__ = ["AnthropicAIService"]
