"""LLM provider implementations for examcraft."""

from examcraft.infra.llm.anthropic_provider import AnthropicProvider
from examcraft.infra.llm.openai_provider import OpenAIProvider

__all__ = ["OpenAIProvider", "AnthropicProvider"]

PROVIDERS: dict[str, type] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}
