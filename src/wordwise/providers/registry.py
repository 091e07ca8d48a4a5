"""Provider lookup: maps each Provider to its adapter class."""

from __future__ import annotations

import httpx

from wordwise.core.config import Provider
from wordwise.core.models import ProviderConfig
from wordwise.providers.anthropic import AnthropicProvider
from wordwise.providers.base import DEFAULT_TIMEOUT, HTTPProvider, TextProvider
from wordwise.providers.cohere import CohereProvider
from wordwise.providers.gemini import GeminiProvider
from wordwise.providers.openai import (
    AzureOpenAIProvider,
    CustomProvider,
    OpenAIProvider,
    OpenRouterProvider,
)

_PROVIDERS: dict[Provider, type[HTTPProvider]] = {
    Provider.OPENAI: OpenAIProvider,
    Provider.AZURE_OPENAI: AzureOpenAIProvider,
    Provider.GOOGLE_GEMINI: GeminiProvider,
    Provider.ANTHROPIC: AnthropicProvider,
    Provider.COHERE: CohereProvider,
    Provider.OPENROUTER: OpenRouterProvider,
    Provider.CUSTOM: CustomProvider,
}


def get_text_provider(
    provider: Provider | str,
    config: ProviderConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> TextProvider:
    """Instantiate the adapter for a provider.

    Raises:
        ValueError: Unknown provider name.
    """
    try:
        key = Provider(provider)
    except ValueError:
        available = ", ".join(p.value for p in Provider)
        raise ValueError(f"Unknown provider '{provider}'. Available: {available}") from None
    return _PROVIDERS[key](config, transport=transport, timeout=timeout)


def list_providers() -> list[Provider]:
    """Return all supported providers in settings order."""
    return list(_PROVIDERS)
