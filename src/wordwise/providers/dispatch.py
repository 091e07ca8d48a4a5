"""Request dispatch: one user message in, one generated text out."""

from __future__ import annotations

import logging

import httpx

from wordwise.core.config import Provider
from wordwise.core.models import GenerationParams, PluginSettings, ProviderConfig
from wordwise.core.settings import effective_model, get_active_config
from wordwise.providers.base import DEFAULT_TIMEOUT
from wordwise.providers.openai import OpenRouterProvider
from wordwise.providers.registry import get_text_provider

log = logging.getLogger(__name__)


async def call_text_api(
    provider: Provider,
    config: ProviderConfig,
    params: GenerationParams,
    user_message: str,
    *,
    model: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Send one request to the given provider and return the generated text.

    Args:
        provider: Which backend to call.
        config: That backend's connection settings.
        params: Generation parameters (max tokens, temperature, penalties).
        user_message: The rendered prompt.
        model: Override for config.model.
        transport: httpx transport, for tests or custom networking.
        timeout: Seconds before the request fails with NetworkError.

    Raises:
        GenerationError: Any provider failure; never retried.
    """
    adapter = get_text_provider(provider, config, transport=transport, timeout=timeout)
    use_model = model or config.model
    log.debug("Calling %s (model=%s, %d chars)", provider.value, use_model, len(user_message))
    return await adapter.generate(user_message, params, use_model)


async def generate(
    settings: PluginSettings,
    user_message: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """call_text_api for the active provider in settings."""
    return await call_text_api(
        settings.ai_provider,
        get_active_config(settings),
        settings.generation_params,
        user_message,
        model=effective_model(settings),
        transport=transport,
        timeout=timeout,
    )


async def fetch_openrouter_models(
    config: ProviderConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[dict[str, str]]:
    """Fetch OpenRouter's model catalogue for the settings model picker."""
    adapter = OpenRouterProvider(config, transport=transport, timeout=timeout)
    return await adapter.list_models()
