"""Static provider tables and default settings for WordWise."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

SCHEMA_DATE = "2024-02-22T00:00:00.000Z"


class Provider(str, Enum):
    """Supported LLM backends. Values are the persisted identifiers."""

    OPENAI = "OpenAI"
    AZURE_OPENAI = "Azure OpenAI"
    GOOGLE_GEMINI = "Google Gemini"
    ANTHROPIC = "Anthropic"
    COHERE = "Cohere"
    OPENROUTER = "OpenRouter"
    CUSTOM = "Custom (OpenAI Compatible)"  # OneAPI, FastGPT, etc.


# https://platform.openai.com/docs/models/overview
OPENAI_MODELS = [
    "gpt-3.5-turbo",
    "gpt-3.5-turbo-1106",
    "gpt-3.5-turbo-0125",
    "gpt-3.5-turbo-16k",
    "gpt-4",
    "gpt-4-0613",
    "gpt-4-32k",
    "gpt-4-32k-0613",
    "gpt-4-turbo-preview",
    "gpt-4-vision-preview",
    "gpt-4-1106-preview",
    "gpt-4-0125-preview",
]

AZURE_OPENAI_MODELS = [
    "gpt-4",
    "gpt-4-32k",
    "gpt-4-vision",
    "gpt-35-turbo",
    "gpt-35-turbo-16k",
]

# https://docs.anthropic.com/claude/reference/selecting-a-model
ANTHROPIC_MODELS = [
    "claude-2.0",
    "claude-2.1",
    "claude-instant-1.1",
    "claude-instant-1.2",
]

# https://docs.cohere.com/reference/generate
COHERE_MODELS = [
    "command",
    "command-nightly",
    "command-light",
    "command-light-nightly",
]

# https://ai.google.dev/models/gemini
GOOGLE_AI_MODELS = ["gemini-pro", "gemini-pro-vision"]

# Seed list only. The full catalogue is fetched from the API and cached
# in settings.
OPENROUTER_MODELS: list[dict[str, str]] = [
    {"id": "openai/gpt-3.5-turbo", "name": "OpenAI: GPT-3.5 Turbo"},
    {"id": "openai/gpt-4", "name": "OpenAI: GPT-4"},
    {"id": "google/gemini-pro", "name": "Google: Gemini Pro (preview)"},
    {"id": "anthropic/claude-2", "name": "Anthropic: Claude v2"},
    {"id": "anthropic/claude-instant-1", "name": "Anthropic: Claude Instant v1"},
]


@dataclass
class ProviderDefaults:
    """Static defaults and display metadata for a provider."""

    default_host: str
    default_model: str
    docs: str = ""
    models: list[str] = field(default_factory=list)
    api_version: str | None = None


PROVIDER_DEFAULTS: dict[Provider, ProviderDefaults] = {
    Provider.OPENAI: ProviderDefaults(
        default_host="https://api.openai.com",
        default_model="gpt-3.5-turbo",
        docs="https://platform.openai.com/docs/introduction",
        models=OPENAI_MODELS,
    ),
    Provider.AZURE_OPENAI: ProviderDefaults(
        default_host="",
        default_model="gpt-35-turbo",
        docs="https://learn.microsoft.com/en-us/azure/ai-services/openai/reference",
        models=AZURE_OPENAI_MODELS,
        api_version="2023-05-15",
    ),
    Provider.GOOGLE_GEMINI: ProviderDefaults(
        default_host="https://generativelanguage.googleapis.com",
        default_model="gemini-pro",
        docs="https://ai.google.dev/models/gemini",
        models=GOOGLE_AI_MODELS,
    ),
    Provider.ANTHROPIC: ProviderDefaults(
        default_host="https://api.anthropic.com",
        default_model="claude-2.1",
        docs="https://docs.anthropic.com/claude/reference/getting-started-with-the-api",
        models=ANTHROPIC_MODELS,
    ),
    Provider.COHERE: ProviderDefaults(
        default_host="https://api.cohere.ai",
        default_model="command",
        docs="https://docs.cohere.com/reference/versioning",
        models=COHERE_MODELS,
    ),
    Provider.OPENROUTER: ProviderDefaults(
        default_host="https://openrouter.ai",
        default_model="openai/gpt-3.5-turbo",
        docs="https://openrouter.ai/docs",
        models=[m["id"] for m in OPENROUTER_MODELS],
    ),
    Provider.CUSTOM: ProviderDefaults(default_host="", default_model=""),
}


def _default_provider_config(provider: Provider) -> dict:
    defaults = PROVIDER_DEFAULTS[provider]
    cfg = {
        "apiKey": "",
        "baseUrl": defaults.default_host,
        "model": defaults.default_model,
    }
    if defaults.api_version is not None:
        cfg["apiVersion"] = defaults.api_version
    return cfg


# Persisted layout, camelCase keys.
DEFAULTS: dict = {
    "dataSchemeDate": SCHEMA_DATE,
    "aiProvider": Provider.OPENAI.value,
    "aiProviderConfig": {p.value: _default_provider_config(p) for p in Provider},
    "advancedSettings": False,
    "customAiModel": "",
    "maxTokens": 2000,
    "temperature": 0.5,
    "presencePenalty": 0,
    "frequencyPenalty": 0,
    "enableGenerationLogging": False,
    "debugMode": False,
    "customPrompts": [],
    "openRouterModels": [],
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
