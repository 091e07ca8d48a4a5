"""OpenAI-compatible chat completion adapters.

Covers OpenAI itself, Azure OpenAI deployments, OpenRouter and any custom
endpoint speaking the OpenAI Chat Completions API (OneAPI, FastGPT, ...).
"""

from __future__ import annotations

import logging
from typing import Any

from wordwise.core.config import Provider
from wordwise.core.models import GenerationParams
from wordwise.providers.base import (
    HTTPProvider,
    MalformedResponseError,
    ProviderInfo,
    dig,
    require_text,
)

log = logging.getLogger(__name__)

OPENROUTER_REFERER = "app://wordwise"
OPENROUTER_TITLE = "WordWise"


def chat_payload(user_message: str, params: GenerationParams, model: str) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [{"role": "user", "content": user_message}],
        "max_tokens": params.max_tokens,
        "temperature": params.temperature,
        "presence_penalty": params.presence_penalty,
        "frequency_penalty": params.frequency_penalty,
    }


def extract_chat_text(data: Any, provider: str) -> str:
    # {"choices": [{"message": {"role": "assistant", "content": "..."}}]}
    return require_text(
        dig(data, "choices", 0, "message", "content"),
        provider,
        "choices[0].message.content",
    ).strip()


class OpenAIProvider(HTTPProvider):
    """OpenAI Chat Completions at ``{base}/v1/chat/completions``."""

    _path = "/v1/chat/completions"

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(
            name=Provider.OPENAI.value,
            display_name="OpenAI",
            key_url="https://platform.openai.com/api-keys",
        )

    def _url(self, model: str) -> str:
        return f"{self._base_url}{self._path}"

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._require_key()}"}

    async def generate(self, user_message: str, params: GenerationParams, model: str) -> str:
        headers = self._headers()
        data = await self._post_json(self._url(model), chat_payload(user_message, params, model), headers=headers)
        return extract_chat_text(data, self.info.display_name)


class CustomProvider(OpenAIProvider):
    """Any OpenAI-compatible endpoint. The API key is optional."""

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(
            name=Provider.CUSTOM.value,
            display_name="Custom (OpenAI Compatible)",
            requires_api_key=False,
        )

    def _headers(self) -> dict[str, str]:
        key = self._require_key()
        return {"Authorization": f"Bearer {key}"} if key else {}


class AzureOpenAIProvider(OpenAIProvider):
    """Azure OpenAI, where the model name is the deployment name."""

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(
            name=Provider.AZURE_OPENAI.value,
            display_name="Azure OpenAI",
            key_url="https://portal.azure.com/",
        )

    def _url(self, model: str) -> str:
        return (
            f"{self._base_url}/openai/deployments/{model}/chat/completions"
            f"?api-version={self._config.api_version or ''}"
        )

    def _headers(self) -> dict[str, str]:
        return {"api-key": self._require_key()}


class OpenRouterProvider(OpenAIProvider):
    """OpenRouter, OpenAI-shaped under ``/api/v1`` with app attribution headers."""

    _path = "/api/v1/chat/completions"

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(
            name=Provider.OPENROUTER.value,
            display_name="OpenRouter",
            key_url="https://openrouter.ai/keys",
        )

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        headers["HTTP-Referer"] = OPENROUTER_REFERER
        headers["X-Title"] = OPENROUTER_TITLE
        return headers

    async def list_models(self) -> list[dict[str, str]]:
        """Fetch the model catalogue as ``[{"id": ..., "name": ...}]``."""
        data = await self._request_json("GET", f"{self._base_url}/api/v1/models")
        entries = dig(data, "data")
        if not isinstance(entries, list):
            raise MalformedResponseError("OpenRouter model list is missing data[]")
        models = []
        for entry in entries:
            model_id = dig(entry, "id")
            if isinstance(model_id, str):
                models.append({"id": model_id, "name": str(dig(entry, "name") or model_id)})
        log.debug("Fetched %d OpenRouter models", len(models))
        return models
