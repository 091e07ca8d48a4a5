"""Cohere Generate API adapter."""

from __future__ import annotations

from wordwise.core.config import Provider
from wordwise.core.models import GenerationParams
from wordwise.providers.base import HTTPProvider, ProviderInfo, dig, require_text


class CohereProvider(HTTPProvider):
    """POST ``{base}/v1/generate``."""

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(
            name=Provider.COHERE.value,
            display_name="Cohere",
            key_url="https://dashboard.cohere.com/api-keys",
        )

    async def generate(self, user_message: str, params: GenerationParams, model: str) -> str:
        data = await self._post_json(
            f"{self._base_url}/v1/generate",
            {
                "model": model,
                "prompt": user_message,
                "max_tokens": params.max_tokens,
                "temperature": params.temperature,
                "presence_penalty": params.presence_penalty,
                "frequency_penalty": params.frequency_penalty,
            },
            headers={"Authorization": f"Bearer {self._require_key()}"},
        )
        # {"generations": [{"id": "...", "text": "..."}]}
        return require_text(dig(data, "generations", 0, "text"), "Cohere", "generations[0].text").strip()
