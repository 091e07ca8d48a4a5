"""Anthropic Messages API adapter."""

from __future__ import annotations

from wordwise.core.config import Provider
from wordwise.core.models import GenerationParams
from wordwise.providers.base import HTTPProvider, MalformedResponseError, ProviderInfo, dig

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(HTTPProvider):
    """POST ``{base}/v1/messages``."""

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(
            name=Provider.ANTHROPIC.value,
            display_name="Anthropic",
            key_url="https://console.anthropic.com/settings/keys",
        )

    async def generate(self, user_message: str, params: GenerationParams, model: str) -> str:
        data = await self._post_json(
            f"{self._base_url}/v1/messages",
            {
                "model": model,
                "max_tokens": params.max_tokens,
                "temperature": params.temperature,
                "messages": [{"role": "user", "content": user_message}],
            },
            headers={
                "x-api-key": self._require_key(),
                "anthropic-version": ANTHROPIC_VERSION,
            },
        )
        # {"content": [{"type": "text", "text": "..."}]}
        blocks = dig(data, "content")
        if not isinstance(blocks, list):
            raise MalformedResponseError("Anthropic response is missing content[]")
        texts = [
            b["text"] for b in blocks
            if isinstance(b, dict) and b.get("type") == "text" and isinstance(b.get("text"), str)
        ]
        if not texts:
            raise MalformedResponseError("Anthropic response has no text content block")
        return "\n".join(texts).strip()
