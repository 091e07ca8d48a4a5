"""Google Gemini (Generative Language REST API) adapter."""

from __future__ import annotations

from wordwise.core.config import Provider
from wordwise.core.models import GenerationParams
from wordwise.providers.base import HTTPProvider, MalformedResponseError, ProviderInfo, dig


class GeminiProvider(HTTPProvider):
    """POST ``{base}/v1/models/{model}:generateContent?key=...``.

    The key travels as a query parameter rather than a header.
    """

    @property
    def info(self) -> ProviderInfo:
        return ProviderInfo(
            name=Provider.GOOGLE_GEMINI.value,
            display_name="Google Gemini",
            key_url="https://aistudio.google.com/apikey",
        )

    async def generate(self, user_message: str, params: GenerationParams, model: str) -> str:
        data = await self._post_json(
            f"{self._base_url}/v1/models/{model}:generateContent",
            {
                "contents": [{"role": "user", "parts": [{"text": user_message}]}],
                "generationConfig": {
                    "maxOutputTokens": params.max_tokens,
                    "temperature": params.temperature,
                },
            },
            params={"key": self._require_key()},
        )
        # {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}
        parts = dig(data, "candidates", 0, "content", "parts")
        if not isinstance(parts, list):
            raise MalformedResponseError("Google Gemini response is missing candidates[0].content.parts")
        texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
        if not texts:
            raise MalformedResponseError("Google Gemini response has no text part")
        return "".join(texts).strip()
