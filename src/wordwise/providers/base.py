"""Text provider protocol, shared HTTP plumbing and error types.

Each adapter turns one user message into one provider-specific HTTP
request and pulls the generated text out of the response. Adapters never
retry; every failure is raised to the caller.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import httpx

from wordwise.core.errors import WordWiseError
from wordwise.core.models import GenerationParams, ProviderConfig

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120.0
KEYRING_SERVICE = "wordwise"
KEYRING_SENTINEL = "keyring"


class GenerationError(WordWiseError):
    """Base error for a failed provider call."""


class ProviderHTTPError(GenerationError):
    """The provider answered with a non-2xx status."""

    def __init__(self, provider: str, status: int, body: str) -> None:
        super().__init__(f"{provider} API error ({status}): {body}")
        self.provider = provider
        self.status = status
        self.body = body


class NetworkError(GenerationError):
    """The request failed before a usable response arrived (connect, timeout, decoding)."""


class MalformedResponseError(GenerationError):
    """The response did not contain the expected text field."""


class MissingAPIKeyError(GenerationError):
    """No API key is configured for the active provider."""


@dataclass
class ProviderInfo:
    """Display metadata about a provider adapter."""

    name: str
    display_name: str
    requires_api_key: bool = True
    key_url: str = ""


@runtime_checkable
class TextProvider(Protocol):
    """Contract for provider adapters."""

    @property
    def info(self) -> ProviderInfo:
        ...

    async def generate(self, user_message: str, params: GenerationParams, model: str) -> str:
        """Send one user message and return the generated text.

        Raises:
            MissingAPIKeyError: No key configured.
            ProviderHTTPError: Non-2xx response.
            NetworkError: Transport failure or timeout.
            MalformedResponseError: Unexpected response shape.
        """
        ...


def _get_api_key(username: str) -> str | None:
    """Retrieve an API key from the system keyring."""
    try:
        import keyring

        return keyring.get_password(KEYRING_SERVICE, username)
    except Exception:
        log.debug("Keyring lookup failed for %s", username, exc_info=True)
        return None


def resolve_api_key(provider_name: str, api_key: str) -> str:
    """Return the usable key. The literal "keyring" means look it up."""
    if api_key == KEYRING_SENTINEL:
        return _get_api_key(provider_name) or ""
    return api_key


class HTTPProvider(ABC):
    """Shared plumbing for JSON-over-HTTP adapters."""

    def __init__(
        self,
        config: ProviderConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout
        self._api_key = resolve_api_key(self.info.name, config.api_key)

    @property
    @abstractmethod
    def info(self) -> ProviderInfo:
        ...

    @property
    def base_url(self) -> str:
        return self._base_url

    def _require_key(self) -> str:
        """Return the API key; empty is allowed only for keyless providers."""
        if not self._api_key and self.info.requires_api_key:
            info = self.info
            hint = f" Get one at: {info.key_url}" if info.key_url else ""
            raise MissingAPIKeyError(f"No API key configured for {info.display_name}.{hint}")
        return self._api_key

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        display = self.info.display_name
        log.debug("%s %s %s", display, method, url)
        try:
            async with self._client() as client:
                resp = await client.request(method, url, headers=headers, json=payload, params=params)
        except httpx.RequestError as e:
            raise NetworkError(f"{display} API unreachable: {e}") from e

        if not resp.is_success:
            raise ProviderHTTPError(display, resp.status_code, resp.text)

        try:
            return resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponseError(f"{display} returned a non-JSON response") from e

    async def _post_json(self, url: str, payload: dict[str, Any], **kwargs: Any) -> Any:
        return await self._request_json("POST", url, payload=payload, **kwargs)


def dig(data: Any, *path: str | int) -> Any:
    """Follow keys/indexes into nested JSON; None when any step is missing."""
    for step in path:
        if isinstance(step, int):
            if not isinstance(data, list) or not -len(data) <= step < len(data):
                return None
        elif not isinstance(data, dict):
            return None
        data = data[step] if isinstance(step, int) else data.get(step)
    return data


def require_text(value: Any, provider: str, field_path: str) -> str:
    """Ensure an extracted field is a string, else MalformedResponseError."""
    if not isinstance(value, str):
        raise MalformedResponseError(f"{provider} response is missing {field_path}")
    return value
