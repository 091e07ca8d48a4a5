"""Settings persistence and the provider config store.

Settings are persisted as one JSON object using the camelCase layout in
``wordwise.core.config.DEFAULTS``. Saved data is lightly obfuscated
(base64 under ``"z"``) so API keys are not shown in plain text to someone
casually opening the file. Plain JSON is still accepted on load.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import math
from pathlib import Path

from wordwise.core.config import (
    DEFAULTS,
    OPENROUTER_MODELS,
    PROVIDER_DEFAULTS,
    Provider,
    _deep_merge,
)
from wordwise.core.models import CommandAction, CustomPrompt, PluginSettings, ProviderConfig
from wordwise.host import SettingsStorage

log = logging.getLogger(__name__)

OBFUSCATION_NOTICE = (
    "This file is encoded to keep API keys out of casual view. "
    "Edit settings from inside the application."
)

PENALTY_MIN = -2.0
PENALTY_MAX = 2.0

_KNOWN_KEYS = set(DEFAULTS)


# --- (De)serialization ---


def _provider_config_from_dict(raw: dict) -> ProviderConfig:
    return ProviderConfig(
        api_key=str(raw.get("apiKey") or ""),
        base_url=str(raw.get("baseUrl") or ""),
        model=str(raw.get("model") or ""),
        api_version=raw.get("apiVersion"),
    )


def _provider_config_to_dict(cfg: ProviderConfig) -> dict:
    data = {"apiKey": cfg.api_key, "baseUrl": cfg.base_url, "model": cfg.model}
    if cfg.api_version is not None:
        data["apiVersion"] = cfg.api_version
    return data


def _custom_prompt_from_dict(raw: dict) -> CustomPrompt | None:
    name = raw.get("name")
    data = raw.get("data")
    if not isinstance(name, str) or not isinstance(data, str):
        log.warning("Skipping malformed custom prompt entry: %r", raw)
        return None
    try:
        action = CommandAction(int(raw.get("action", CommandAction.DIRECT_REPLACEMENT)))
    except (TypeError, ValueError):
        action = CommandAction.DIRECT_REPLACEMENT
    return CustomPrompt(name=name, data=data, action=action)


def settings_from_dict(raw: dict | None) -> PluginSettings:
    """Build settings from a persisted blob merged over the defaults.

    Missing provider entries are filled from defaults; unknown top-level
    keys land in ``extra`` and are written back unchanged.
    """
    merged = _deep_merge(DEFAULTS, raw or {})

    try:
        provider = Provider(merged["aiProvider"])
    except ValueError:
        log.warning("Unknown provider %r in settings, using %s", merged["aiProvider"], Provider.OPENAI.value)
        provider = Provider.OPENAI

    raw_configs = merged.get("aiProviderConfig")
    if not isinstance(raw_configs, dict):
        log.warning("Ignoring malformed provider configs: %r", raw_configs)
        raw_configs = DEFAULTS["aiProviderConfig"]
    configs = {}
    for p in Provider:
        entry = raw_configs.get(p.value)
        if not isinstance(entry, dict):
            if entry is not None:
                log.warning("Ignoring malformed %s config: %r", p.value, entry)
            entry = DEFAULTS["aiProviderConfig"][p.value]
        configs[p] = _provider_config_from_dict(entry)

    prompts = []
    for entry in merged.get("customPrompts") or []:
        prompt = _custom_prompt_from_dict(entry) if isinstance(entry, dict) else None
        if prompt is not None:
            prompts.append(prompt)

    return PluginSettings(
        data_scheme_date=str(merged["dataSchemeDate"]),
        ai_provider=provider,
        ai_provider_config=configs,
        advanced_settings=bool(merged["advancedSettings"]),
        custom_ai_model=str(merged["customAiModel"] or ""),
        max_tokens=int(merged["maxTokens"]),
        temperature=float(merged["temperature"]),
        presence_penalty=float(merged["presencePenalty"]),
        frequency_penalty=float(merged["frequencyPenalty"]),
        enable_generation_logging=bool(merged["enableGenerationLogging"]),
        debug_mode=bool(merged["debugMode"]),
        custom_prompts=prompts,
        openrouter_models=[dict(m) for m in merged.get("openRouterModels") or []],
        extra={k: v for k, v in merged.items() if k not in _KNOWN_KEYS},
    )


def settings_to_dict(settings: PluginSettings) -> dict:
    """Serialize settings to the persisted camelCase layout."""
    data = dict(settings.extra)
    data.update({
        "dataSchemeDate": settings.data_scheme_date,
        "aiProvider": settings.ai_provider.value,
        "aiProviderConfig": {
            p.value: _provider_config_to_dict(cfg) for p, cfg in settings.ai_provider_config.items()
        },
        "advancedSettings": settings.advanced_settings,
        "customAiModel": settings.custom_ai_model,
        "maxTokens": settings.max_tokens,
        "temperature": settings.temperature,
        "presencePenalty": settings.presence_penalty,
        "frequencyPenalty": settings.frequency_penalty,
        "enableGenerationLogging": settings.enable_generation_logging,
        "debugMode": settings.debug_mode,
        "customPrompts": [
            {"name": p.name, "data": p.data, "action": int(p.action)}
            for p in settings.custom_prompts
        ],
        "openRouterModels": [dict(m) for m in settings.openrouter_models],
    })
    return data


def obfuscate(data: dict) -> dict:
    encoded = base64.b64encode(json.dumps(data).encode("utf-8")).decode("ascii")
    return {"_NOTICE": OBFUSCATION_NOTICE, "z": encoded}


def deobfuscate(data: dict) -> dict:
    """Return the plain settings blob from a possibly obfuscated one."""
    if not isinstance(data, dict):
        raise ValueError("Stored settings are not an object")
    if "z" not in data:
        return data
    decoded = json.loads(base64.b64decode(data["z"]).decode("utf-8"))
    if not isinstance(decoded, dict):
        raise ValueError("Obfuscated settings do not contain an object")
    return decoded


def load_settings(storage: SettingsStorage) -> PluginSettings:
    """Load settings from a SettingsStorage, falling back to defaults."""
    raw = storage.load_data()
    if raw is None:
        return settings_from_dict(None)
    try:
        plain = deobfuscate(raw)
        return settings_from_dict(plain)
    except (ValueError, TypeError, KeyError, binascii.Error):
        log.warning("Failed to decode stored settings, using defaults", exc_info=True)
        return settings_from_dict(None)


def save_settings(storage: SettingsStorage, settings: PluginSettings) -> None:
    storage.save_data(obfuscate(settings_to_dict(settings)))


class JsonSettingsFile:
    """SettingsStorage backed by a JSON file on disk."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load_data(self) -> dict | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            log.warning("Failed to read settings at %s, using defaults", self._path, exc_info=True)
            return None
        return data if isinstance(data, dict) else None

    def save_data(self, data: dict) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self._path)


# --- Provider config store ---


def reset_to_defaults() -> PluginSettings:
    """Fresh settings: every provider at its static default, no API keys."""
    return settings_from_dict(None)


def get_active_config(settings: PluginSettings) -> ProviderConfig:
    cfg = settings.ai_provider_config.get(settings.ai_provider)
    if cfg is None:
        defaults = PROVIDER_DEFAULTS[settings.ai_provider]
        cfg = ProviderConfig(
            base_url=defaults.default_host,
            model=defaults.default_model,
            api_version=defaults.api_version,
        )
        settings.ai_provider_config[settings.ai_provider] = cfg
    return cfg


def set_active_provider(settings: PluginSettings, provider: Provider | str) -> ProviderConfig:
    """Switch the active provider. Other providers' configs are kept."""
    settings.ai_provider = Provider(provider)
    log.debug("Active provider set to %s", settings.ai_provider.value)
    return get_active_config(settings)


def update_active_config(
    settings: PluginSettings,
    *,
    api_key: str | None = None,
    base_url: str | None = None,
    model: str | None = None,
    api_version: str | None = None,
) -> ProviderConfig:
    """Edit fields of the active provider's config; None leaves a field as is."""
    cfg = get_active_config(settings)
    if api_key is not None:
        cfg.api_key = api_key.strip()
    if base_url is not None:
        cfg.base_url = base_url.strip().rstrip("/")
    if model is not None:
        cfg.model = model.strip()
    if api_version is not None:
        cfg.api_version = api_version.strip()
    return cfg


def effective_model(settings: PluginSettings) -> str:
    """Model to request: the advanced-settings override, else the provider's."""
    if settings.advanced_settings and settings.custom_ai_model.strip():
        return settings.custom_ai_model.strip()
    return get_active_config(settings).model


# --- Generation parameters ---


def parse_number(text: str) -> float:
    """Parse a number typed into a settings field.

    Raises:
        ValueError: Not a finite number.
    """
    value = float(text.strip())
    if not math.isfinite(value):
        raise ValueError(f"Not a finite number: {text!r}")
    return value


def _clamp_penalty(value: float) -> float:
    return min(max(float(value), PENALTY_MIN), PENALTY_MAX)


def update_generation_params(
    settings: PluginSettings,
    *,
    max_tokens: int | None = None,
    temperature: float | None = None,
    presence_penalty: float | None = None,
    frequency_penalty: float | None = None,
) -> None:
    """Apply generation parameter edits. Penalties are clamped to [-2, 2]."""
    if max_tokens is not None:
        if int(max_tokens) <= 0:
            raise ValueError("max_tokens must be positive")
        settings.max_tokens = int(max_tokens)
    if temperature is not None:
        if temperature < 0:
            raise ValueError("temperature cannot be negative")
        settings.temperature = float(temperature)
    if presence_penalty is not None:
        settings.presence_penalty = _clamp_penalty(presence_penalty)
    if frequency_penalty is not None:
        settings.frequency_penalty = _clamp_penalty(frequency_penalty)


def available_models(settings: PluginSettings, provider: Provider | None = None) -> list[str]:
    """Model ids to offer for a provider.

    OpenRouter uses the cached catalogue when one has been fetched.
    """
    provider = Provider(provider or settings.ai_provider)
    if provider is Provider.OPENROUTER:
        source = settings.openrouter_models or OPENROUTER_MODELS
        return [m["id"] for m in source if m.get("id")]
    return list(PROVIDER_DEFAULTS[provider].models)
