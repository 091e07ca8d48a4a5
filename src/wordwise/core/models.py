"""Core data models for WordWise."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

from wordwise.core.config import SCHEMA_DATE, Provider


class CommandAction(IntEnum):
    DIRECT_REPLACEMENT = 0  # replace the selection with the generated text
    CUSTOM_INSTRUCTIONS = 1  # ask the user for instructions first


class RunState(str, Enum):
    IDLE = "idle"
    SELECTION_READ = "selection_read"
    AWAITING_INSTRUCTIONS = "awaiting_instructions"
    RENDERING = "rendering"
    REQUESTING = "requesting"
    REPLACING = "replacing"
    DONE = "done"
    FAILED = "failed"
    ABORTED = "aborted"


@dataclass
class ProviderConfig:
    """Connection settings for one provider."""

    api_key: str = ""
    base_url: str = ""
    model: str = ""
    api_version: str | None = None  # Azure only


@dataclass
class GenerationParams:
    max_tokens: int = 2000
    temperature: float = 0.5
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0


@dataclass
class CustomPrompt:
    """A user-authored prompt stored in settings."""

    name: str
    data: str
    action: CommandAction = CommandAction.DIRECT_REPLACEMENT


@dataclass
class Command:
    """A named text transformation the user can invoke."""

    name: str
    action: CommandAction
    template: str


@dataclass
class PluginSettings:
    """Aggregate root for everything WordWise persists."""

    data_scheme_date: str = SCHEMA_DATE
    ai_provider: Provider = Provider.OPENAI
    ai_provider_config: dict[Provider, ProviderConfig] = field(default_factory=dict)
    advanced_settings: bool = False
    custom_ai_model: str = ""
    max_tokens: int = 2000
    temperature: float = 0.5
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
    enable_generation_logging: bool = False
    debug_mode: bool = False
    custom_prompts: list[CustomPrompt] = field(default_factory=list)
    openrouter_models: list[dict[str, str]] = field(default_factory=list)
    # Persisted fields this version does not know about, carried forward as-is.
    extra: dict = field(default_factory=dict)

    @property
    def generation_params(self) -> GenerationParams:
        return GenerationParams(
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            presence_penalty=self.presence_penalty,
            frequency_penalty=self.frequency_penalty,
        )


@dataclass
class RunResult:
    """Outcome of one command invocation."""

    state: RunState
    output: str = ""
    elapsed: float | None = None  # seconds spent waiting on the provider
