"""WordWise plugin facade: owns the settings handle and runs commands."""

from __future__ import annotations

import logging

import httpx

from wordwise.core.commands import list_commands
from wordwise.core.config import Provider
from wordwise.core.debug import GenerationLog, debug_log
from wordwise.core.models import PluginSettings, RunResult
from wordwise.core.settings import load_settings, reset_to_defaults, save_settings
from wordwise.host import Editor, InstructionsModal, Notifier, SettingsStorage
from wordwise.providers.base import DEFAULT_TIMEOUT
from wordwise.providers.dispatch import fetch_openrouter_models
from wordwise.runner import run_command

log = logging.getLogger(__name__)


class WordWisePlugin:
    """Glue between the host application and the WordWise core.

    Settings are loaded once by ``load_settings()`` and written back by
    ``save_settings()`` after each edit. Commands read the handle at start
    and never write to it.
    """

    def __init__(
        self,
        storage: SettingsStorage,
        notifier: Notifier,
        *,
        instructions_modal: InstructionsModal | None = None,
        generation_log: GenerationLog | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._storage = storage
        self._notifier = notifier
        self._instructions_modal = instructions_modal
        self._generation_log = generation_log
        self._transport = transport
        self._timeout = timeout
        self._settings: PluginSettings | None = None

    @property
    def settings(self) -> PluginSettings:
        if self._settings is None:
            raise RuntimeError("Settings not loaded; call load_settings() first")
        return self._settings

    def load_settings(self) -> PluginSettings:
        self._settings = load_settings(self._storage)
        debug_log(self._settings, "Loaded settings (provider=%s)", self._settings.ai_provider.value)
        return self._settings

    def save_settings(self) -> None:
        save_settings(self._storage, self.settings)

    def reset_settings(self) -> PluginSettings:
        self._settings = reset_to_defaults()
        self.save_settings()
        log.info("Settings reset to defaults")
        return self._settings

    def command_names(self) -> list[str]:
        """Names to register as host commands, in menu order."""
        return [c.name for c in list_commands(self.settings)]

    async def run_command(self, editor: Editor, command_name: str) -> RunResult:
        return await run_command(
            command_name,
            editor=editor,
            notifier=self._notifier,
            settings=self.settings,
            instructions_modal=self._instructions_modal,
            generation_log=self._generation_log,
            transport=self._transport,
            timeout=self._timeout,
        )

    async def refresh_openrouter_models(self) -> list[dict[str, str]]:
        """Fetch OpenRouter's model list and cache it in settings."""
        config = self.settings.ai_provider_config[Provider.OPENROUTER]
        models = await fetch_openrouter_models(config, transport=self._transport, timeout=self._timeout)
        self.settings.openrouter_models = models
        self.save_settings()
        debug_log(self.settings, "Cached %d OpenRouter models", len(models))
        return models
