"""Tests for wordwise.plugin.WordWisePlugin."""

from __future__ import annotations

import asyncio

import pytest

from wordwise.core.commands import add_custom_prompt
from wordwise.core.config import Provider
from wordwise.core.models import RunState
from wordwise.core.settings import get_active_config, set_active_provider, update_active_config
from wordwise.plugin import WordWisePlugin


def openai_reply(text):
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


class TestLifecycle:
    def test_settings_require_load(self, storage, notifier):
        plugin = WordWisePlugin(storage, notifier)
        with pytest.raises(RuntimeError, match="not loaded"):
            plugin.settings

    def test_load_defaults_then_save(self, storage, notifier):
        plugin = WordWisePlugin(storage, notifier)
        settings = plugin.load_settings()
        update_active_config(settings, api_key="sk-1")
        plugin.save_settings()

        reloaded = WordWisePlugin(storage, notifier)
        assert get_active_config(reloaded.load_settings()).api_key == "sk-1"

    def test_switching_provider_keeps_keys_across_reload(self, storage, notifier):
        plugin = WordWisePlugin(storage, notifier)
        settings = plugin.load_settings()
        update_active_config(settings, api_key="sk-openai")
        set_active_provider(settings, Provider.ANTHROPIC)
        plugin.save_settings()

        reloaded = WordWisePlugin(storage, notifier).load_settings()
        assert reloaded.ai_provider is Provider.ANTHROPIC
        assert reloaded.ai_provider_config[Provider.OPENAI].api_key == "sk-openai"

    def test_reset(self, storage, notifier):
        plugin = WordWisePlugin(storage, notifier)
        settings = plugin.load_settings()
        update_active_config(settings, api_key="sk-1")
        add_custom_prompt(settings, "P", "{{input}}")
        plugin.save_settings()

        fresh = plugin.reset_settings()
        assert fresh.custom_prompts == []
        assert get_active_config(fresh).api_key == ""
        assert storage.saves == 2

    def test_command_names(self, storage, notifier):
        plugin = WordWisePlugin(storage, notifier)
        add_custom_prompt(plugin.load_settings(), "Pirate", "Arr {{input}}")
        names = plugin.command_names()
        assert len(names) == 9
        assert names[0] == "Improve Writing"
        assert names[-1] == "Pirate"


class TestRun:
    def test_run_command(self, storage, notifier, editor, make_transport):
        rec = make_transport(body=openai_reply("Better."))
        plugin = WordWisePlugin(storage, notifier, transport=rec.transport)
        update_active_config(plugin.load_settings(), api_key="sk-1")
        editor.selection = "gud"

        result = asyncio.run(plugin.run_command(editor, "Improve Writing"))

        assert result.state is RunState.DONE
        assert editor.selection == "Better."

    def test_refresh_openrouter_models(self, storage, notifier, make_transport):
        rec = make_transport(body={"data": [{"id": "x/y", "name": "X Y"}]})
        plugin = WordWisePlugin(storage, notifier, transport=rec.transport)
        plugin.load_settings()

        models = asyncio.run(plugin.refresh_openrouter_models())

        assert models == [{"id": "x/y", "name": "X Y"}]
        assert plugin.settings.openrouter_models == models
        assert WordWisePlugin(storage, notifier).load_settings().openrouter_models == models
