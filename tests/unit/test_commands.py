"""Tests for wordwise.core.commands — built-ins, lookup and custom prompts."""

import pytest

from wordwise.core.commands import (
    RESERVED_NAMES,
    CommandName,
    CommandNotFoundError,
    CustomPromptError,
    add_custom_prompt,
    builtin_commands,
    edit_custom_prompt,
    find_command,
    list_commands,
    remove_custom_prompt,
)
from wordwise.core.models import CommandAction, CustomPrompt, PluginSettings
from wordwise.core.template import render

BUILTIN_ORDER = [
    "Improve Writing",
    "Fix Grammar",
    "Simplify Text",
    "Make Shorter",
    "Make Longer",
    "Paraphrase",
    "Highlight Main Point",
    "Custom Instructions",
]


class TestBuiltins:
    def test_eight_builtins_in_menu_order(self):
        assert [c.name for c in builtin_commands()] == BUILTIN_ORDER

    def test_only_custom_instructions_asks_for_instructions(self):
        actions = {c.name: c.action for c in builtin_commands()}
        assert actions.pop("Custom Instructions") is CommandAction.CUSTOM_INSTRUCTIONS
        assert set(actions.values()) == {CommandAction.DIRECT_REPLACEMENT}

    def test_every_builtin_template_includes_input(self):
        for command in builtin_commands():
            out = render(command.template, {"input": "SELECTED-TEXT", "instructions": ""})
            assert "SELECTED-TEXT" in out
            assert "{{" not in out

    def test_custom_instructions_block_only_when_given(self):
        command = find_command(PluginSettings(), CommandName.CUSTOM_INSTRUCTIONS.value)
        with_instr = render(command.template, {"input": "x", "instructions": "make it formal"})
        without = render(command.template, {"input": "x", "instructions": ""})
        assert "Instructions: make it formal" in with_instr
        assert "Instructions:" not in without


class TestListCommands:
    def test_no_custom_prompts(self):
        assert len(list_commands(PluginSettings())) == 8

    def test_custom_prompts_follow_builtins_in_order(self):
        settings = PluginSettings(custom_prompts=[
            CustomPrompt(name="Pirate", data="Say like a pirate: {{input}}"),
            CustomPrompt(name="Haiku", data="Haiku: {{input}}"),
        ])
        names = [c.name for c in list_commands(settings)]
        assert names == BUILTIN_ORDER + ["Pirate", "Haiku"]

    def test_custom_prompt_defaults_to_direct_replacement(self):
        settings = PluginSettings(custom_prompts=[CustomPrompt(name="P", data="{{input}}")])
        assert list_commands(settings)[-1].action is CommandAction.DIRECT_REPLACEMENT

    def test_custom_prompt_keeps_explicit_action(self):
        settings = PluginSettings(custom_prompts=[
            CustomPrompt(name="Ask", data="{{instructions}} {{input}}", action=CommandAction.CUSTOM_INSTRUCTIONS),
        ])
        assert list_commands(settings)[-1].action is CommandAction.CUSTOM_INSTRUCTIONS


class TestFindCommand:
    def test_exact_match(self):
        command = find_command(PluginSettings(), "Fix Grammar")
        assert command.name == "Fix Grammar"

    def test_lookup_is_case_sensitive(self):
        with pytest.raises(CommandNotFoundError):
            find_command(PluginSettings(), "fix grammar")

    def test_unknown_name_raises(self):
        with pytest.raises(CommandNotFoundError, match="Could not find command"):
            find_command(PluginSettings(), "Translate")

    def test_builtin_wins_over_stored_custom_with_same_name(self):
        settings = PluginSettings(custom_prompts=[CustomPrompt(name="Paraphrase", data="evil {{input}}")])
        assert "evil" not in find_command(settings, "Paraphrase").template

    def test_duplicate_custom_names_first_match_wins(self):
        settings = PluginSettings(custom_prompts=[
            CustomPrompt(name="Dup", data="first {{input}}"),
            CustomPrompt(name="Dup", data="second {{input}}"),
        ])
        assert find_command(settings, "Dup").template == "first {{input}}"


class TestCustomPromptManagement:
    def test_add(self):
        settings = PluginSettings()
        prompt = add_custom_prompt(settings, "  Pirate ", "Arr: {{input}}")
        assert prompt.name == "Pirate"
        assert settings.custom_prompts == [prompt]

    @pytest.mark.parametrize("name", sorted(RESERVED_NAMES))
    def test_add_rejects_builtin_names(self, name):
        with pytest.raises(CustomPromptError, match="built-in"):
            add_custom_prompt(PluginSettings(), name, "{{input}}")

    def test_add_rejects_duplicate(self):
        settings = PluginSettings()
        add_custom_prompt(settings, "Pirate", "{{input}}")
        with pytest.raises(CustomPromptError, match="already exists"):
            add_custom_prompt(settings, "Pirate", "other {{input}}")

    def test_add_rejects_empty_name_and_template(self):
        with pytest.raises(CustomPromptError, match="name cannot be empty"):
            add_custom_prompt(PluginSettings(), "  ", "{{input}}")
        with pytest.raises(CustomPromptError, match="empty template"):
            add_custom_prompt(PluginSettings(), "P", "   ")

    def test_add_rejects_malformed_template(self):
        with pytest.raises(CustomPromptError, match="Invalid template"):
            add_custom_prompt(PluginSettings(), "Broken", "{{#input}} never closed")

    def test_custom_prompt_error_is_value_error(self):
        with pytest.raises(ValueError):
            add_custom_prompt(PluginSettings(), "Fix Grammar", "{{input}}")

    def test_edit_renames_in_place(self):
        settings = PluginSettings()
        add_custom_prompt(settings, "A", "a {{input}}")
        add_custom_prompt(settings, "B", "b {{input}}")
        edit_custom_prompt(settings, "A", "A2", "a2 {{input}}")
        assert [(p.name, p.data) for p in settings.custom_prompts] == [
            ("A2", "a2 {{input}}"),
            ("B", "b {{input}}"),
        ]

    def test_edit_keeping_same_name(self):
        settings = PluginSettings()
        add_custom_prompt(settings, "A", "a {{input}}")
        edit_custom_prompt(settings, "A", "A", "new {{input}}")
        assert settings.custom_prompts[0].data == "new {{input}}"

    def test_edit_rejects_rename_onto_existing(self):
        settings = PluginSettings()
        add_custom_prompt(settings, "A", "{{input}}")
        add_custom_prompt(settings, "B", "{{input}}")
        with pytest.raises(CustomPromptError, match="already exists"):
            edit_custom_prompt(settings, "A", "B", "{{input}}")

    def test_edit_missing_raises(self):
        with pytest.raises(CommandNotFoundError):
            edit_custom_prompt(PluginSettings(), "Nope", "X", "{{input}}")

    def test_remove(self):
        settings = PluginSettings()
        add_custom_prompt(settings, "A", "{{input}}")
        add_custom_prompt(settings, "B", "{{input}}")
        remove_custom_prompt(settings, "A")
        assert [p.name for p in settings.custom_prompts] == ["B"]

    def test_remove_missing_raises(self):
        with pytest.raises(CommandNotFoundError):
            remove_custom_prompt(PluginSettings(), "Nope")
