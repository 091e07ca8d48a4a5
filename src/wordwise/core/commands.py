"""Built-in commands, custom prompt management and command lookup."""

from __future__ import annotations

import logging
from enum import Enum

from wordwise.core.errors import WordWiseError
from wordwise.core.models import Command, CommandAction, CustomPrompt, PluginSettings
from wordwise.core.template import TemplateSyntaxError, parse

log = logging.getLogger(__name__)


class CommandName(str, Enum):
    IMPROVE_WRITING = "Improve Writing"
    FIX_GRAMMAR = "Fix Grammar"
    SIMPLIFY_TEXT = "Simplify Text"
    MAKE_SHORTER = "Make Shorter"
    MAKE_LONGER = "Make Longer"
    PARAPHRASE = "Paraphrase"
    HIGHLIGHT_MAIN_POINT = "Highlight Main Point"
    CUSTOM_INSTRUCTIONS = "Custom Instructions"


class CommandNotFoundError(WordWiseError):
    """No command is registered under the requested name."""


class CustomPromptError(WordWiseError, ValueError):
    """A custom prompt edit was rejected."""


class InstructionsUnavailableError(WordWiseError):
    """A command needs free-form instructions but the host gave no modal."""


_RULES = """\
Keep the original language of the text. Preserve Markdown formatting,
links and code blocks. Output only the rewritten text, without any
preamble, explanation or surrounding quotes."""

_BUILTIN_TEMPLATES: dict[CommandName, str] = {
    CommandName.IMPROVE_WRITING: f"""\
Improve the writing of the text below: make it clearer, more fluent and
more engaging while keeping its meaning and tone.
{_RULES}

Text:
{{{{input}}}}""",
    CommandName.FIX_GRAMMAR: f"""\
Fix the spelling, grammar and punctuation of the text below. Do not change
its wording beyond what the corrections require.
{_RULES}

Text:
{{{{input}}}}""",
    CommandName.SIMPLIFY_TEXT: f"""\
Rewrite the text below in simpler words and shorter sentences so it is
easy to understand for a general audience.
{_RULES}

Text:
{{{{input}}}}""",
    CommandName.MAKE_SHORTER: f"""\
Make the text below more concise, roughly half its length, keeping every
key point.
{_RULES}

Text:
{{{{input}}}}""",
    CommandName.MAKE_LONGER: f"""\
Expand the text below to about twice its length by adding relevant detail
and explanation, without changing its meaning.
{_RULES}

Text:
{{{{input}}}}""",
    CommandName.PARAPHRASE: f"""\
Paraphrase the text below using different wording and sentence structure
while keeping the same meaning.
{_RULES}

Text:
{{{{input}}}}""",
    CommandName.HIGHLIGHT_MAIN_POINT: f"""\
Mark the main points of the text below in bold using Markdown (**like
this**). Do not change any other wording.
{_RULES}

Text:
{{{{input}}}}""",
    CommandName.CUSTOM_INSTRUCTIONS: f"""\
Rewrite the text below following the user's instructions.
{{{{#instructions}}}}
Instructions: {{{{instructions}}}}
{{{{/instructions}}}}
{_RULES}

Text:
{{{{input}}}}""",
}

RESERVED_NAMES = frozenset(name.value for name in CommandName)


def builtin_commands() -> list[Command]:
    """Return the built-in commands in menu order."""
    return [
        Command(
            name=name.value,
            action=(
                CommandAction.CUSTOM_INSTRUCTIONS
                if name is CommandName.CUSTOM_INSTRUCTIONS
                else CommandAction.DIRECT_REPLACEMENT
            ),
            template=_BUILTIN_TEMPLATES[name],
        )
        for name in CommandName
    ]


def list_commands(settings: PluginSettings) -> list[Command]:
    """Built-in commands followed by the user's custom prompts.

    Built-ins come first, so a stored custom prompt that reuses a built-in
    name can never shadow it on lookup.
    """
    commands = builtin_commands()
    for prompt in settings.custom_prompts:
        commands.append(Command(name=prompt.name, action=prompt.action, template=prompt.data))
    return commands


def find_command(settings: PluginSettings, name: str) -> Command:
    """Look up a command by exact, case-sensitive name. First match wins.

    Raises:
        CommandNotFoundError: No command has this name.
    """
    for command in list_commands(settings):
        if command.name == name:
            return command
    raise CommandNotFoundError(f"Could not find command data with name {name}")


# --- Custom prompt management ---


def _validate(settings: PluginSettings, name: str, data: str, *, ignore: str | None = None) -> str:
    name = name.strip()
    if not name:
        raise CustomPromptError("Prompt name cannot be empty")
    if not data.strip():
        raise CustomPromptError(f"Prompt '{name}' has an empty template")
    if name in RESERVED_NAMES:
        raise CustomPromptError(f"'{name}' is a built-in command name")
    if any(p.name == name and p.name != ignore for p in settings.custom_prompts):
        raise CustomPromptError(f"A custom prompt named '{name}' already exists")
    try:
        parse(data)
    except TemplateSyntaxError as e:
        raise CustomPromptError(f"Invalid template for '{name}': {e}") from e
    return name


def add_custom_prompt(
    settings: PluginSettings,
    name: str,
    data: str,
    action: CommandAction = CommandAction.DIRECT_REPLACEMENT,
) -> CustomPrompt:
    """Append a new custom prompt to settings.

    Raises:
        CustomPromptError: Empty, reserved or duplicate name, or a template
            that does not parse.
    """
    name = _validate(settings, name, data)
    prompt = CustomPrompt(name=name, data=data, action=action)
    settings.custom_prompts.append(prompt)
    log.debug("Added custom prompt %r", name)
    return prompt


def edit_custom_prompt(
    settings: PluginSettings,
    original_name: str,
    name: str,
    data: str,
) -> CustomPrompt:
    """Rename and/or change the template of an existing custom prompt in place."""
    for prompt in settings.custom_prompts:
        if prompt.name == original_name:
            prompt.name = _validate(settings, name, data, ignore=original_name)
            prompt.data = data
            log.debug("Edited custom prompt %r -> %r", original_name, prompt.name)
            return prompt
    raise CommandNotFoundError(f"No custom prompt named {original_name}")


def remove_custom_prompt(settings: PluginSettings, name: str) -> None:
    """Remove every custom prompt with this name."""
    before = len(settings.custom_prompts)
    settings.custom_prompts = [p for p in settings.custom_prompts if p.name != name]
    if len(settings.custom_prompts) == before:
        raise CommandNotFoundError(f"No custom prompt named {name}")
    log.debug("Removed custom prompt %r", name)
