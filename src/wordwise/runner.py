"""Run one command against the editor selection.

Flow: read selection -> look up command -> (ask for instructions) ->
render prompt -> call provider -> replace selection -> notify.
"""

from __future__ import annotations

import logging
import time

import httpx

from wordwise.core.commands import InstructionsUnavailableError, find_command
from wordwise.core.debug import GenerationLog, debug_log
from wordwise.core.errors import WordWiseError
from wordwise.core.models import CommandAction, PluginSettings, RunResult, RunState
from wordwise.core.settings import effective_model
from wordwise.core.template import render
from wordwise.host import Editor, InstructionRequest, InstructionsModal, Notifier
from wordwise.providers.base import DEFAULT_TIMEOUT
from wordwise.providers.dispatch import generate

log = logging.getLogger(__name__)

MAX_NOTICE_LENGTH = 100
GENERIC_FAILURE = "Error generating text, see logs for details"


def failure_notice(error: Exception) -> str:
    """Short user-facing text for a failed run."""
    message = str(error)
    if len(message) > MAX_NOTICE_LENGTH:
        return GENERIC_FAILURE
    return f"Error generating text: {message}"


async def run_command(
    command_name: str,
    *,
    editor: Editor,
    notifier: Notifier,
    settings: PluginSettings,
    instructions_modal: InstructionsModal | None = None,
    generation_log: GenerationLog | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> RunResult:
    """Run a command on the current selection.

    Provider, rendering and network failures are logged in full and turned
    into a short notice; the editor is left untouched. Host wiring mistakes
    are raised instead.

    Raises:
        CommandNotFoundError: No command is registered under command_name.
        InstructionsUnavailableError: The command asks for instructions but
            no instructions_modal was given.
    """
    state = RunState.IDLE

    text = editor.get_selection()
    if not text:
        notifier.notify("No input selected")
        return RunResult(RunState.ABORTED)
    state = RunState.SELECTION_READ

    debug_log(settings, "Running command: %s", command_name)
    command = find_command(settings, command_name)

    instructions = ""
    if command.action is CommandAction.CUSTOM_INSTRUCTIONS:
        if instructions_modal is None:
            raise InstructionsUnavailableError(f"Command {command_name} needs an instructions modal")
        state = RunState.AWAITING_INSTRUCTIONS
        request = InstructionRequest()
        instructions_modal.open(request)
        instructions = (await request.wait()).strip()
        if not instructions:
            debug_log(settings, "Instructions cancelled for %s", command_name)
            return RunResult(RunState.ABORTED)

    provider = settings.ai_provider.value
    notifier.notify(f"Generating text with {command_name} ({provider})...")

    try:
        state = RunState.RENDERING
        user_message = render(command.template, {"input": text, "instructions": instructions})

        state = RunState.REQUESTING
        started = time.monotonic()
        output = await generate(settings, user_message, transport=transport, timeout=timeout)
        elapsed = time.monotonic() - started

        if not output:
            notifier.notify(f"No result from {provider}")
            return RunResult(RunState.ABORTED, elapsed=elapsed)

        state = RunState.REPLACING
        editor.replace_selection(output)
    except WordWiseError as e:
        log.error("Command %r failed while %s", command_name, state.value, exc_info=True)
        notifier.notify(failure_notice(e))
        return RunResult(RunState.FAILED)

    debug_log(settings, "Replaced selection with result: %s (Time taken: %.2fs)", output, elapsed)

    if settings.enable_generation_logging and generation_log is not None:
        try:
            generation_log.append(
                command=command_name,
                provider=provider,
                model=effective_model(settings),
                input_text=text,
                output_text=output,
                elapsed=elapsed,
            )
        except OSError:
            log.warning("Could not write generation log at %s", generation_log.path, exc_info=True)

    notifier.notify("Text generated.")
    return RunResult(RunState.DONE, output=output, elapsed=elapsed)
