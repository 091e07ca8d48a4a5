"""Capabilities WordWise needs from the host application.

The host (the note-taking app) owns the editor, the notices, the modal
used to collect free-form instructions, and settings persistence. Each is
modelled as a small Protocol so the core can run against any host and
against test doubles.
"""

from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable


@runtime_checkable
class Editor(Protocol):
    """The active editor buffer."""

    def get_selection(self) -> str:
        """Currently selected text, empty when nothing is selected."""
        ...

    def replace_selection(self, text: str) -> None:
        """Replace the current selection with text in one edit."""
        ...


@runtime_checkable
class Notifier(Protocol):
    def notify(self, message: str) -> None:
        """Show a short, transient message to the user."""
        ...


@runtime_checkable
class SettingsStorage(Protocol):
    """Persistence for the plugin's JSON settings blob."""

    def load_data(self) -> dict | None:
        """Return the stored blob, or None when nothing is stored yet."""
        ...

    def save_data(self, data: dict) -> None:
        ...


class InstructionRequest:
    """Single-value channel between the command runner and an instructions modal.

    The runner awaits ``wait()``; the modal's submit or cancel handler
    fulfils it exactly once. Later calls are ignored.
    """

    def __init__(self) -> None:
        self._future: asyncio.Future[str] = asyncio.get_running_loop().create_future()

    @property
    def done(self) -> bool:
        return self._future.done()

    def submit(self, text: str) -> None:
        if not self._future.done():
            self._future.set_result(text)

    def cancel(self) -> None:
        """Dismiss without instructions; resolves to an empty string."""
        self.submit("")

    async def wait(self) -> str:
        return await self._future


@runtime_checkable
class InstructionsModal(Protocol):
    def open(self, request: InstructionRequest) -> None:
        """Show the modal; its handlers must call request.submit() or request.cancel()."""
        ...
