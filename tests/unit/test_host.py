"""Tests for wordwise.host.InstructionRequest."""

import asyncio

import pytest

from wordwise.host import Editor, InstructionRequest, Notifier


class TestInstructionRequest:
    def test_submit_resolves(self):
        async def scenario():
            request = InstructionRequest()
            request.submit("make it formal")
            return await request.wait()

        assert asyncio.run(scenario()) == "make it formal"

    def test_cancel_resolves_empty(self):
        async def scenario():
            request = InstructionRequest()
            request.cancel()
            return await request.wait()

        assert asyncio.run(scenario()) == ""

    def test_fulfilled_exactly_once(self):
        async def scenario():
            request = InstructionRequest()
            request.submit("first")
            request.submit("second")
            request.cancel()
            return request.done, await request.wait()

        assert asyncio.run(scenario()) == (True, "first")

    def test_needs_running_loop(self):
        with pytest.raises(RuntimeError):
            InstructionRequest()


class TestProtocols:
    def test_fakes_satisfy_protocols(self, editor, notifier):
        assert isinstance(editor, Editor)
        assert isinstance(notifier, Notifier)
