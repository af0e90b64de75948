from __future__ import annotations

import asyncio
from typing import List, Optional

import pytest

from task_manager.client.controller import CREATE_ERROR, DELETE_ERROR, TaskSyncController
from task_manager.client.errors import FetchFailed, ServerRejected
from task_manager.console import Console

from .fakes import FakeTaskRemote, record


def scripted(lines: List[str]):
    script = iter(lines)

    async def read_line(prompt: str) -> Optional[str]:
        # let scheduled remote operations make progress between commands
        for _ in range(3):
            await asyncio.sleep(0)
        return next(script, None)

    return read_line


def make_console(remote: FakeTaskRemote, output: List[str]) -> Console:
    return Console(TaskSyncController(remote, id_factory=lambda: "abcdef123456"), write=output.append)


@pytest.mark.asyncio
async def test_console_creates_and_lists_tasks() -> None:
    remote = FakeTaskRemote([record("0123456789", "Walk dog", created_at="t0")])
    output: List[str] = []
    console = make_console(remote, output)

    await console.run(scripted(["name Buy milk", "desc 2 litres", "save", "list MILK", "quit"]))

    assert [t.name for t in remote.tasks] == ["Walk dog", "Buy milk"]
    listing = [line for line in output if line.startswith("abcdef12")]
    assert len(listing) == 1
    assert "Buy milk: 2 litres" in listing[0]
    assert not any("Walk dog" in line for line in output)


@pytest.mark.asyncio
async def test_console_edits_and_deletes_by_id_prefix() -> None:
    remote = FakeTaskRemote([record("aaa111", "A"), record("bbb222", "B")])
    output: List[str] = []
    console = make_console(remote, output)

    await console.run(scripted(["edit aaa", "name A2", "save", "delete bbb", "quit"]))

    assert [(t.id, t.name) for t in remote.tasks] == [("aaa111", "A2")]
    assert [t.id for t in console.controller.tasks] == ["aaa111"]


@pytest.mark.asyncio
async def test_console_reports_a_failed_save() -> None:
    remote = FakeTaskRemote()
    remote.failures["create"] = FetchFailed("down")
    output: List[str] = []
    console = make_console(remote, output)

    await console.run(scripted(["name X", "save", "list", "quit"]))

    assert output.count(f"! {CREATE_ERROR}") == 1
    # the draft survives the failure
    assert console.controller.draft.name == "X"


def test_console_rejects_unknown_commands_and_ambiguous_ids() -> None:
    remote = FakeTaskRemote()
    output: List[str] = []
    console = make_console(remote, output)

    assert console.handle("frobnicate") is True
    assert console.handle("edit ") is True
    assert console.handle("save") is True
    assert console.handle("quit") is False
    assert output == [
        "Unknown command: frobnicate. Type 'help'.",
        "An id is required",
        "The draft has no name.",
    ]


@pytest.mark.asyncio
async def test_console_reports_every_failed_operation() -> None:
    remote = FakeTaskRemote([record("a1", "A")])
    remote.failures["delete"] = ServerRejected(500)
    output: List[str] = []
    console = make_console(remote, output)

    await console.run(scripted(["delete a1", "delete a1", "quit"]))

    assert output.count(f"! {DELETE_ERROR}") == 2
    assert [t.id for t in console.controller.tasks] == ["a1"]


@pytest.mark.asyncio
async def test_console_requires_an_id_even_with_a_single_task() -> None:
    remote = FakeTaskRemote([record("only1", "Only")])
    output: List[str] = []
    console = make_console(remote, output)
    await console.controller.load()

    assert console.handle("delete") is True
    assert console.handle("edit") is True
    await console.drain()

    assert output == ["An id is required", "An id is required"]
    assert [t.id for t in remote.tasks] == ["only1"]
    assert not console.controller.draft.is_editing
    assert all(call[0] != "delete" for call in remote.calls)
