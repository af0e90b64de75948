"""Interactive console front-end for the task manager.

The console is a thin consumer of ``TaskSyncController``: commands edit the
draft, render the filtered list, or start a remote operation. Remote
operations run as background asyncio tasks so the prompt stays usable while
requests are in flight; each finished operation reports the error it left
behind, if any.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

from .client import RemoteTaskStore, TaskSyncController
from .logging_setup import setup_logging
from .settings import get_settings

logger = logging.getLogger(__name__)

HELP = """Commands:
  list [search]    show tasks, optionally only those whose name contains search
  name <text>      set the draft name
  desc <text>      set the draft description
  save             add the draft as a new task, or save the task being edited
  edit <id>        load a task into the draft (id prefix is enough)
  cancel           leave edit mode and clear the draft
  delete <id>      delete a task (id prefix is enough)
  reload           fetch all tasks again
  help             show this text
  quit             wait for pending requests and exit"""

ReadLine = Callable[[str], Awaitable[Optional[str]]]
Write = Callable[[str], None]


async def _read_stdin(prompt: str) -> Optional[str]:
    try:
        return await asyncio.to_thread(input, prompt)
    except EOFError:
        return None


class Console:
    def __init__(self, controller: TaskSyncController, write: Write = print) -> None:
        self.controller = controller
        self._write = write
        self._pending: Set[asyncio.Task] = set()

    def _report_error(self) -> None:
        if self.controller.error:
            self._write(f"! {self.controller.error}")

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is None:
            self._report_error()

    def _schedule(self, coro: Awaitable) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _resolve(self, prefix: str) -> Optional[str]:
        if not prefix:
            self._write("An id is required")
            return None
        matches = [t.id for t in self.controller.tasks if t.id.startswith(prefix)]
        if len(matches) == 1:
            return matches[0]
        self._write(f"No single task matches id {prefix!r}")
        return None

    def render(self, search: str = "") -> None:
        shown = 0
        for task in self.controller.visible_tasks(search):
            shown += 1
            line = f"{task.id[:8]}  {task.name}"
            if task.description:
                line += f": {task.description}"
            self._write(f"{line}  (Created: {task.created_at})")
        if not shown:
            self._write("No tasks.")

    def render_draft(self) -> None:
        draft = self.controller.draft
        mode = f"editing {draft.editing_id[:8]}" if draft.editing_id else "new task"
        self._write(f"[{mode}] name={draft.name!r} description={draft.description!r}")

    def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the user asked to quit."""
        command, _, arg = line.strip().partition(" ")
        command = command.lower()
        arg = arg.strip()

        if not command:
            return True
        if command in {"quit", "exit"}:
            return False
        if command == "help":
            self._write(HELP)
        elif command == "list":
            self.render(arg)
        elif command == "name":
            self.controller.set_draft(name=arg)
            self.render_draft()
        elif command == "desc":
            self.controller.set_draft(description=arg)
            self.render_draft()
        elif command == "save":
            if self.controller.draft.is_blank:
                self._write("The draft has no name.")
            else:
                self._schedule(self.controller.submit())
        elif command == "edit":
            task_id = self._resolve(arg)
            if task_id and self.controller.begin_edit(task_id):
                self.render_draft()
        elif command == "cancel":
            self.controller.cancel_edit()
            self.render_draft()
        elif command == "delete":
            task_id = self._resolve(arg)
            if task_id:
                self._schedule(self.controller.remove(task_id))
        elif command == "reload":
            self._schedule(self.controller.load())
        else:
            self._write(f"Unknown command: {command}. Type 'help'.")
        return True

    async def drain(self) -> None:
        """Wait for every in-flight remote operation."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def run(self, read_line: ReadLine = _read_stdin) -> None:
        await self.controller.load()
        self._report_error()
        self._write("Task Manager. Type 'help' for commands.")
        try:
            while True:
                line = await read_line("> ")
                if line is None or not self.handle(line):
                    break
        finally:
            await self.drain()


async def _run(base_url: str, timeout: Optional[float]) -> None:
    async with RemoteTaskStore(base_url, timeout=timeout) as remote:
        await Console(TaskSyncController(remote)).run()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Using task store at %s", settings.api_base_url)
    try:
        asyncio.run(_run(settings.api_base_url, settings.request_timeout))
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
