from __future__ import annotations

from typing import Iterator, Sequence

from ..schemas import TaskRecord


class TaskFilter:
    """
    Lazy view over the tasks whose name contains ``search``, ignoring case.

    Iteration walks the underlying sequence on demand and keeps its order;
    each ``iter()`` starts over, so the view can be consumed more than once.
    The sequence is never modified.
    """

    __slots__ = ("_tasks", "_needle")

    def __init__(self, tasks: Sequence[TaskRecord], search: str = "") -> None:
        self._tasks = tasks
        self._needle = (search or "").lower()

    def __iter__(self) -> Iterator[TaskRecord]:
        needle = self._needle
        for task in self._tasks:
            if needle in task.name.lower():
                yield task


# PUBLIC_INTERFACE
def filter_tasks(tasks: Sequence[TaskRecord], search: str = "") -> TaskFilter:
    """Return a restartable lazy view of ``tasks`` matching ``search`` by name."""
    return TaskFilter(tasks, search)
