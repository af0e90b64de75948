from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional, Tuple

from ..schemas import TaskRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Draft:
    """
    Unsaved form contents.

    ``editing_id`` is None while composing a new task and holds the id of the
    task being edited otherwise.
    """

    name: str = ""
    description: str = ""
    editing_id: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def is_blank(self) -> bool:
        return not self.name.strip()


@dataclass(frozen=True)
class TaskState:
    tasks: Tuple[TaskRecord, ...] = ()
    draft: Draft = field(default_factory=Draft)
    error: str = ""


Listener = Callable[[TaskState], Any]


class StateStore:
    """
    Holds the current TaskState and notifies subscribers on every change.

    Each ``set`` replaces the snapshot in one step, so subscribers never see a
    half-applied change.
    """

    def __init__(self, initial: Optional[TaskState] = None) -> None:
        self._state = initial or TaskState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> TaskState:
        return self._state

    def set(self, **changes: Any) -> TaskState:
        new_state = replace(self._state, **changes)
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener %r failed", listener)
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; call the returned function to unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
