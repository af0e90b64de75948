from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Tuple

from ..schemas import TaskRecord
from .errors import RemoteStoreError
from .filtering import TaskFilter, filter_tasks
from .remote import TaskRemote
from .state import Draft, Listener, StateStore, TaskState

logger = logging.getLogger(__name__)

LOAD_ERROR = "Unable to fetch tasks. Please try again later."
CREATE_ERROR = "Server not available. Please try again later."
UPDATE_ERROR = "Error updating task"
DELETE_ERROR = "Error deleting task"


def new_task_id() -> str:
    return uuid.uuid4().hex


def timestamp_now() -> str:
    return datetime.now().strftime("%d/%m/%Y, %H:%M:%S")


# PUBLIC_INTERFACE
class TaskSyncController:
    """
    Keeps a local task list in step with the remote task store.

    - ``load`` replaces the local list with the remote collection.
    - ``create`` and ``update`` are pessimistic: the local list changes only
      after the store has answered, using the record it returned.
    - ``remove`` is optimistic: the task disappears locally at once and is put
      back at its old position if the store refuses the deletion.

    Failures never propagate to the caller. They end up in ``error`` as a
    single human-readable message which the next operation overwrites.

    All state lives in a ``StateStore``; each operation publishes its local
    change as one snapshot, so the controller is safe to drive from several
    concurrent coroutines on one event loop.
    """

    def __init__(
        self,
        remote: TaskRemote,
        *,
        store: Optional[StateStore] = None,
        id_factory: Callable[[], str] = new_task_id,
        clock: Callable[[], str] = timestamp_now,
    ) -> None:
        self._remote = remote
        self._store = store or StateStore()
        self._new_id = id_factory
        self._clock = clock

    # -------------------- observed state --------------------
    @property
    def state(self) -> TaskState:
        return self._store.state

    @property
    def tasks(self) -> Tuple[TaskRecord, ...]:
        return self._store.state.tasks

    @property
    def draft(self) -> Draft:
        return self._store.state.draft

    @property
    def error(self) -> str:
        return self._store.state.error

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._store.subscribe(listener)

    def visible_tasks(self, search: str = "") -> TaskFilter:
        """Tasks whose name contains ``search``, case-insensitively."""
        return filter_tasks(self.tasks, search)

    def _find(self, task_id: str) -> Optional[TaskRecord]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    # -------------------- draft --------------------
    def set_draft(self, *, name: Optional[str] = None, description: Optional[str] = None) -> Draft:
        changes = {}
        if name is not None:
            changes["name"] = name
        if description is not None:
            changes["description"] = description
        return self._store.set(draft=replace(self.draft, **changes)).draft

    def begin_edit(self, task_id: str) -> bool:
        """Copy a task into the draft and enter edit mode. Unknown ids are ignored."""
        task = self._find(task_id)
        if task is None:
            logger.debug("begin_edit: no local task %s", task_id)
            return False
        self._store.set(draft=Draft(name=task.name, description=task.description, editing_id=task.id))
        return True

    def cancel_edit(self) -> None:
        self._store.set(draft=Draft())

    # -------------------- remote operations --------------------
    async def load(self) -> bool:
        """Fetch the whole collection. On failure the local list is left as it was."""
        try:
            tasks = await self._remote.list_tasks()
        except RemoteStoreError:
            logger.warning("Loading tasks failed", exc_info=True)
            self._store.set(error=LOAD_ERROR)
            return False
        self._store.set(tasks=tuple(tasks), error="")
        logger.info("Loaded %d tasks", len(tasks))
        return True

    async def create(self, draft: Optional[Draft] = None) -> Optional[TaskRecord]:
        """
        Submit ``draft`` (the current draft by default) as a new task.

        Blank names are ignored without touching any state. Returns the stored
        record, or None when nothing was created.
        """
        draft = self.draft if draft is None else draft
        if draft.is_blank:
            return None

        task = TaskRecord(
            id=self._new_id(),
            name=draft.name,
            description=draft.description,
            created_at=self._clock(),
        )
        try:
            saved = await self._remote.create_task(task)
        except RemoteStoreError:
            logger.warning("Creating task %s failed", task.id, exc_info=True)
            self._store.set(error=CREATE_ERROR)
            return None

        saved = self._keep_client_id(saved, task.id)
        current = self.tasks
        if any(t.id == saved.id for t in current):
            # a reload finished first and already brought the record in
            tasks = tuple(saved if t.id == saved.id else t for t in current)
        else:
            tasks = current + (saved,)
        self._store.set(tasks=tasks, draft=Draft(), error="")
        logger.info("Created task %s", saved.id)
        return saved

    async def update(self, task_id: Optional[str] = None, draft: Optional[Draft] = None) -> Optional[TaskRecord]:
        """
        Replace a task with the draft contents and a fresh timestamp.

        Defaults to the current draft and the task it is editing. On failure
        the draft and edit mode are kept so the user can retry.
        """
        draft = self.draft if draft is None else draft
        task_id = draft.editing_id if task_id is None else task_id
        if task_id is None or draft.is_blank:
            return None
        if self._find(task_id) is None:
            logger.warning("Cannot update task %s: not in the local list", task_id)
            self._store.set(error=UPDATE_ERROR)
            return None

        task = TaskRecord(
            id=task_id,
            name=draft.name,
            description=draft.description,
            created_at=self._clock(),
        )
        try:
            saved = await self._remote.replace_task(task_id, task)
        except RemoteStoreError:
            logger.warning("Updating task %s failed", task_id, exc_info=True)
            self._store.set(error=UPDATE_ERROR)
            return None

        saved = self._keep_client_id(saved, task_id)
        tasks = tuple(saved if t.id == task_id else t for t in self.tasks)
        self._store.set(tasks=tasks, draft=Draft(), error="")
        logger.info("Updated task %s", task_id)
        return saved

    async def remove(self, task_id: str) -> bool:
        """
        Delete a task: drop it locally, ask the store, restore it on failure.

        Returns True when the store confirmed the deletion.
        """
        tasks = self.tasks
        index = next((i for i, t in enumerate(tasks) if t.id == task_id), None)
        if index is None:
            logger.debug("remove: no local task %s", task_id)
            return False

        removed = tasks[index]
        self._store.set(tasks=tasks[:index] + tasks[index + 1:])
        try:
            await self._remote.delete_task(task_id)
        except RemoteStoreError:
            logger.warning("Deleting task %s failed, restoring it", task_id, exc_info=True)
            self._restore(removed, index)
            return False

        self._store.set(error="")
        logger.info("Deleted task %s", task_id)
        return True

    async def submit(self) -> Optional[TaskRecord]:
        """Save the draft: update the edited task, or create a new one."""
        if self.draft.is_editing:
            return await self.update()
        return await self.create()

    # -------------------- helpers --------------------
    def _restore(self, record: TaskRecord, index: int) -> None:
        current = self.tasks
        if any(t.id == record.id for t in current):
            self._store.set(error=DELETE_ERROR)
            return
        # other operations may have shrunk the list in the meantime
        index = min(index, len(current))
        self._store.set(tasks=current[:index] + (record,) + current[index:], error=DELETE_ERROR)

    def _keep_client_id(self, saved: TaskRecord, task_id: str) -> TaskRecord:
        if saved.id == task_id:
            return saved
        logger.warning("Store returned id %s for task %s; keeping the client id", saved.id, task_id)
        return saved.model_copy(update={"id": task_id})
