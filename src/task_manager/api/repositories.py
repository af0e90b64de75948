from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from threading import RLock
from typing import Dict, List, Optional

from ..schemas import TaskCreate, TaskRecord, TaskReplace
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)


class DuplicateTaskError(Exception):
    """Raised when a task is created with an id that is already stored."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id!r} already exists")
        self.task_id = task_id


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for task storage backends."""

    @abstractmethod
    def create(self, data: TaskCreate) -> TaskRecord:
        """Store a new task under its client-assigned id and return it. Raises DuplicateTaskError."""

    @abstractmethod
    def get(self, task_id: str) -> Optional[TaskRecord]:
        """Return a task by id, or None if not found."""

    @abstractmethod
    def replace(self, task_id: str, data: TaskReplace) -> Optional[TaskRecord]:
        """Replace every field of an existing task. Return the stored record or None if not found."""

    @abstractmethod
    def delete(self, task_id: str) -> bool:
        """Delete a task by id. Return True if deleted, False if not found."""

    @abstractmethod
    def list(self) -> List[TaskRecord]:
        """Return all tasks in insertion order."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        # dicts keep insertion order, which is the listing order
        self._items: Dict[str, TaskRecord] = {}

    def create(self, data: TaskCreate) -> TaskRecord:
        record = TaskRecord(
            id=data.id,
            name=data.name,
            description=data.description,
            created_at=data.created_at,
        )
        with self._lock:
            if record.id in self._items:
                raise DuplicateTaskError(record.id)
            self._items[record.id] = record
        return record

    def get(self, task_id: str) -> Optional[TaskRecord]:
        with self._lock:
            return self._items.get(task_id)

    def replace(self, task_id: str, data: TaskReplace) -> Optional[TaskRecord]:
        with self._lock:
            if task_id not in self._items:
                return None
            record = TaskRecord(
                id=task_id,
                name=data.name,
                description=data.description,
                created_at=data.created_at,
            )
            # assignment to an existing key keeps its position
            self._items[task_id] = record
            return record

    def delete(self, task_id: str) -> bool:
        with self._lock:
            return self._items.pop(task_id, None) is not None

    def list(self) -> List[TaskRecord]:
        with self._lock:
            return list(self._items.values())


# PUBLIC_INTERFACE
def build_repository(settings: Optional[Settings] = None) -> Repository:
    """
    Factory to return the configured repository based on settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository
    """
    settings = settings or get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        logger.info("Using sqlite task repository at %s", settings.sqlite_db_path)
        return SQLiteRepository(settings.sqlite_db_path)
    logger.info("Using in-memory task repository")
    return InMemoryRepository()
