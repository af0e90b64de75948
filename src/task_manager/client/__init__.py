"""
Client side of the task manager: the synchronization controller, its state
store, the name filter and the HTTP client for the remote task store.
"""

from .controller import TaskSyncController
from .errors import FetchFailed, RemoteStoreError, ServerRejected
from .filtering import TaskFilter, filter_tasks
from .remote import RemoteTaskStore, TaskRemote
from .state import Draft, StateStore, TaskState

__all__ = [
    "Draft",
    "FetchFailed",
    "RemoteStoreError",
    "RemoteTaskStore",
    "ServerRejected",
    "StateStore",
    "TaskFilter",
    "TaskRemote",
    "TaskState",
    "TaskSyncController",
    "filter_tasks",
]
