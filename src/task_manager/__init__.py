"""
Task manager package.

- ``task_manager.client``: task synchronization controller and the async
  HTTP client for the remote task store.
- ``task_manager.api``: reference FastAPI implementation of the remote task
  store.
"""

__version__ = "0.1.0"
