"""
FastAPI implementation of the remote task store.

Import ``create_app`` from ``task_manager.api.main`` to build an application
instance. Nothing is built at import time; ``run()`` builds the instance
configured from the environment, and ``uvicorn --factory
task_manager.api.main:create_app`` does the same.
"""
