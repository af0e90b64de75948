from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ...schemas import TaskCreate, TaskRecord, TaskReplace
from ..repositories import DuplicateTaskError, Repository

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
)


def _get_repo(request: Request) -> Repository:
    """
    Dependency returning the repository bound to the running application.
    """
    return request.app.state.repository


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TaskRecord],
    summary="List Tasks",
    description="Return every task in insertion order.",
    responses={200: {"description": "List retrieved successfully"}},
)
def list_tasks(repo: Repository = Depends(_get_repo)) -> List[TaskRecord]:
    """
    List all tasks.
    """
    return repo.list()


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Store a new task under its client-generated id and return the stored record.",
    responses={
        201: {"description": "Task created successfully"},
        409: {"description": "A task with this id already exists"},
        422: {"description": "Validation error"},
    },
)
def create_task(payload: TaskCreate, repo: Repository = Depends(_get_repo)) -> TaskRecord:
    """
    Create a new Task.
    """
    try:
        created = repo.create(payload)
    except DuplicateTaskError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Task already exists") from exc
    logger.info("Task created id=%s", created.id)
    return created


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}",
    response_model=TaskRecord,
    summary="Replace Task",
    description=(
        "Replace name, description and timestamp of an existing task. "
        "The id in the path identifies the task; any id in the body is ignored."
    ),
    responses={
        200: {"description": "Task updated"},
        404: {"description": "Task not found"},
    },
)
def replace_task(task_id: str, payload: TaskReplace, repo: Repository = Depends(_get_repo)) -> TaskRecord:
    """
    Full update (replace) of a Task.
    """
    updated = repo.replace(task_id, payload)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    logger.info("Task updated id=%s", task_id)
    return updated


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Task",
    description="Delete a task by id.",
    responses={
        204: {"description": "Task deleted"},
        404: {"description": "Task not found"},
    },
)
def delete_task(task_id: str, repo: Repository = Depends(_get_repo)) -> Response:
    """
    Delete a Task. Returns 204 on success, 404 if not found.
    """
    if not repo.delete(task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    logger.info("Task deleted id=%s", task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
