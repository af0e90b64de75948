from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..schemas import TaskRecord
from .errors import FetchFailed, ServerRejected

logger = logging.getLogger(__name__)


class TaskRemote(Protocol):
    """
    What the synchronization controller needs from the remote task store.

    ``RemoteTaskStore`` is the HTTP implementation; tests substitute fakes.
    Every method raises ``RemoteStoreError`` subclasses on failure.
    """

    async def list_tasks(self) -> List[TaskRecord]: ...

    async def create_task(self, task: TaskRecord) -> TaskRecord: ...

    async def replace_task(self, task_id: str, task: TaskRecord) -> TaskRecord: ...

    async def delete_task(self, task_id: str) -> None: ...


def _task_path(task_id: str) -> str:
    return f"/tasks/{quote(task_id, safe='')}"


def _detail(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or None
    if isinstance(body, dict):
        detail = body.get("message") or body.get("detail")
        return str(detail) if detail else None
    return None


# PUBLIC_INTERFACE
class RemoteTaskStore:
    """
    Async client for the remote task store REST API.

    Endpoints are resolved against ``base_url``:
    - GET    /tasks         -> list of tasks
    - POST   /tasks         -> created task
    - PUT    /tasks/{id}    -> updated task
    - DELETE /tasks/{id}    -> 2xx on success

    Transport failures raise FetchFailed; non-2xx responses and malformed
    bodies raise ServerRejected. Requests are not retried. ``timeout=None``
    (the default) lets a request wait indefinitely.

    Use as an async context manager, or call ``aclose()`` when done. An
    externally supplied ``client`` is not closed by this object.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "RemoteTaskStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc.__class__.__name__)
            raise FetchFailed(f"{method} {path} failed: {exc}") from exc

        if not response.is_success:
            logger.warning("%s %s rejected with HTTP %s", method, path, response.status_code)
            raise ServerRejected(response.status_code, _detail(response))
        logger.debug("%s %s -> HTTP %s", method, path, response.status_code)
        return response

    def _decode(self, response: httpx.Response, *, many: bool = False) -> Any:
        try:
            body = response.json()
            if many:
                # Go stores encode an empty collection as null
                if body is None:
                    return []
                if not isinstance(body, list):
                    raise ServerRejected(response.status_code, "expected a list of tasks")
                return [TaskRecord.model_validate(item) for item in body]
            return TaskRecord.model_validate(body)
        except (ValueError, ValidationError) as exc:
            raise ServerRejected(response.status_code, "malformed task payload") from exc

    async def list_tasks(self) -> List[TaskRecord]:
        response = await self._request("GET", "/tasks")
        return self._decode(response, many=True)

    async def create_task(self, task: TaskRecord) -> TaskRecord:
        response = await self._request("POST", "/tasks", json=task.to_wire())
        return self._decode(response)

    async def replace_task(self, task_id: str, task: TaskRecord) -> TaskRecord:
        response = await self._request("PUT", _task_path(task_id), json=task.to_wire())
        return self._decode(response)

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", _task_path(task_id))
