from __future__ import annotations

import httpx
import pytest

from task_manager.api.main import create_app
from task_manager.api.repositories import InMemoryRepository
from task_manager.client.controller import DELETE_ERROR, UPDATE_ERROR, TaskSyncController
from task_manager.client.remote import RemoteTaskStore
from task_manager.client.state import Draft

BASE_URL = "http://testserver/api"


@pytest.mark.asyncio
async def test_controller_against_reference_store(settings) -> None:
    repository = InMemoryRepository()
    transport = httpx.ASGITransport(app=create_app(settings, repository=repository))

    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as client:
        controller = TaskSyncController(RemoteTaskStore(BASE_URL, client=client))
        assert await controller.load() is True
        assert controller.tasks == ()

        controller.set_draft(name="  Buy milk ", description="2 litres")
        milk = await controller.submit()
        await controller.create(Draft(name="Walk dog"))
        assert milk is not None and milk.name == "Buy milk"
        assert [t.name for t in controller.visible_tasks("")] == ["Buy milk", "Walk dog"]

        controller.begin_edit(milk.id)
        controller.set_draft(name="Buy oat milk")
        await controller.submit()
        assert controller.tasks[0].name == "Buy oat milk"
        assert [t.name for t in repository.list()] == ["Buy oat milk", "Walk dog"]

        assert await controller.remove(milk.id) is True
        assert [t.name for t in repository.list()] == ["Walk dog"]

        # a fresh controller sees what the store kept
        other = TaskSyncController(RemoteTaskStore(BASE_URL, client=client))
        await other.load()
        assert other.tasks == controller.tasks


@pytest.mark.asyncio
async def test_store_rejections_surface_as_errors(settings) -> None:
    repository = InMemoryRepository()
    transport = httpx.ASGITransport(app=create_app(settings, repository=repository))

    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as client:
        controller = TaskSyncController(RemoteTaskStore(BASE_URL, client=client))
        task = await controller.create(Draft(name="ephemeral"))
        assert task is not None

        # deleted behind the controller's back
        repository.delete(task.id)

        controller.begin_edit(task.id)
        controller.set_draft(name="renamed")
        assert await controller.update() is None
        assert controller.error == UPDATE_ERROR
        assert controller.draft.editing_id == task.id

        assert await controller.remove(task.id) is False
        assert controller.error == DELETE_ERROR
        assert [t.id for t in controller.tasks] == [task.id]
