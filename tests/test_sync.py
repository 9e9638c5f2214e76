import asyncio
from typing import Any, Dict, List

import pytest

from taskboard.client import tree
from taskboard.client.api import ApiError, SharedCanvasClient, TaskboardClient
from taskboard.client.sync import CanvasSync
from taskboard.client.tree import Node

DELAY = 0.02


class MemoryStore:
    """Хранилище узлов в памяти, ошибки включаются флагом"""

    def __init__(self, nodes: List[Dict[str, Any]] = None):
        self.nodes = list(nodes or [])
        self.saves: List[List[Dict[str, Any]]] = []
        self.fail = False

    async def load_nodes(self) -> List[Dict[str, Any]]:
        return list(self.nodes)

    async def save_nodes(self, nodes: List[Dict[str, Any]]) -> int:
        if self.fail:
            raise ApiError(500, "Internal server error")
        self.saves.append(nodes)
        self.nodes = list(nodes)
        return len(nodes)


async def settle():
    await asyncio.sleep(DELAY * 5)


class TestAutosave:
    async def test_rapid_mutations_are_one_push(self):
        store = MemoryStore()
        sync = CanvasSync(store, delay=DELAY)

        sync.mutate(tree.add_node, "a", title="A")
        sync.mutate(tree.cycle_priority, "a")
        sync.mutate(tree.toggle_completed, "a")
        assert sync.saving

        await settle()

        assert not sync.saving
        assert len(store.saves) == 1
        assert store.nodes == [Node("a", "A", priority="low", completed=True).to_wire()]

    async def test_noop_mutation_does_not_push(self):
        store = MemoryStore()
        sync = CanvasSync(store, delay=DELAY)

        sync.mutate(tree.toggle_completed, "missing")

        assert not sync.saving
        await settle()
        assert store.saves == []

    async def test_undo_and_redo_are_pushed(self):
        store = MemoryStore()
        sync = CanvasSync(store, delay=DELAY)
        sync.mutate(tree.add_node, "a", title="A")
        await settle()

        sync.undo()
        await settle()
        assert store.nodes == []

        sync.redo()
        await settle()
        assert [n["id"] for n in store.nodes] == ["a"]

    async def test_flush_pushes_immediately(self):
        store = MemoryStore()
        sync = CanvasSync(store, delay=10)
        sync.mutate(tree.add_node, "a")

        assert await sync.flush() is True

        assert len(store.saves) == 1
        assert not sync.dirty

    async def test_load_replaces_state_and_history(self):
        store = MemoryStore([Node("x", "From server").to_wire()])
        sync = CanvasSync(store, delay=DELAY)
        sync.mutate(tree.add_node, "local")

        await sync.load()

        assert sync.nodes == (Node("x", "From server"),)
        assert not sync.state.can_undo
        assert not sync.saving


class SlowFirstStore(MemoryStore):
    """Первое сохранение отвечает дольше, чем длится задержка автосохранения"""

    async def save_nodes(self, nodes: List[Dict[str, Any]]) -> int:
        if not self.saves:
            await asyncio.sleep(DELAY * 10)
        return await super().save_nodes(nodes)


class TestPushOrdering:
    async def test_edit_during_slow_push_is_saved_after_it(self):
        store = SlowFirstStore()
        sync = CanvasSync(store, delay=DELAY)

        sync.mutate(tree.add_node, "a")
        await asyncio.sleep(DELAY * 2.5)
        sync.mutate(tree.add_node, "b")
        await asyncio.sleep(DELAY * 2.5)
        assert sync.saving

        await asyncio.sleep(DELAY * 15)

        assert [n["id"] for n in store.nodes] == ["a", "b"]
        assert [[n["id"] for n in save] for save in store.saves] == [["a"], ["a", "b"]]
        assert not sync.saving
        assert not sync.dirty
        assert sync.save_error is None

    async def test_flush_waits_for_push_in_flight(self):
        store = SlowFirstStore()
        sync = CanvasSync(store, delay=DELAY)

        sync.mutate(tree.add_node, "a")
        await asyncio.sleep(DELAY * 2.5)
        sync.mutate(tree.add_node, "b")

        assert await sync.flush() is True

        assert [n["id"] for n in store.nodes] == ["a", "b"]
        assert not sync.saving


class TestSaveFailure:
    async def test_failure_is_surfaced_and_retried(self):
        store = MemoryStore()
        errors = []
        sync = CanvasSync(store, delay=DELAY, on_save_error=errors.append)
        store.fail = True

        sync.mutate(tree.add_node, "a")
        await settle()

        assert isinstance(sync.save_error, ApiError)
        assert errors == [sync.save_error]
        assert sync.dirty

        store.fail = False
        assert await sync.flush() is True

        assert sync.save_error is None
        assert [n["id"] for n in store.nodes] == ["a"]


@pytest.fixture
async def owner_client(db, verifier, transport):
    verifier.register("sync-credential", sub="g-sync", email="sync@example.com", name="Sync")
    client = TaskboardClient("http://test", transport=transport)
    await client.login_with_google("sync-credential")
    yield client
    await client.aclose()


class TestAgainstServer:
    async def test_owner_edits_reach_server(self, owner_client):
        canvas = await owner_client.create_canvas("Synced")
        sync = CanvasSync(owner_client.node_store(canvas["id"]), delay=DELAY)
        await sync.load()

        sync.mutate(tree.add_node, "parent", title="Parent")
        sync.mutate(tree.add_node, "child", parent_id="parent", title="Child")
        await sync.flush()

        nodes = await owner_client.get_nodes(canvas["id"])
        assert [(n["id"], n["parentId"]) for n in nodes] == [("parent", None), ("child", "parent")]

    async def test_delete_of_parent_removes_subtree_on_server(self, owner_client):
        canvas = await owner_client.create_canvas()
        sync = CanvasSync(owner_client.node_store(canvas["id"]), delay=DELAY)
        sync.mutate(tree.add_node, "p")
        sync.mutate(tree.add_node, "c", parent_id="p")
        sync.mutate(tree.add_node, "g", parent_id="c")
        sync.mutate(tree.add_node, "other")
        await sync.flush()

        sync.mutate(tree.delete_node, "p")
        await sync.flush()

        assert [n["id"] for n in await owner_client.get_nodes(canvas["id"])] == ["other"]

    async def test_view_link_save_is_surfaced(self, owner_client, transport):
        canvas = await owner_client.create_canvas()
        share = await owner_client.create_share(canvas["id"], "view")
        guest = SharedCanvasClient("http://test", share["token"], transport=transport)
        errors = []
        sync = CanvasSync(guest, delay=DELAY, on_save_error=errors.append)
        await sync.load()
        assert guest.mode == "view"

        sync.mutate(tree.add_node, "intruder")
        assert await sync.flush() is False

        assert isinstance(errors[0], ApiError)
        assert errors[0].status_code == 403
        assert await owner_client.get_nodes(canvas["id"]) == []
        await guest.aclose()

    async def test_api_error_carries_server_message(self, owner_client):
        with pytest.raises(ApiError) as excinfo:
            await owner_client.rename_canvas("missing", "x")

        assert excinfo.value.status_code == 404
        assert excinfo.value.message == "Canvas not found"

    async def test_logout_drops_token(self, owner_client):
        await owner_client.logout()

        with pytest.raises(ApiError) as excinfo:
            await owner_client.me()

        assert excinfo.value.status_code == 401
