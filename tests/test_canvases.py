from sqlalchemy import func, select

from taskboard.db.models.node import Node as NodeModel
from taskboard.db.models.share import Share as ShareModel
from tests.conftest import wire_node


async def count_rows(session, model, canvas_id):
    stmt = select(func.count()).select_from(model).where(model.canvas_id == canvas_id)
    return await session.scalar(stmt)


class TestCreateCanvas:
    async def test_create_with_name(self, client, login):
        headers, user = await login()

        response = await client.post("/api/canvases", json={"name": "Work"}, headers=headers)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Work"
        assert data["userId"] == user["id"]
        assert set(data) == {"id", "userId", "name", "createdAt", "updatedAt"}

    async def test_blank_name_gets_default(self, client, login):
        headers, _ = await login()

        without_name = await client.post("/api/canvases", json={}, headers=headers)
        blank_name = await client.post("/api/canvases", json={"name": "  "}, headers=headers)

        assert without_name.json()["name"] == "New canvas"
        assert blank_name.json()["name"] == "New canvas"

    async def test_long_name_is_truncated(self, client, login):
        headers, _ = await login()

        response = await client.post("/api/canvases", json={"name": "x" * 150}, headers=headers)

        assert response.json()["name"] == "x" * 100


class TestListCanvases:
    async def test_only_own_canvases_are_listed(self, client, login, make_canvas):
        ann, _ = await login("g-ann", "ann@example.com", "Ann")
        bob, _ = await login("g-bob", "bob@example.com", "Bob")
        await make_canvas(ann, "Ann's plans")

        response = await client.get("/api/canvases", headers=bob)

        assert [c["name"] for c in response.json()] == ["My workspace"]

    async def test_recently_updated_first(self, client, login, make_canvas):
        headers, _ = await login()
        first = await make_canvas(headers, "First")
        await make_canvas(headers, "Second")

        await client.put(f"/api/canvases/{first['id']}/nodes", json={"nodes": [wire_node("a")]}, headers=headers)

        response = await client.get("/api/canvases", headers=headers)
        assert [c["name"] for c in response.json()] == ["First", "Second", "My workspace"]


class TestRenameCanvas:
    async def test_rename(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)

        response = await client.patch(f"/api/canvases/{canvas['id']}", json={"name": "Home"}, headers=headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Home"
        assert response.json()["updatedAt"] >= canvas["updatedAt"]

    async def test_empty_name_is_rejected(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)

        response = await client.patch(f"/api/canvases/{canvas['id']}", json={"name": ""}, headers=headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Name is required"}

    async def test_long_name_is_stored_truncated(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)

        await client.patch(f"/api/canvases/{canvas['id']}", json={"name": "y" * 150}, headers=headers)

        names = [c["name"] for c in (await client.get("/api/canvases", headers=headers)).json()]
        assert "y" * 100 in names

    async def test_foreign_canvas_is_not_found(self, client, login, make_canvas):
        ann, _ = await login("g-ann", "ann@example.com", "Ann")
        bob, _ = await login("g-bob", "bob@example.com", "Bob")
        canvas = await make_canvas(ann)

        response = await client.patch(f"/api/canvases/{canvas['id']}", json={"name": "Mine"}, headers=bob)

        assert response.status_code == 404
        assert response.json() == {"error": "Canvas not found"}


class TestDeleteCanvas:
    async def test_delete_cascades_to_nodes_and_shares(self, client, session, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)
        await client.put(f"/api/canvases/{canvas['id']}/nodes", json={"nodes": [wire_node("a")]}, headers=headers)
        share = (await client.post(f"/api/canvases/{canvas['id']}/shares", json={"mode": "edit"}, headers=headers)).json()

        response = await client.delete(f"/api/canvases/{canvas['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Canvas deleted"}
        assert (await client.get(f"/api/canvases/{canvas['id']}/nodes", headers=headers)).status_code == 404
        assert (await client.get(f"/api/canvases/shared/{share['token']}")).status_code == 404
        assert await count_rows(session, NodeModel, canvas["id"]) == 0
        assert await count_rows(session, ShareModel, canvas["id"]) == 0

    async def test_foreign_canvas_is_not_deleted(self, client, login, make_canvas):
        ann, _ = await login("g-ann", "ann@example.com", "Ann")
        bob, _ = await login("g-bob", "bob@example.com", "Bob")
        canvas = await make_canvas(ann)

        response = await client.delete(f"/api/canvases/{canvas['id']}", headers=bob)

        assert response.status_code == 404
        names = [c["name"] for c in (await client.get("/api/canvases", headers=ann)).json()]
        assert canvas["name"] in names

    async def test_unknown_canvas(self, client, login):
        headers, _ = await login()

        response = await client.delete("/api/canvases/does-not-exist", headers=headers)

        assert response.status_code == 404


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
