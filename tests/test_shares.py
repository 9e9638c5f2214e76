import re

from tests.conftest import wire_node


async def create_share(client, canvas_id, headers, mode=None):
    body = {} if mode is None else {"mode": mode}
    response = await client.post(f"/api/canvases/{canvas_id}/shares", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateShare:
    async def test_default_mode_is_view(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)

        share = await create_share(client, canvas["id"], headers)

        assert share["mode"] == "view"
        assert share["canvasId"] == canvas["id"]
        assert re.fullmatch(r"[0-9a-f]{40}", share["token"])

    async def test_unknown_mode_falls_back_to_view(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)

        share = await create_share(client, canvas["id"], headers, mode="admin")

        assert share["mode"] == "view"

    async def test_tokens_are_unique(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)

        tokens = {(await create_share(client, canvas["id"], headers, "edit"))["token"] for _ in range(5)}

        assert len(tokens) == 5

    async def test_foreign_canvas_cannot_be_shared(self, client, login, make_canvas):
        ann, _ = await login("g-ann", "ann@example.com", "Ann")
        bob, _ = await login("g-bob", "bob@example.com", "Bob")
        canvas = await make_canvas(ann)

        response = await client.post(f"/api/canvases/{canvas['id']}/shares", json={"mode": "edit"}, headers=bob)

        assert response.status_code == 404


class TestListShares:
    async def test_lists_in_creation_order(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)
        first = await create_share(client, canvas["id"], headers, "view")
        second = await create_share(client, canvas["id"], headers, "edit")

        response = await client.get(f"/api/canvases/{canvas['id']}/shares", headers=headers)

        assert [s["id"] for s in response.json()] == [first["id"], second["id"]]

    async def test_foreign_canvas_shares_are_hidden(self, client, login, make_canvas):
        ann, _ = await login("g-ann", "ann@example.com", "Ann")
        bob, _ = await login("g-bob", "bob@example.com", "Bob")
        canvas = await make_canvas(ann)
        await create_share(client, canvas["id"], ann)

        response = await client.get(f"/api/canvases/{canvas['id']}/shares", headers=bob)

        assert response.status_code == 404


class TestSharedAccess:
    async def test_open_shared_canvas(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers, "Team")
        await client.put(f"/api/canvases/{canvas['id']}/nodes", json={"nodes": [wire_node("a")]}, headers=headers)
        share = await create_share(client, canvas["id"], headers)

        response = await client.get(f"/api/canvases/shared/{share['token']}")

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "view"
        assert data["canvas"]["id"] == canvas["id"]
        assert data["canvas"]["name"] == "Team"
        assert data["nodes"] == [wire_node("a")]

    async def test_unknown_token(self, client, db):
        response = await client.get("/api/canvases/shared/" + "0" * 40)

        assert response.status_code == 404
        assert response.json() == {"error": "Invalid or expired link"}

    async def test_view_link_cannot_replace(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)
        await client.put(f"/api/canvases/{canvas['id']}/nodes", json={"nodes": [wire_node("a")]}, headers=headers)
        share = await create_share(client, canvas["id"], headers, "view")

        response = await client.put(f"/api/canvases/shared/{share['token']}/nodes", json={"nodes": []})

        assert response.status_code == 403
        assert response.json() == {"error": "Read-only link"}
        nodes = await client.get(f"/api/canvases/{canvas['id']}/nodes", headers=headers)
        assert nodes.json() == [wire_node("a")]

    async def test_edit_link_replaces_nodes(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)
        share = await create_share(client, canvas["id"], headers, "edit")

        response = await client.put(
            f"/api/canvases/shared/{share['token']}/nodes",
            json={"nodes": [wire_node("guest", priority="medium")]}
        )

        assert response.status_code == 200
        assert response.json() == {"saved": 1}
        nodes = await client.get(f"/api/canvases/{canvas['id']}/nodes", headers=headers)
        assert nodes.json() == [wire_node("guest", priority="medium")]

    async def test_edit_link_replace_touches_canvas(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)
        share = await create_share(client, canvas["id"], headers, "edit")

        await client.put(f"/api/canvases/shared/{share['token']}/nodes", json={"nodes": [wire_node("guest")]})

        listed = (await client.get("/api/canvases", headers=headers)).json()
        shared = (await client.get(f"/api/canvases/shared/{share['token']}")).json()
        assert listed[0]["updatedAt"] > canvas["updatedAt"]
        assert shared["canvas"]["updatedAt"] == listed[0]["updatedAt"]

    async def test_edit_link_validates_snapshot(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)
        share = await create_share(client, canvas["id"], headers, "edit")

        response = await client.put(
            f"/api/canvases/shared/{share['token']}/nodes",
            json={"nodes": [wire_node("a", priority="critical")]}
        )

        assert response.status_code == 400


class TestRevokeShare:
    async def test_revoked_token_stops_working(self, client, login, make_canvas):
        headers, _ = await login()
        canvas = await make_canvas(headers)
        share = await create_share(client, canvas["id"], headers, "edit")

        response = await client.delete(f"/api/canvases/{canvas['id']}/shares/{share['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Link revoked"}
        assert (await client.get(f"/api/canvases/shared/{share['token']}")).status_code == 404
        put = await client.put(f"/api/canvases/shared/{share['token']}/nodes", json={"nodes": []})
        assert put.status_code == 404

    async def test_share_id_must_belong_to_canvas(self, client, login, make_canvas):
        headers, _ = await login()
        first = await make_canvas(headers, "First")
        second = await make_canvas(headers, "Second")
        share = await create_share(client, first["id"], headers)

        response = await client.delete(f"/api/canvases/{second['id']}/shares/{share['id']}", headers=headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Share not found"}
        assert (await client.get(f"/api/canvases/shared/{share['token']}")).status_code == 200

    async def test_other_user_cannot_revoke(self, client, login, make_canvas):
        ann, _ = await login("g-ann", "ann@example.com", "Ann")
        bob, _ = await login("g-bob", "bob@example.com", "Bob")
        canvas = await make_canvas(ann)
        share = await create_share(client, canvas["id"], ann)

        response = await client.delete(f"/api/canvases/{canvas['id']}/shares/{share['id']}", headers=bob)

        assert response.status_code == 404
        assert (await client.get(f"/api/canvases/shared/{share['token']}")).status_code == 200
