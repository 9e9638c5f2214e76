"""HTTP клиент REST API доски задач на httpx.

Ответы с ошибкой превращаются в ``ApiError`` с текстом из тела ``{"error": ...}``.
"""
from typing import Any, Dict, List, Optional

import httpx

DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class _BaseClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    def _headers(self) -> Dict[str, str]:
        return {}

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        response = await self._client.request(method, path, json=json, headers=self._headers())

        if response.is_error:
            try:
                message = response.json().get("error") or response.reason_phrase
            except ValueError:
                message = response.text or response.reason_phrase
            raise ApiError(response.status_code, message)

        return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()


class TaskboardClient(_BaseClient):
    """Клиент владельца холстов, авторизация по Bearer токену"""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(base_url, timeout, transport)
        self.token = token

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    # Аутентификация

    async def login_with_google(self, credential: str) -> Dict[str, Any]:
        data = await self._request("POST", "/api/auth/google", {"credential": credential})
        self.token = data["token"]
        return data["user"]

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/auth/me")

    async def set_dark_mode(self, enabled: bool) -> bool:
        data = await self._request("PATCH", "/api/auth/me/darkmode", {"darkMode": enabled})
        return data["darkMode"]

    async def logout(self) -> None:
        await self._request("POST", "/api/auth/logout")
        self.token = None

    # Холсты

    async def list_canvases(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/canvases")

    async def create_canvas(self, name: Optional[str] = None) -> Dict[str, Any]:
        return await self._request("POST", "/api/canvases", {"name": name})

    async def rename_canvas(self, canvas_id: str, name: str) -> Dict[str, Any]:
        return await self._request("PATCH", f"/api/canvases/{canvas_id}", {"name": name})

    async def delete_canvas(self, canvas_id: str) -> None:
        await self._request("DELETE", f"/api/canvases/{canvas_id}")

    # Узлы

    async def get_nodes(self, canvas_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/api/canvases/{canvas_id}/nodes")

    async def replace_nodes(self, canvas_id: str, nodes: List[Dict[str, Any]]) -> int:
        data = await self._request("PUT", f"/api/canvases/{canvas_id}/nodes", {"nodes": nodes})
        return data["saved"]

    def node_store(self, canvas_id: str) -> "CanvasNodeStore":
        return CanvasNodeStore(self, canvas_id)

    # Ссылки доступа

    async def list_shares(self, canvas_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/api/canvases/{canvas_id}/shares")

    async def create_share(self, canvas_id: str, mode: str = "view") -> Dict[str, Any]:
        return await self._request("POST", f"/api/canvases/{canvas_id}/shares", {"mode": mode})

    async def revoke_share(self, canvas_id: str, share_id: str) -> None:
        await self._request("DELETE", f"/api/canvases/{canvas_id}/shares/{share_id}")


class CanvasNodeStore:
    """Узлы одного холста владельца для CanvasSync"""

    def __init__(self, client: TaskboardClient, canvas_id: str):
        self.client = client
        self.canvas_id = canvas_id

    async def load_nodes(self) -> List[Dict[str, Any]]:
        return await self.client.get_nodes(self.canvas_id)

    async def save_nodes(self, nodes: List[Dict[str, Any]]) -> int:
        return await self.client.replace_nodes(self.canvas_id, nodes)


class SharedCanvasClient(_BaseClient):
    """Доступ к холсту по токену ссылки, без учетной записи"""

    def __init__(
        self,
        base_url: str,
        share_token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(base_url, timeout, transport)
        self.share_token = share_token
        self.mode: Optional[str] = None

    @property
    def can_edit(self) -> bool:
        return self.mode == "edit"

    async def open(self) -> Dict[str, Any]:
        data = await self._request("GET", f"/api/canvases/shared/{self.share_token}")
        self.mode = data["mode"]
        return data

    async def load_nodes(self) -> List[Dict[str, Any]]:
        data = await self.open()
        return data["nodes"]

    async def save_nodes(self, nodes: List[Dict[str, Any]]) -> int:
        data = await self._request(
            "PUT", f"/api/canvases/shared/{self.share_token}/nodes", {"nodes": nodes}
        )
        return data["saved"]
