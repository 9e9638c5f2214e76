import os
import tempfile

# Настройки читаются при импорте taskboard.config, поэтому окружение задается раньше
_TEST_DIR = tempfile.mkdtemp(prefix="taskboard-tests-")
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/taskboard.db"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["AUTO_CREATE_TABLES"] = "false"

from typing import Any, Dict  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402

from taskboard.api.http.auth import get_identity_verifier  # noqa: E402
from taskboard.core.db import Base, SessionLocal, create_tables, engine  # noqa: E402
from taskboard.core.errors import AuthenticationError  # noqa: E402
from taskboard.domains.identity.entities import ExternalIdentity  # noqa: E402
from taskboard.domains.identity.google import identity_from_claims  # noqa: E402
from taskboard.main import app  # noqa: E402


class FakeGoogleVerifier:
    """Подмена проверки Google: credential -> заранее заданные claims"""

    def __init__(self):
        self.claims: Dict[str, Dict[str, Any]] = {}

    def register(self, credential: str, **claims) -> str:
        self.claims[credential] = claims
        return credential

    async def verify(self, credential: str) -> ExternalIdentity:
        if credential not in self.claims:
            raise AuthenticationError("Invalid Google credential")
        return identity_from_claims(self.claims[credential])


@pytest.fixture
async def db():
    await create_tables()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(db):
    async with SessionLocal() as session:
        yield session


@pytest.fixture
def verifier():
    fake = FakeGoogleVerifier()
    app.dependency_overrides[get_identity_verifier] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_identity_verifier, None)


@pytest.fixture
def transport():
    return httpx.ASGITransport(app=app)


@pytest.fixture
async def client(db, verifier, transport):
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def login(client, verifier):
    """Вход пользователя через подмененный Google, возвращает заголовки и профиль"""

    async def _login(sub: str = "google-ann", email: str = "ann@example.com", name: str = "Ann", **claims):
        credential = verifier.register(f"credential-{sub}", sub=sub, email=email, name=name, **claims)
        response = await client.post("/api/auth/google", json={"credential": credential})
        assert response.status_code == 200, response.text
        data = response.json()
        return {"Authorization": f"Bearer {data['token']}"}, data["user"]

    return _login


@pytest.fixture
def make_canvas(client):
    async def _make_canvas(headers, name: str = "Work") -> Dict[str, Any]:
        response = await client.post("/api/canvases", json={"name": name}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_canvas


def wire_node(node_id: str, **fields) -> Dict[str, Any]:
    node = {
        "id": node_id,
        "title": node_id,
        "x": 0,
        "y": 0,
        "priority": "none",
        "completed": False,
        "parentId": None,
        "dueDate": None,
    }
    node.update(fields)
    return node
