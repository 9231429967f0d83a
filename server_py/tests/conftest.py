import pytest
from httpx import ASGITransport, AsyncClient

from chatroom.core.dependencies import get_storage
from chatroom.main import app
from chatroom.schemas.auth import SignUpRequest
from chatroom.services.memory_storage import MemoryStorage

ALICE = {
    "username": "alice",
    "email": "a@x.com",
    "password": "secret1",
    "firstName": "A",
    "lastName": "L",
}

BOB = {
    "username": "bob",
    "email": "b@x.com",
    "password": "secret2",
    "firstName": "B",
    "lastName": "M",
}


@pytest.fixture
def make_signup():
    def _make(**overrides) -> SignUpRequest:
        return SignUpRequest.model_validate({**ALICE, **overrides})

    return _make


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
async def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


@pytest.fixture
async def alice(client):
    response = await client.post("/api/auth/signup", json=ALICE)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def bob(client):
    response = await client.post("/api/auth/signup", json=BOB)
    assert response.status_code == 201
    return response.json()
