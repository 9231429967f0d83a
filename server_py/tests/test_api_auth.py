from conftest import ALICE


async def test_signup_hides_password(client):
    response = await client.post("/api/auth/signup", json=ALICE)
    assert response.status_code == 201
    body = response.json()
    assert "password" not in body
    assert body["username"] == "alice"
    assert body["firstName"] == "A"
    assert body["isOnline"] is False
    assert body["createdAt"]


async def test_duplicate_email(client, alice):
    response = await client.post("/api/auth/signup", json={**ALICE, "username": "alice2"})
    assert response.status_code == 409
    assert response.json() == {"message": "User with this email already exists"}


async def test_duplicate_username(client, alice):
    response = await client.post("/api/auth/signup", json={**ALICE, "email": "other@x.com"})
    assert response.status_code == 409
    assert response.json() == {"message": "Username already taken"}


async def test_signup_validation(client):
    response = await client.post("/api/auth/signup", json={**ALICE, "password": "123"})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation error"
    assert body["errors"]

    response = await client.post("/api/auth/signup", json={**ALICE, "email": "not-an-email"})
    assert response.status_code == 400

    response = await client.post("/api/auth/signup", json={**ALICE, "username": "al"})
    assert response.status_code == 400


async def test_signup_strips_before_length_checks(client):
    response = await client.post("/api/auth/signup", json={**ALICE, "username": "  ab "})
    assert response.status_code == 400

    response = await client.post("/api/auth/signup", json={**ALICE, "firstName": "   "})
    assert response.status_code == 400

    response = await client.post("/api/auth/signup", json={**ALICE, "username": "  alice  "})
    assert response.status_code == 201
    assert response.json()["username"] == "alice"


async def test_signin(client, alice):
    response = await client.post("/api/auth/signin", json={"email": "a@x.com", "password": "secret1"})
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == alice["id"]
    assert "password" not in body
    assert body["isOnline"] is True
    assert body["lastActivity"] is not None


async def test_signin_errors_are_undifferentiated(client, alice):
    wrong_password = await client.post("/api/auth/signin", json={"email": "a@x.com", "password": "nope"})
    unknown_email = await client.post("/api/auth/signin", json={"email": "z@x.com", "password": "secret1"})
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"message": "Invalid email or password"}


async def test_signin_requires_password(client):
    response = await client.post("/api/auth/signin", json={"email": "a@x.com", "password": ""})
    assert response.status_code == 400
