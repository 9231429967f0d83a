from datetime import timedelta

from chatroom.core.timeutil import utcnow


async def test_list_users_without_passwords(client, alice, bob):
    response = await client.get("/api/users")
    assert response.status_code == 200
    users = response.json()
    assert {u["username"] for u in users} == {"alice", "bob"}
    assert all("password" not in u for u in users)


async def test_counts(client, storage, alice, bob):
    assert (await client.get("/api/users/total")).json() == {"count": 2}
    assert (await client.get("/api/users/count")).json() == {"count": 2}

    await client.post(f"/api/users/{bob['id']}/activity")
    storage._users[bob["id"]] = storage._users[bob["id"]].model_copy(
        update={"last_activity": utcnow() - timedelta(minutes=6)}
    )
    assert (await client.get("/api/users/count")).json() == {"count": 1}
    assert (await client.get("/api/users/total")).json() == {"count": 2}


async def test_online_flags(client, storage, alice, bob):
    await client.post(f"/api/users/{alice['id']}/activity")
    response = await client.get("/api/users/online")
    assert response.status_code == 200
    # No heartbeat yet still counts as active
    flags = {u["id"]: u["isOnline"] for u in response.json()}
    assert flags == {alice["id"]: True, bob["id"]: True}

    await client.post(f"/api/users/{bob['id']}/activity")
    storage._users[bob["id"]] = storage._users[bob["id"]].model_copy(
        update={"last_activity": utcnow() - timedelta(minutes=6)}
    )
    flags = {u["id"]: u["isOnline"] for u in (await client.get("/api/users/online")).json()}
    assert flags == {alice["id"]: True, bob["id"]: False}


async def test_activity(client, alice):
    response = await client.post(f"/api/users/{alice['id']}/activity")
    assert response.status_code == 200
    assert response.json() == {"success": True}

    missing = await client.post("/api/users/424242/activity")
    assert missing.status_code == 404
    assert missing.json() == {"message": "User not found"}


async def test_profile_roundtrip(client, alice):
    url = f"/api/users/{alice['id']}/profile"
    response = await client.put(url, json={
        "bio": "Hello there",
        "location": "Lisbon",
        "website": "https://alice.dev",
        "dateOfBirth": "1990-04-01",
    })
    assert response.status_code == 200
    body = response.json()
    assert body["bio"] == "Hello there"
    assert body["dateOfBirth"] == "1990-04-01"
    assert body["lastActivity"] is not None
    assert "password" not in body

    fetched = (await client.get(url)).json()
    assert fetched["website"] == "https://alice.dev"
    assert fetched["firstName"] == "A"

    cleared = (await client.put(url, json={"bio": "", "website": ""})).json()
    assert cleared["bio"] is None
    assert cleared["website"] is None
    assert cleared["location"] == "Lisbon"


async def test_profile_validation(client, alice):
    url = f"/api/users/{alice['id']}/profile"
    response = await client.put(url, json={"website": "not a url"})
    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"

    assert (await client.put(url, json={"bio": "x" * 501})).status_code == 400
    assert (await client.put(url, json={"firstName": "x" * 51})).status_code == 400
    assert (await client.put(url, json={"dateOfBirth": "yesterday"})).status_code == 400


async def test_oversized_avatar(client, storage, alice):
    storage.avatar_max_bytes = 32
    url = f"/api/users/{alice['id']}/profile"

    response = await client.put(url, json={"avatar": "data:image/png;base64," + "A" * 64})
    assert response.status_code == 413
    assert (await client.get(url)).json()["avatar"] is None

    small = await client.put(url, json={"avatar": "data:image/png;base64,AA"})
    assert small.status_code == 200
    assert small.json()["avatar"] == "data:image/png;base64,AA"


async def test_missing_profile(client):
    assert (await client.get("/api/users/424242/profile")).status_code == 404
    assert (await client.put("/api/users/424242/profile", json={"bio": "x"})).status_code == 404


async def test_message_count(client, alice, bob):
    for _ in range(3):
        await client.post("/api/messages", json={"content": "hi", "username": "A L", "userId": alice["id"]})
    assert (await client.get(f"/api/users/{alice['id']}/messages/count")).json() == {"count": 3}
    assert (await client.get(f"/api/users/{bob['id']}/messages/count")).json() == {"count": 0}
