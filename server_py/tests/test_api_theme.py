async def test_default_theme(client):
    response = await client.get("/api/theme")
    assert response.status_code == 200
    body = response.json()
    assert body["currentTheme"]["id"] == 1
    assert body["currentTheme"]["primaryColor"] == "#3b82f6"
    assert len(body["availableThemes"]) == 6


async def test_switch_theme(client):
    response = await client.post("/api/theme", json={"themeId": 6})
    assert response.status_code == 200
    body = response.json()
    assert body["currentTheme"]["name"] == "Dark Mode"
    assert [t["id"] for t in body["availableThemes"] if t["isActive"]] == [6]

    assert (await client.get("/api/v1/theme")).json()["currentTheme"]["id"] == 6


async def test_unknown_theme(client):
    await client.post("/api/theme", json={"themeId": 3})
    response = await client.post("/api/theme", json={"themeId": 99})
    assert response.status_code == 404
    assert response.json() == {"message": "Theme with ID 99 not found"}
    assert (await client.get("/api/theme")).json()["currentTheme"]["id"] == 3


async def test_theme_id_must_be_integer(client):
    assert (await client.post("/api/theme", json={"themeId": "2"})).status_code == 400
    assert (await client.post("/api/theme", json={})).status_code == 400


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "storage": "memory"}
