import pytest
import httpx
from httpx import ASGITransport

from main import create_app
from utils.notification_center import AuthorizationStatus, LocalNotificationCenter, deny_prompt


@pytest.mark.asyncio
async def test_scan_and_list(client):
    response = await client.post("/prospects/scan", json={"text": "Raymond Chen\nahrchen@gmail.com"})
    assert response.status_code == 201
    created = response.json()
    assert created["name"] == "Raymond Chen"
    assert created["is_contacted"] is False

    response = await client.get("/prospects")
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Everyone"
    assert [p["identity"] for p in body["prospects"]] == [created["identity"]]


@pytest.mark.asyncio
async def test_malformed_scan_is_rejected(client):
    response = await client.post("/prospects/scan", json={"text": "OnlyOneLine"})
    assert response.status_code == 422

    response = await client.get("/prospects")
    assert response.json()["prospects"] == []


@pytest.mark.asyncio
async def test_toggle_filter_and_sort(client):
    ids = {}
    for name in ("Paul", "anna", "Bob"):
        r = await client.post("/prospects", json={"name": name, "email_address": f"{name}@x.io"})
        ids[name] = r.json()["identity"]

    r = await client.post(f"/prospects/{ids['Paul']}/toggle")
    assert r.status_code == 200
    assert r.json()["is_contacted"] is True

    r = await client.get("/prospects", params={"filter": "uncontacted", "sort": "alphabetical"})
    assert r.json()["title"] == "Uncontacted people"
    assert [p["name"] for p in r.json()["prospects"]] == ["Bob", "anna"]

    r = await client.get("/prospects", params={"sort": "most_recent"})
    assert [p["name"] for p in r.json()["prospects"]] == ["Bob", "anna", "Paul"]

    r = await client.post("/prospects/unknown/toggle")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_remind_schedules_notification(client, notification_center):
    r = await client.post("/prospects/scan", json={"text": "Raymond Chen\nahrchen@gmail.com"})
    identity = r.json()["identity"]

    r = await client.post(f"/prospects/{identity}/remind")
    assert r.status_code == 201
    assert r.json()["title"] == "Contact Raymond Chen"
    assert r.json()["trigger"]["hour"] == 9
    assert len(notification_center.pending_requests()) == 1


@pytest.mark.asyncio
async def test_remind_denied(database_url):
    center = LocalNotificationCenter(status=AuthorizationStatus.DENIED, prompt=deny_prompt)
    app = create_app(database_url=database_url, notification_center=center)
    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.post("/prospects", json={"name": "Paul", "email_address": "p@x.io"})
        r = await ac.post(f"/prospects/{r.json()['identity']}/remind")
        assert r.status_code == 403
    assert center.pending_requests() == []


@pytest.mark.asyncio
async def test_prospects_survive_app_restart(database_url, client):
    await client.post("/prospects", json={"name": "Paul", "email_address": "p@x.io"})

    app = create_app(database_url=database_url)
    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.get("/prospects")
    assert [p["name"] for p in r.json()["prospects"]] == ["Paul"]


@pytest.mark.asyncio
async def test_my_qr_code_png(client):
    r = await client.get("/me/qr", params={"name": "Raymond Chen", "email": "ahrchen@gmail.com"})
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert r.content.startswith(b"\x89PNG")
