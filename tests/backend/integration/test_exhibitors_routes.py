import uuid

import pytest

from expohub.models.exhibitor import Exhibitor, VirtualBooth


pytestmark = pytest.mark.asyncio


async def create_exhibitor(client, user, headers, name: str = "Acme"):
    return await client.post(
        "/api/exhibitors",
        json={"user_id": str(user.id), "name": name, "email": "booth@acme.io", "company": "Acme Inc"},
        headers=headers,
    )


async def create_booth(client, exhibitor_id: str, headers, description: str = "Our booth"):
    return await client.post(
        "/api/virtual-booths",
        json={"exhibitor_id": exhibitor_id, "description": description, "product_catalog": "widgets"},
        headers=headers,
    )


async def test_exhibitor_crud(client, create_user, auth_headers):
    user, _ = await create_user()
    headers = auth_headers(user)

    resp = await create_exhibitor(client, user, headers)
    body = resp.json()
    assert resp.status_code == 201
    assert body["user_id"] == str(user.id)

    fetched = await client.get(f"/api/exhibitors/{body['exhibitor_id']}")
    assert fetched.json()["company"] == "Acme Inc"

    updated = await client.patch(
        f"/api/exhibitors/{body['exhibitor_id']}",
        json={"name": "Acme Corp", "company": None},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "Acme Corp"
    assert updated.json()["company"] is None

    listed = await client.get("/api/exhibitors", params={"query": "corp"})
    assert [x["name"] for x in listed.json()] == ["Acme Corp"]


async def test_one_exhibitor_per_user(client, create_user, auth_headers):
    user, _ = await create_user()
    headers = auth_headers(user)
    assert (await create_exhibitor(client, user, headers)).status_code == 201

    dup = await create_exhibitor(client, user, headers, name="Second")
    assert dup.status_code == 400
    assert dup.json()["error_code"] == "EXHIBITOR_EXISTS"
    assert await Exhibitor.filter(user_id=user.id).count() == 1


async def test_exhibitor_for_someone_else_is_denied(client, create_user, auth_headers):
    user, _ = await create_user()
    other, _ = await create_user()
    resp = await create_exhibitor(client, other, auth_headers(user))
    assert resp.status_code == 403
    assert resp.json()["error_code"] == "ACCESS_DENIED"


async def test_missing_exhibitor(client, create_user, auth_headers):
    resp = await client.get(f"/api/exhibitors/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["error_code"] == "EXHIBITOR_NOT_FOUND"

    user, _ = await create_user()
    patch = await client.patch(f"/api/exhibitors/{uuid.uuid4()}", json={"name": "x"}, headers=auth_headers(user))
    assert patch.status_code == 404


async def test_non_owner_updates_are_denied_regardless_of_payload(client, create_user, auth_headers):
    owner, _ = await create_user()
    intruder, _ = await create_user()
    owner_headers = auth_headers(owner)
    intruder_headers = auth_headers(intruder)

    exhibitor_id = (await create_exhibitor(client, owner, owner_headers)).json()["exhibitor_id"]
    booth_id = (await create_booth(client, exhibitor_id, owner_headers)).json()["booth_id"]

    for payload in ({"name": "Hijacked"}, {"email": "not an email"}, {}, [], "x", 5):
        resp = await client.patch(f"/api/exhibitors/{exhibitor_id}", json=payload, headers=intruder_headers)
        assert resp.status_code == 403
        assert resp.json()["error_code"] == "ACCESS_DENIED"

    for payload in ({"description": "Hijacked"}, {"media_urls": 42}, {}, [], "x", 5):
        resp = await client.patch(f"/api/virtual-booths/{booth_id}", json=payload, headers=intruder_headers)
        assert resp.status_code == 403
        assert resp.json()["error_code"] == "ACCESS_DENIED"

    assert (await Exhibitor.get(id=exhibitor_id)).name == "Acme"
    assert (await VirtualBooth.get(id=booth_id)).description == "Our booth"


async def test_booth_crud(client, create_user, auth_headers):
    user, _ = await create_user()
    headers = auth_headers(user)
    exhibitor_id = (await create_exhibitor(client, user, headers)).json()["exhibitor_id"]

    created = await create_booth(client, exhibitor_id, headers)
    booth = created.json()
    assert created.status_code == 201
    assert booth["exhibitor_id"] == exhibitor_id

    fetched = await client.get(f"/api/virtual-booths/{booth['booth_id']}")
    assert fetched.json()["product_catalog"] == "widgets"

    updated = await client.patch(
        f"/api/virtual-booths/{booth['booth_id']}",
        json={"description": None, "media_urls": "https://cdn.acme.io/intro.mp4"},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["description"] is None
    assert updated.json()["media_urls"] == "https://cdn.acme.io/intro.mp4"

    by_exhibitor = await client.get("/api/virtual-booths", params={"exhibitor_id": exhibitor_id})
    assert [b["booth_id"] for b in by_exhibitor.json()] == [booth["booth_id"]]

    missing = await client.get(f"/api/virtual-booths/{uuid.uuid4()}")
    assert missing.status_code == 404
    assert missing.json()["error_code"] == "BOOTH_NOT_FOUND"


async def test_booth_for_missing_or_foreign_exhibitor(client, create_user, auth_headers):
    owner, _ = await create_user()
    intruder, _ = await create_user()
    exhibitor_id = (await create_exhibitor(client, owner, auth_headers(owner))).json()["exhibitor_id"]

    missing = await create_booth(client, str(uuid.uuid4()), auth_headers(owner))
    assert missing.status_code == 404
    assert missing.json()["error_code"] == "EXHIBITOR_NOT_FOUND"

    foreign = await create_booth(client, exhibitor_id, auth_headers(intruder))
    assert foreign.status_code == 403


async def test_register_login_exhibitor_booth_conflict_flow(client):
    """register -> login -> exhibitor -> booth -> second booth rejected."""
    email = f"owner_{uuid.uuid4().hex[:6]}@expohub.io"
    reg = await client.post("/api/auth/register", json={"email": email, "name": "Owner", "password": "OwnerPass!23"})
    assert reg.status_code == 201

    login = await client.post("/api/auth/login", json={"email": email, "password": "OwnerPass!23"})
    headers = {"Authorization": f"Bearer {login.json()['auth_token']}"}
    me = (await client.get("/api/users/me", headers=headers)).json()

    exhibitor = await client.post(
        "/api/exhibitors",
        json={"user_id": me["user_id"], "name": "Owner Co", "email": email},
        headers=headers,
    )
    assert exhibitor.status_code == 201
    exhibitor_id = exhibitor.json()["exhibitor_id"]

    first = await create_booth(client, exhibitor_id, headers)
    assert first.status_code == 201

    second = await create_booth(client, exhibitor_id, headers, description="Another")
    assert second.status_code == 400
    assert second.json()["error_code"] == "BOOTH_EXISTS"
    assert await VirtualBooth.filter(exhibitor_id=exhibitor_id).count() == 1


async def test_owner_sending_non_object_body_gets_validation_error(client, create_user, auth_headers):
    owner, _ = await create_user()
    headers = auth_headers(owner)
    exhibitor_id = (await create_exhibitor(client, owner, headers)).json()["exhibitor_id"]
    booth_id = (await create_booth(client, exhibitor_id, headers)).json()["booth_id"]

    for path in (f"/api/exhibitors/{exhibitor_id}", f"/api/virtual-booths/{booth_id}"):
        for payload in ([], "x", 5):
            resp = await client.patch(path, json=payload, headers=headers)
            assert resp.status_code == 400
            assert resp.json()["error_code"] == "VALIDATION_ERROR"
