"""Users endpoints: search, public profile and shared-note counts."""

from httpx import AsyncClient

from tests.fakes import auth


async def _provision(client: AsyncClient, *tokens: str) -> None:
    for token in tokens:
        assert (await client.get("/api/v1/auth/profile", headers=auth(token))).status_code == 200


async def test_search_by_prefix_excludes_caller(client: AsyncClient) -> None:
    await _provision(client, "alice-token", "bob-token", "carol-token")
    response = await client.get("/api/v1/users", params={"query": "car"}, headers=auth("alice-token"))
    assert response.status_code == 200
    assert [u["id"] for u in response.json()] == ["carol"]

    own = await client.get("/api/v1/users", params={"query": "ali"}, headers=auth("alice-token"))
    assert own.json() == []


async def test_search_query_too_short(client: AsyncClient) -> None:
    response = await client.get("/api/v1/users", params={"query": "al"}, headers=auth("alice-token"))
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "query"}


async def test_search_matches_prefix_only(client: AsyncClient) -> None:
    await _provision(client, "alice-token", "bob-token", "carol-token")
    response = await client.get(
        "/api/v1/users", params={"query": "example"}, headers=auth("alice-token")
    )
    assert response.status_code == 200
    assert response.json() == []


async def test_search_limit_must_be_positive(client: AsyncClient) -> None:
    bad = await client.get(
        "/api/v1/users", params={"query": "bob", "limit": 0}, headers=auth("alice-token")
    )
    assert bad.status_code == 422


async def test_public_profile(client: AsyncClient) -> None:
    await _provision(client, "bob-token")
    response = await client.get("/api/v1/users/bob", headers=auth("alice-token"))
    assert response.status_code == 200
    data = response.json()
    assert data == {"id": "bob", "display_name": "Bob", "avatar_ref": None, "is_pending": False}
    assert "email" not in data


async def test_public_profile_placeholder_and_unknown(client: AsyncClient) -> None:
    pending = await client.get("/api/v1/users/pending_zoe_localhost", headers=auth("alice-token"))
    assert pending.status_code == 200
    assert pending.json()["is_pending"] is True
    missing = await client.get("/api/v1/users/nobody", headers=auth("alice-token"))
    assert missing.status_code == 404


async def test_shared_notes_count_is_own_only(client: AsyncClient) -> None:
    await _provision(client, "bob-token")
    note = (await client.post("/api/v1/notes", headers=auth("alice-token"), json={})).json()
    await client.post(
        f"/api/v1/notes/{note['id']}/share",
        headers=auth("alice-token"),
        json={"email": "bob@example.com", "level": "read"},
    )

    own = await client.get("/api/v1/users/bob/shared-notes-count", headers=auth("bob-token"))
    other = await client.get("/api/v1/users/bob/shared-notes-count", headers=auth("alice-token"))

    assert own.status_code == 200
    assert own.json() == {"count": 1}
    assert other.status_code == 403
    assert other.json()["error"] == "PERMISSION_DENIED"
