"""
Integration tests for /api/v1/clubs: ETag reads, If-Match writes, roles, search and paging.
"""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

ADMIN = {"X-User-Id": "admin", "X-User-Roles": "admin"}
USER = {"X-User-Id": "user", "X-User-Roles": "user"}
BASE = "/api/v1/clubs"


async def _post(client, data) -> int:
    resp = await client.post(BASE, json=data, headers=ADMIN)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


@pytest.mark.asyncio
async def test_health(client) -> None:
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_post_returns_id_and_location(client, club_data) -> None:
    resp = await client.post(BASE, json=club_data(), headers=USER)
    assert resp.status_code == 201
    club_id = resp.json()["id"]
    assert resp.headers["location"] == f"{BASE}/{club_id}"


@pytest.mark.asyncio
async def test_post_requires_role(client, club_data) -> None:
    resp = await client.post(BASE, json=club_data())
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Not allowed to create clubs"


@pytest.mark.asyncio
async def test_post_invalid_body_lists_violations(client, club_data) -> None:
    resp = await client.post(BASE, json=club_data(name="", email="nope"), headers=ADMIN)
    assert resp.status_code == 400
    assert len(resp.json()["violations"]) == 2


@pytest.mark.asyncio
async def test_post_duplicate_name(client, club_data) -> None:
    await _post(client, club_data("Borussia Dortmund"))
    resp = await client.post(BASE, json=club_data("Borussia Dortmund"), headers=ADMIN)
    assert resp.status_code == 422
    assert "Borussia Dortmund" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_get_returns_club_with_etag(client, club_data) -> None:
    club_id = await _post(client, club_data())
    resp = await client.get(f"{BASE}/{club_id}")
    assert resp.status_code == 200
    assert resp.headers["etag"] == '"0"'
    body = resp.json()
    assert body["id"] == club_id
    assert body["version"] == 0
    assert body["memberCount"] == 250
    assert body["foundingDate"] == "2025-01-01"
    assert body["stadium"]["city"] == "Karlsruhe"
    assert "players" not in body


@pytest.mark.asyncio
async def test_get_with_players(client, club_data) -> None:
    club_id = await _post(client, club_data())
    resp = await client.get(f"{BASE}/{club_id}", params={"withPlayers": "true"})
    assert resp.status_code == 200
    assert resp.json()["players"][0]["firstName"] == "Max"


@pytest.mark.asyncio
async def test_get_not_modified(client, club_data) -> None:
    club_id = await _post(client, club_data())
    resp = await client.get(f"{BASE}/{club_id}", headers={"If-None-Match": '"0"'})
    assert resp.status_code == 304
    assert resp.headers["etag"] == '"0"'
    assert resp.content == b""

    resp = await client.get(f"{BASE}/{club_id}", headers={"If-None-Match": '"7"'})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_get_unknown_and_malformed_id(client) -> None:
    assert (await client.get(f"{BASE}/999")).status_code == 404
    assert (await client.get(f"{BASE}/abc")).status_code == 404


@pytest.mark.asyncio
async def test_get_not_acceptable(client, club_data) -> None:
    club_id = await _post(client, club_data())
    resp = await client.get(f"{BASE}/{club_id}", headers={"Accept": "image/png"})
    assert resp.status_code == 406


@pytest.mark.asyncio
async def test_put_version_flow(client, club_data) -> None:
    club_id = await _post(client, club_data())
    url = f"{BASE}/{club_id}"
    body = {"name": "Testverein-X", "memberCount": 300}

    resp = await client.put(url, json=body, headers=USER)
    assert resp.status_code == 428
    assert resp.json()["detail"] == 'Header "If-Match" is missing'

    resp = await client.put(url, json=body, headers={**USER, "If-Match": '"0"'})
    assert resp.status_code == 204
    assert resp.headers["etag"] == '"1"'

    resp = await client.put(url, json=body, headers={**USER, "If-Match": '"0"'})
    assert resp.status_code == 412
    assert resp.json()["detail"] == 'Version "0" is outdated'

    resp = await client.put(url, json=body, headers={**USER, "If-Match": "1"})
    assert resp.status_code == 412

    resp = await client.get(url)
    assert resp.headers["etag"] == '"1"'
    assert resp.json()["memberCount"] == 300


@pytest.mark.asyncio
async def test_put_unknown_club(client) -> None:
    resp = await client.put(f"{BASE}/999", json={"name": "Niemand"}, headers={**ADMIN, "If-Match": '"0"'})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_put_requires_role(client, club_data) -> None:
    club_id = await _post(client, club_data())
    resp = await client.put(f"{BASE}/{club_id}", json={"name": "X"}, headers={"If-Match": '"0"'})
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_delete_requires_admin_and_is_idempotent(client, club_data) -> None:
    club_id = await _post(client, club_data())
    url = f"{BASE}/{club_id}"
    assert (await client.delete(url, headers=USER)).status_code == 403
    assert (await client.delete(url, headers=ADMIN)).status_code == 204
    assert (await client.delete(url, headers=ADMIN)).status_code == 204
    assert (await client.delete(f"{BASE}/abc", headers=ADMIN)).status_code == 204
    assert (await client.get(url)).status_code == 404


@pytest.mark.asyncio
async def test_list_with_page_metadata(client, club_data) -> None:
    for i in range(7):
        await _post(client, club_data(f"Verein {i}"))
    resp = await client.get(BASE, params={"page": "1", "size": "5"})
    assert resp.status_code == 200
    body = resp.json()
    assert [c["name"] for c in body["content"]] == ["Verein 5", "Verein 6"]
    assert body["page"] == {"size": 5, "number": 1, "totalElements": 7, "totalPages": 2}


@pytest.mark.asyncio
async def test_list_filters(client, club_data) -> None:
    await _post(client, club_data("FC Bayern München", type="PROFESSIONAL", memberCount=295000))
    await _post(client, club_data("SV Sandhausen", type="SEMI_PROFESSIONAL", memberCount=1800))
    resp = await client.get(BASE, params={"name": "bayern"})
    assert [c["name"] for c in resp.json()["content"]] == ["FC Bayern München"]
    resp = await client.get(BASE, params={"type": "semi_professional"})
    assert [c["name"] for c in resp.json()["content"]] == ["SV Sandhausen"]
    resp = await client.get(BASE, params={"memberCount": "2000"})
    assert resp.json()["page"]["totalElements"] == 1


@pytest.mark.asyncio
async def test_list_unknown_parameter(client, club_data) -> None:
    await _post(client, club_data())
    resp = await client.get(BASE, params={"stadium": "x", "type": "HOBBY"})
    assert resp.status_code == 400
    assert len(resp.json()["violations"]) == 2


@pytest.mark.asyncio
async def test_list_without_match(client, club_data) -> None:
    await _post(client, club_data())
    resp = await client.get(BASE, params={"name": "Schalke"})
    assert resp.status_code == 404
    assert resp.json()["detail"].startswith("No clubs found")


@pytest.mark.asyncio
async def test_not_modified_until_updated(client, club_data) -> None:
    club_id = await _post(client, club_data())
    url = f"{BASE}/{club_id}"
    conditional = {"If-None-Match": '"0"'}

    assert (await client.get(url, headers=conditional)).status_code == 304
    assert (await client.get(url, headers=conditional)).status_code == 304

    resp = await client.put(url, json={"name": "Testverein-X"}, headers={**USER, "If-Match": '"0"'})
    assert resp.status_code == 204

    resp = await client.get(url, headers=conditional)
    assert resp.status_code == 200
    assert resp.headers["etag"] == '"1"'
    assert resp.json()["version"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("key", ["id", "memberCount", "foundingYear"])
async def test_list_integer_too_large(client, club_data, key) -> None:
    await _post(client, club_data())
    resp = await client.get(BASE, params={key: "99999999999999999999"})
    assert resp.status_code == 400
    assert "too large" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_post_member_count_too_large(client, club_data) -> None:
    resp = await client.post(BASE, json=club_data(memberCount=10**20), headers=ADMIN)
    assert resp.status_code == 400
    assert resp.json()["violations"][0].startswith("memberCount")


@pytest.mark.asyncio
async def test_put_unknown_club_with_taken_name(client, club_data) -> None:
    await _post(client, club_data("Taken"))
    resp = await client.put(f"{BASE}/999", json={"name": "Taken"}, headers={**ADMIN, "If-Match": '"0"'})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_put_unknown_club_with_invalid_body(client) -> None:
    resp = await client.put(f"{BASE}/999", json={"name": ""}, headers={**ADMIN, "If-Match": '"0"'})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_put_invalid_token_with_invalid_body(client, club_data) -> None:
    club_id = await _post(client, club_data())
    resp = await client.put(f"{BASE}/{club_id}", json={"name": ""}, headers={**ADMIN, "If-Match": "abc"})
    assert resp.status_code == 412
    assert resp.json()["detail"] == 'Version "abc" is not a valid version'


@pytest.mark.asyncio
async def test_put_weak_token_is_rejected(client, club_data) -> None:
    club_id = await _post(client, club_data())
    resp = await client.put(
        f"{BASE}/{club_id}", json={"name": "Testverein-X"}, headers={**ADMIN, "If-Match": 'W/"0"'}
    )
    assert resp.status_code == 412
    assert (await client.get(f"{BASE}/{club_id}")).headers["etag"] == '"0"'
