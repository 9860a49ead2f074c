from __future__ import annotations

import pytest
from fastapi import status


async def _mint(client, address, occupation=""):
    response = await client.post("/api/identities", json={"to": address, "occupation": occupation})
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()["id"]


@pytest.mark.asyncio
async def test_mint_returns_identity(api_client):
    response = await api_client.post(
        "/api/identities",
        json={"to": "0xalice", "occupation": "engineer"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {
        "id": 0,
        "owner": "0xalice",
        "occupation": "engineer",
        "locator": "",
    }


@pytest.mark.asyncio
async def test_second_mint_conflicts(api_client):
    await _mint(api_client, "0xalice")

    response = await api_client.post("/api/identities", json={"to": "0xalice"})

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"]["error"] == "AlreadyExists"


@pytest.mark.asyncio
async def test_blank_mint_target_is_invalid(api_client):
    response = await api_client.post("/api/identities", json={"to": "   "})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_identity_is_not_found(api_client):
    response = await api_client.get("/api/identities/12")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"]["error"] == "NotMinted"


@pytest.mark.asyncio
async def test_holder_lookup(api_client):
    identity_id = await _mint(api_client, "0xalice")

    response = await api_client.get("/api/holders/0xalice/identity")

    assert response.json() == {"holder": "0xalice", "id": identity_id, "balance": 1}
    missing = await api_client.get("/api/holders/0xbob/identity")
    assert missing.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_occupation_update_requires_holder(api_client):
    identity_id = await _mint(api_client, "0xalice")

    anonymous = await api_client.put(
        f"/api/identities/{identity_id}/occupation", json={"occupation": "pilot"}
    )
    stranger = await api_client.put(
        f"/api/identities/{identity_id}/occupation",
        json={"occupation": "pilot"},
        headers={"X-Caller-Address": "0xbob"},
    )
    holder = await api_client.put(
        f"/api/identities/{identity_id}/occupation",
        json={"occupation": "nurse"},
        headers={"X-Caller-Address": "0xalice"},
    )

    assert anonymous.status_code == status.HTTP_401_UNAUTHORIZED
    assert stranger.status_code == status.HTTP_403_FORBIDDEN
    assert holder.status_code == status.HTTP_200_OK
    current = await api_client.get(f"/api/identities/{identity_id}/occupation")
    assert current.json() == {"id": identity_id, "occupation": "nurse"}


@pytest.mark.asyncio
async def test_assessment_and_score_defaults(api_client):
    identity_id = await _mint(api_client, "0xalice")

    assessment = await api_client.get(f"/api/identities/{identity_id}/assessments/1")
    score = await api_client.get(f"/api/identities/{identity_id}/scores/1")
    stats = await api_client.get(f"/api/identities/{identity_id}/stats/1")

    assert assessment.json()["assessment"] == 50
    assert score.json()["score"] == 0
    assert stats.json() == {
        "id": identity_id,
        "skillIndex": 1,
        "average": 0,
        "stdDeviation": 0,
        "count": 0,
        "points": [],
    }


@pytest.mark.asyncio
async def test_unknown_skill_index_is_out_of_range(api_client):
    response = await api_client.get("/api/identities/0/assessments/4")

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "OutOfRange"


@pytest.mark.asyncio
async def test_burn_by_holder(api_client):
    identity_id = await _mint(api_client, "0xalice")

    forbidden = await api_client.delete(
        f"/api/identities/{identity_id}", headers={"X-Caller-Address": "0xbob"}
    )
    burned = await api_client.delete(
        f"/api/identities/{identity_id}", headers={"X-Caller-Address": "0xalice"}
    )

    assert forbidden.status_code == status.HTTP_403_FORBIDDEN
    assert burned.status_code == status.HTTP_204_NO_CONTENT
    lookup = await api_client.get(f"/api/identities/{identity_id}")
    assert lookup.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_skill_catalog(api_client):
    listing = await api_client.get("/api/skills")
    single = await api_client.get("/api/skills/2")
    missing = await api_client.get("/api/skills/7")

    assert listing.json()["count"] == 4
    assert [skill["index"] for skill in listing.json()["skills"]] == [0, 1, 2, 3]
    assert single.json() == {"index": 2, "name": "Problem Solving"}
    assert missing.status_code == 422
