from __future__ import annotations

import pytest
from fastapi import status


async def _mint(client, address):
    response = await client.post("/api/identities", json={"to": address})
    return response.json()["id"]


@pytest.mark.asyncio
async def test_evaluation_requires_caller_address(api_client):
    response = await api_client.post(
        "/api/admin/evaluations",
        json={"raterId": 0, "subjectId": 1, "points": [5, 5, 5, 5]},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_evaluation_rejects_non_authority(api_client):
    rater_id = await _mint(api_client, "0xrater")
    subject_id = await _mint(api_client, "0xsubject")

    response = await api_client.post(
        "/api/admin/evaluations",
        json={"raterId": rater_id, "subjectId": subject_id, "points": [5, 5, 5, 5]},
        headers={"X-Caller-Address": "0xrater"},
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_evaluation_returns_normalized_scores(api_client, authority_headers):
    rater_id = await _mint(api_client, "0xrater")
    subject_id = await _mint(api_client, "0xsubject")

    response = await api_client.post(
        "/api/admin/evaluations",
        json={"raterId": rater_id, "subjectId": subject_id, "points": [5, 6, 7, 8]},
        headers=authority_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {
        "raterId": rater_id,
        "subjectId": subject_id,
        "normalizedScores": [50, 50, 50, 50],
    }


@pytest.mark.asyncio
async def test_evaluation_with_three_points_is_out_of_range(api_client, authority_headers):
    rater_id = await _mint(api_client, "0xrater")
    subject_id = await _mint(api_client, "0xsubject")

    response = await api_client.post(
        "/api/admin/evaluations",
        json={"raterId": rater_id, "subjectId": subject_id, "points": [5, 6, 7]},
        headers=authority_headers,
    )

    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "OutOfRange"
    stats = await api_client.get(f"/api/identities/{rater_id}/stats/0")
    assert stats.json()["count"] == 0


@pytest.mark.asyncio
async def test_evaluation_of_unknown_subject_is_not_found(api_client, authority_headers):
    rater_id = await _mint(api_client, "0xrater")

    response = await api_client.post(
        "/api/admin/evaluations",
        json={"raterId": rater_id, "subjectId": 40, "points": [5, 6, 7, 8]},
        headers=authority_headers,
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_set_scores_round_trip(api_client, authority_headers):
    identity_id = await _mint(api_client, "0xalice")

    first = await api_client.put(
        f"/api/admin/identities/{identity_id}/scores",
        json={"scores": [10, 20, 30, 40]},
        headers=authority_headers,
    )
    second = await api_client.put(
        f"/api/admin/identities/{identity_id}/scores",
        json={"scores": [4, 3, 2, 1]},
        headers=authority_headers,
    )

    assert first.json() == {"id": identity_id, "scores": [10, 20, 30, 40]}
    assert second.json() == {"id": identity_id, "scores": [4, 3, 2, 1]}
    score = await api_client.get(f"/api/identities/{identity_id}/scores/0")
    assert score.json()["score"] == 4


@pytest.mark.asyncio
async def test_set_scores_rejects_non_authority(api_client):
    identity_id = await _mint(api_client, "0xalice")

    response = await api_client.put(
        f"/api/admin/identities/{identity_id}/scores",
        json={"scores": [10, 20, 30, 40]},
        headers={"X-Caller-Address": "0xalice"},
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_catalog_locator_feeds_identity_locator(api_client, authority_headers):
    identity_id = await _mint(api_client, "0xalice")

    response = await api_client.put(
        "/api/admin/catalog/locator",
        json={"value": "https://ledger.example/identity/"},
        headers=authority_headers,
    )

    assert response.json() == {"value": "https://ledger.example/identity/"}
    identity = await api_client.get(f"/api/identities/{identity_id}")
    assert identity.json()["locator"] == f"https://ledger.example/identity/{identity_id}"


@pytest.mark.asyncio
async def test_authority_transfer(api_client, authority_headers):
    response = await api_client.put(
        "/api/admin/authority",
        json={"address": "0xsuccessor"},
        headers=authority_headers,
    )

    assert response.json() == {"address": "0xsuccessor"}
    current = await api_client.get("/api/authority")
    assert current.json() == {"address": "0xsuccessor"}
    stale = await api_client.put(
        "/api/admin/catalog/locator",
        json={"value": "x"},
        headers=authority_headers,
    )
    assert stale.status_code == status.HTTP_403_FORBIDDEN
