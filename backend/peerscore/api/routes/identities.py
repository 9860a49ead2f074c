from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status

from peerscore.api.deps.caller import get_ledger, require_caller
from peerscore.api.errors import to_http_error
from peerscore.errors import LedgerError
from peerscore.models.ledger import EvaluationStats
from peerscore.models.requests import MintRequest, OccupationUpdate
from peerscore.services.ledger_service import PeerLedger
from peerscore.telemetry.otel import start_span

router = APIRouter(tags=["identities"])


def _identity_response(ledger: PeerLedger, identity_id: int) -> dict[str, Any]:
    return {
        "id": identity_id,
        "owner": ledger.owner_of(identity_id),
        "occupation": ledger.occupation(identity_id),
        "locator": ledger.token_locator(identity_id),
    }


def _stats_response(stats: EvaluationStats, points: list[int]) -> dict[str, Any]:
    return {
        "average": stats.average,
        "stdDeviation": stats.std_deviation,
        "count": stats.count,
        "points": points,
    }


@router.post("/identities", status_code=status.HTTP_201_CREATED)
async def mint_identity(payload: MintRequest, ledger: PeerLedger = Depends(get_ledger)):
    try:
        with start_span("identity.mint", {"to": payload.to}):
            identity_id = ledger.mint(payload.to, payload.occupation)
        return _identity_response(ledger, identity_id)
    except LedgerError as exc:
        raise to_http_error(exc) from exc


@router.get("/identities/{identity_id}")
async def get_identity(identity_id: int, ledger: PeerLedger = Depends(get_ledger)):
    try:
        return _identity_response(ledger, identity_id)
    except LedgerError as exc:
        raise to_http_error(exc) from exc


@router.delete("/identities/{identity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def burn_identity(
    identity_id: int,
    caller: str = Depends(require_caller),
    ledger: PeerLedger = Depends(get_ledger),
):
    try:
        ledger.burn(caller, identity_id)
    except LedgerError as exc:
        raise to_http_error(exc) from exc
    return None


@router.get("/holders/{address}/identity")
async def get_holder_identity(address: str, ledger: PeerLedger = Depends(get_ledger)):
    try:
        identity_id = ledger.identity_of(address)
    except LedgerError as exc:
        raise to_http_error(exc) from exc
    return {"holder": address, "id": identity_id, "balance": ledger.balance_of(address)}


@router.get("/identities/{identity_id}/occupation")
async def get_occupation(identity_id: int, ledger: PeerLedger = Depends(get_ledger)):
    return {"id": identity_id, "occupation": ledger.occupation(identity_id)}


@router.put("/identities/{identity_id}/occupation")
async def update_occupation(
    identity_id: int,
    payload: OccupationUpdate,
    caller: str = Depends(require_caller),
    ledger: PeerLedger = Depends(get_ledger),
):
    try:
        ledger.set_occupation(caller, identity_id, payload.occupation)
    except LedgerError as exc:
        raise to_http_error(exc) from exc
    return {"id": identity_id, "occupation": ledger.occupation(identity_id)}


@router.get("/identities/{identity_id}/assessments/{skill_index}")
async def get_assessment(
    identity_id: int,
    skill_index: int,
    include_history: bool = False,
    ledger: PeerLedger = Depends(get_ledger),
):
    try:
        response: dict[str, Any] = {
            "id": identity_id,
            "skillIndex": skill_index,
            "assessment": ledger.assessment(identity_id, skill_index),
        }
        if include_history:
            response["history"] = ledger.assessment_history(identity_id, skill_index)
        return response
    except LedgerError as exc:
        raise to_http_error(exc) from exc


@router.get("/identities/{identity_id}/scores/{skill_index}")
async def get_score(identity_id: int, skill_index: int, ledger: PeerLedger = Depends(get_ledger)):
    try:
        return {
            "id": identity_id,
            "skillIndex": skill_index,
            "score": ledger.score(identity_id, skill_index),
        }
    except LedgerError as exc:
        raise to_http_error(exc) from exc


@router.get("/identities/{identity_id}/stats/{skill_index}")
async def get_stats(identity_id: int, skill_index: int, ledger: PeerLedger = Depends(get_ledger)):
    try:
        stats = ledger.evaluation_stats(identity_id, skill_index)
        points = ledger.point_history(identity_id, skill_index)
    except LedgerError as exc:
        raise to_http_error(exc) from exc
    return {"id": identity_id, "skillIndex": skill_index, **_stats_response(stats, points)}
