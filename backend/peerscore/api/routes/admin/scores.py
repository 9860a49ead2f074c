from __future__ import annotations

from fastapi import APIRouter, Depends

from peerscore.api.deps.caller import AuthorityAuth, get_ledger, require_authority
from peerscore.api.errors import to_http_error
from peerscore.errors import LedgerError
from peerscore.models.requests import ScoresUpdate
from peerscore.services.ledger_service import PeerLedger

router = APIRouter(prefix="/identities", tags=["admin-scores"], dependencies=[AuthorityAuth])


@router.put("/{identity_id}/scores")
async def update_scores(
    identity_id: int,
    payload: ScoresUpdate,
    caller: str = Depends(require_authority),
    ledger: PeerLedger = Depends(get_ledger),
):
    try:
        ledger.set_scores(caller, identity_id, payload.scores)
        scores = [ledger.score(identity_id, index) for index in range(ledger.skill_count())]
    except LedgerError as exc:
        raise to_http_error(exc) from exc
    return {"id": identity_id, "scores": scores}
