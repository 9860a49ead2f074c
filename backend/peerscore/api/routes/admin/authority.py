from __future__ import annotations

from fastapi import APIRouter, Depends

from peerscore.api.deps.caller import AuthorityAuth, get_ledger, require_authority
from peerscore.api.errors import to_http_error
from peerscore.errors import LedgerError
from peerscore.models.requests import AuthorityTransfer
from peerscore.services.ledger_service import PeerLedger

router = APIRouter(prefix="/authority", tags=["admin-authority"], dependencies=[AuthorityAuth])


@router.put("")
async def transfer_authority(
    payload: AuthorityTransfer,
    caller: str = Depends(require_authority),
    ledger: PeerLedger = Depends(get_ledger),
):
    try:
        ledger.transfer_authority(caller, payload.address)
    except LedgerError as exc:
        raise to_http_error(exc) from exc
    return {"address": ledger.authority()}
