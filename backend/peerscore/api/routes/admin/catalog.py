from __future__ import annotations

from fastapi import APIRouter, Depends

from peerscore.api.deps.caller import AuthorityAuth, get_ledger, require_authority
from peerscore.api.errors import to_http_error
from peerscore.errors import LedgerError
from peerscore.models.requests import LocatorUpdate
from peerscore.services.ledger_service import PeerLedger

router = APIRouter(prefix="/catalog", tags=["admin-catalog"], dependencies=[AuthorityAuth])


@router.put("/locator")
async def update_catalog_locator(
    payload: LocatorUpdate,
    caller: str = Depends(require_authority),
    ledger: PeerLedger = Depends(get_ledger),
):
    try:
        ledger.set_catalog_base_locator(caller, payload.value)
    except LedgerError as exc:
        raise to_http_error(exc) from exc
    return {"value": ledger.skills.base_locator}
