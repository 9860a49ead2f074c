from fastapi import APIRouter, Depends

from peerscore.api.deps.caller import get_ledger
from peerscore.services.ledger_service import PeerLedger

router = APIRouter(tags=["authority"])


@router.get("/authority")
async def get_authority(ledger: PeerLedger = Depends(get_ledger)):
    return {"address": ledger.authority()}
