from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from peerscore.api.deps.caller import get_ledger
from peerscore.api.errors import to_http_error
from peerscore.errors import LedgerError
from peerscore.models.ledger import Skill
from peerscore.services.ledger_service import PeerLedger

router = APIRouter(prefix="/skills", tags=["skills"])


def _skill_response(skill: Skill) -> dict[str, Any]:
    return {"index": skill.index, "name": skill.name}


@router.get("")
async def list_skills(ledger: PeerLedger = Depends(get_ledger)):
    return {
        "count": ledger.skill_count(),
        "skills": [_skill_response(skill) for skill in ledger.skill_list()],
    }


@router.get("/{index}")
async def get_skill(index: int, ledger: PeerLedger = Depends(get_ledger)):
    try:
        return _skill_response(ledger.skill(index))
    except LedgerError as exc:
        raise to_http_error(exc) from exc
