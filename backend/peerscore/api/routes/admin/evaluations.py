from __future__ import annotations

from fastapi import APIRouter, Depends, status

from peerscore.api.deps.caller import AuthorityAuth, get_ledger, require_authority
from peerscore.api.errors import to_http_error
from peerscore.errors import LedgerError
from peerscore.models.requests import EvaluationCreate
from peerscore.services.ledger_service import PeerLedger
from peerscore.telemetry.otel import start_span

router = APIRouter(prefix="/evaluations", tags=["admin-evaluations"], dependencies=[AuthorityAuth])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_evaluation(
    payload: EvaluationCreate,
    caller: str = Depends(require_authority),
    ledger: PeerLedger = Depends(get_ledger),
):
    try:
        with start_span(
            "evaluation.batch",
            {"raterId": payload.raterId, "subjectId": payload.subjectId},
        ):
            outcome = ledger.evaluate(caller, payload.raterId, payload.subjectId, payload.points)
    except LedgerError as exc:
        raise to_http_error(exc) from exc
    return {
        "raterId": outcome.rater_id,
        "subjectId": outcome.subject_id,
        "normalizedScores": outcome.normalized_scores,
    }
