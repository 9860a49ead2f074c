from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger("peerscore.telemetry")


def _log(record: dict[str, Any]) -> dict[str, Any]:
    logger.info(json.dumps(record, sort_keys=True))
    return record


def emit_event(
    event: str,
    *,
    identity_id: int | None = None,
    caller: str | None = None,
    detail: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Log one ledger mutation: who changed which identity, and how.

    ``identity_id`` is None for ledger-wide changes (catalog locator,
    authority transfer).
    """
    return _log(
        {
            "kind": "ledger_event",
            "event": event,
            "identityId": identity_id,
            "caller": caller,
            "detail": detail or {},
        }
    )


def emit_metric(
    metric: str,
    value: int,
    *,
    identity_id: int,
    skill_index: int,
    rater_id: int | None = None,
) -> dict[str, Any]:
    """Log one per-skill measurement for an identity."""
    return _log(
        {
            "kind": "ledger_metric",
            "metric": metric,
            "value": value,
            "identityId": identity_id,
            "skillIndex": skill_index,
            "raterId": rater_id,
        }
    )
