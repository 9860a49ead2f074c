from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
BACKEND_ROOT = PROJECT_ROOT / "backend"
sys.path.append(str(BACKEND_ROOT))

from peerscore.config import SKILL_COUNT, SettingsError, load_settings


def _read_seed(path: Path) -> dict[str, list[dict[str, Any]]]:
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError as exc:
        raise ValueError(f"File not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object with 'mints' and 'evaluations' in {path}")
    seed: dict[str, list[dict[str, Any]]] = {}
    for key in ("mints", "evaluations"):
        items = data.get(key, [])
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise ValueError(f"Expected '{key}' to be a list of objects in {path}")
        seed[key] = items
    return seed


def _require_fields(item: dict[str, Any], fields: list[str], context: str) -> None:
    missing = [field for field in fields if not item.get(field)]
    if missing:
        raise ValueError(f"{context} missing required fields: {', '.join(missing)}")


def _validate_mint(mint: dict[str, Any]) -> None:
    _require_fields(mint, ["address"], "Mint")


def _validate_evaluation(evaluation: dict[str, Any]) -> None:
    _require_fields(evaluation, ["rater", "subject", "points"], "Evaluation")
    points = evaluation["points"]
    if not isinstance(points, list) or len(points) != SKILL_COUNT:
        raise ValueError(f"Evaluation points must be a list of {SKILL_COUNT} integers")
    if not all(isinstance(point, int) for point in points):
        raise ValueError("Evaluation points must be integers")


async def _resolve_identity(client: httpx.AsyncClient, address: str) -> int:
    response = await client.get(f"/api/holders/{address}/identity")
    response.raise_for_status()
    return response.json()["id"]


async def _mint(client: httpx.AsyncClient, mint: dict[str, Any]) -> int:
    response = await client.post(
        "/api/identities",
        json={"to": mint["address"], "occupation": mint.get("occupation", "")},
    )
    if response.status_code == 409:
        return await _resolve_identity(client, mint["address"])
    response.raise_for_status()
    return response.json()["id"]


async def _evaluate(
    client: httpx.AsyncClient,
    evaluation: dict[str, Any],
    identities: dict[str, int],
    authority: str,
) -> list[int]:
    rater_id = identities.get(evaluation["rater"])
    if rater_id is None:
        rater_id = await _resolve_identity(client, evaluation["rater"])
    subject_id = identities.get(evaluation["subject"])
    if subject_id is None:
        subject_id = await _resolve_identity(client, evaluation["subject"])
    response = await client.post(
        "/api/admin/evaluations",
        json={"raterId": rater_id, "subjectId": subject_id, "points": evaluation["points"]},
        headers={"X-Caller-Address": authority},
    )
    response.raise_for_status()
    return response.json()["normalizedScores"]


async def _run(
    seed_path: Path,
    base_url: str,
    authority: str,
    *,
    dry_run: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    seed = _read_seed(seed_path)
    for mint in seed["mints"]:
        _validate_mint(mint)
    for evaluation in seed["evaluations"]:
        _validate_evaluation(evaluation)

    if dry_run:
        print(
            f"Seed valid: {len(seed['mints'])} mints, "
            f"{len(seed['evaluations'])} evaluations"
        )
        return 0

    identities: dict[str, int] = {}
    async with httpx.AsyncClient(base_url=base_url, transport=transport, timeout=10.0) as client:
        for mint in seed["mints"]:
            identities[mint["address"]] = await _mint(client, mint)
        for evaluation in seed["evaluations"]:
            await _evaluate(client, evaluation, identities, authority)

    print(
        f"Seed complete: {len(identities)} identities, "
        f"{len(seed['evaluations'])} evaluations"
    )
    return 0


def _default_authority() -> str | None:
    try:
        return load_settings().authority_address
    except SettingsError:
        return None


def main() -> int:
    parser = argparse.ArgumentParser(description="Replay identity mints and evaluations into a ledger")
    parser.add_argument("--seed", required=True, type=Path)
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--authority", default=None)
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args()

    authority = args.authority or _default_authority()
    if not authority and not args.dry_run:
        print("Seed failed: pass --authority or set AUTHORITY_ADDRESS", file=sys.stderr)
        return 1

    try:
        return asyncio.run(
            _run(args.seed, args.base_url, authority or "", dry_run=args.dry_run)
        )
    except (ValueError, httpx.HTTPError) as exc:
        print(f"Seed failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
