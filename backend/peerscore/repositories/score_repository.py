from __future__ import annotations

from collections.abc import Sequence


class ScoreRepository:
    """Administrator-asserted scores, one value per (identity, skill)."""

    def __init__(self) -> None:
        self._scores: dict[int, tuple[int, ...]] = {}

    def set_scores(self, identity_id: int, scores: Sequence[int]) -> None:
        self._scores[identity_id] = tuple(scores)

    def get_score(self, identity_id: int, skill_index: int) -> int:
        scores = self._scores.get(identity_id)
        if scores is None:
            return 0
        return scores[skill_index]
