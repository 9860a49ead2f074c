from __future__ import annotations

from peerscore.models.ledger import EvaluationStats

_EMPTY = EvaluationStats()


class StatisticsRepository:
    """Per (rater, skill) statistics and the raw point history they derive from."""

    def __init__(self) -> None:
        self._stats: dict[tuple[int, int], EvaluationStats] = {}
        self._points: dict[tuple[int, int], list[int]] = {}

    def get_stats(self, rater_id: int, skill_index: int) -> EvaluationStats:
        return self._stats.get((rater_id, skill_index), _EMPTY)

    def get_points(self, rater_id: int, skill_index: int) -> list[int]:
        return list(self._points.get((rater_id, skill_index), []))

    def append(
        self,
        rater_id: int,
        skill_index: int,
        raw_point: int,
        stats: EvaluationStats,
    ) -> None:
        key = (rater_id, skill_index)
        points = self._points.setdefault(key, [])
        if stats.count != len(points) + 1:
            raise ValueError(
                f"Stats for rater {rater_id} skill {skill_index} cover {stats.count} points, "
                f"history would hold {len(points) + 1}"
            )
        points.append(raw_point)
        self._stats[key] = stats
