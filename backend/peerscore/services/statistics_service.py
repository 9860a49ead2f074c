from __future__ import annotations

import logging

from peerscore.arithmetic import (
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    isqrt,
    narrow_uint8,
    narrow_uint16,
)
from peerscore.config import SKILL_COUNT
from peerscore.errors import DivisionByZero, OutOfRange
from peerscore.models.ledger import EvaluationStats, StagedSkillUpdate
from peerscore.repositories.statistics_repository import StatisticsRepository

logger = logging.getLogger(__name__)

MIN_POINT = 1
MAX_POINT = 10
NEUTRAL_SCORE = 50
SCALE = 10


def require_point(raw_point: int) -> None:
    if raw_point < MIN_POINT or raw_point > MAX_POINT:
        raise OutOfRange(f"Point {raw_point} is outside {MIN_POINT}-{MAX_POINT}")


def next_stats(prior: EvaluationStats, history: list[int], raw_point: int) -> EvaluationStats:
    """Fold ``raw_point`` into the stats of ``history``.

    The running sum is rebuilt from the stored (already truncated) average,
    so the new average carries that truncation forward. The variance is
    recomputed over the whole history against the new average.
    """
    count = prior.count + 1
    total = checked_add(checked_mul(prior.average, prior.count), raw_point)
    average = checked_div(total, count)

    squared = 0
    for point in [*history, raw_point]:
        deviation = checked_sub(point, average) if point >= average else checked_sub(average, point)
        squared = checked_add(squared, checked_mul(deviation, deviation))
    variance = checked_div(squared, count)

    return EvaluationStats(
        average=narrow_uint16(average),
        std_deviation=narrow_uint16(isqrt(variance)),
        count=count,
    )


class StatisticsService:
    """Per-rater calibration: running average and deviation per skill.

    ``zero_variance_policy`` decides what happens when the rater's prior
    deviation is 0 (first submission, or a history of identical points):
    ``reject`` raises DivisionByZero, ``neutral`` scores the point at 50.
    ``score_overflow_policy`` is handed to ``narrow_uint8``. Skill indexes
    outside ``0..skill_count - 1`` are rejected before any table is read.
    """

    def __init__(
        self,
        repo: StatisticsRepository,
        *,
        zero_variance_policy: str = "neutral",
        score_overflow_policy: str = "wrap",
        skill_count: int = SKILL_COUNT,
    ) -> None:
        self.repo = repo
        self.skill_count = skill_count
        self.zero_variance_policy = zero_variance_policy
        self.score_overflow_policy = score_overflow_policy

    def require_index(self, skill_index: int) -> None:
        if skill_index < 0 or skill_index >= self.skill_count:
            raise OutOfRange(
                f"Skill index {skill_index} is outside 0-{self.skill_count - 1}"
            )

    def get_stats(self, rater_id: int, skill_index: int) -> EvaluationStats:
        return self.repo.get_stats(rater_id, skill_index)

    def get_points(self, rater_id: int, skill_index: int) -> list[int]:
        return self.repo.get_points(rater_id, skill_index)

    def normalize(self, prior: EvaluationStats, raw_point: int) -> int:
        average = prior.average
        deviation = prior.std_deviation
        if deviation == 0:
            if self.zero_variance_policy == "reject":
                raise DivisionByZero(
                    f"Rater has zero variance after {prior.count} points; cannot normalize"
                )
            if prior.count:
                logger.warning(
                    "zero variance after %s points at average %s; scoring neutral",
                    prior.count,
                    average,
                )
            else:
                logger.info("first point from rater has no calibration; scoring neutral")
            return NEUTRAL_SCORE

        if raw_point < average:
            value = NEUTRAL_SCORE - checked_div(checked_mul(average - raw_point, SCALE), deviation)
        else:
            value = NEUTRAL_SCORE + checked_div(checked_mul(raw_point - average, SCALE), deviation)

        if value < 0 or value > 100:
            logger.warning(
                "normalized score %s outside 0-100 (point=%s average=%s deviation=%s policy=%s)",
                value,
                raw_point,
                average,
                deviation,
                self.score_overflow_policy,
            )
        return narrow_uint8(value, policy=self.score_overflow_policy)

    def stage(
        self,
        rater_id: int,
        subject_id: int,
        skill_index: int,
        raw_point: int,
    ) -> StagedSkillUpdate:
        self.require_index(skill_index)
        require_point(raw_point)
        prior = self.repo.get_stats(rater_id, skill_index)
        normalized = self.normalize(prior, raw_point)
        stats = next_stats(prior, self.repo.get_points(rater_id, skill_index), raw_point)
        return StagedSkillUpdate(
            rater_id=rater_id,
            subject_id=subject_id,
            skill_index=skill_index,
            raw_point=raw_point,
            normalized=normalized,
            stats=stats,
        )

    def commit(self, update: StagedSkillUpdate) -> None:
        self.repo.append(update.rater_id, update.skill_index, update.raw_point, update.stats)

    def record(self, rater_id: int, subject_id: int, skill_index: int, raw_point: int) -> int:
        update = self.stage(rater_id, subject_id, skill_index, raw_point)
        self.commit(update)
        return update.normalized
