from __future__ import annotations

from collections.abc import Sequence
import logging

from peerscore.errors import OutOfRange
from peerscore.models.ledger import EvaluationOutcome, StagedSkillUpdate
from peerscore.repositories.skill_repository import SkillRepository
from peerscore.services.assessment_service import AssessmentService
from peerscore.services.statistics_service import StatisticsService
from peerscore.telemetry.otel import start_span
from peerscore.telemetry.tracing import emit_metric

logger = logging.getLogger(__name__)


class EvaluationService:
    """Runs a four-skill evaluation batch as one all-or-nothing unit.

    Every skill is staged against the rater's current statistics first;
    nothing is written until all four staged cleanly.
    """

    def __init__(
        self,
        statistics: StatisticsService,
        assessments: AssessmentService,
        skills: SkillRepository,
    ) -> None:
        self.statistics = statistics
        self.assessments = assessments
        self.skills = skills

    def _stage_batch(
        self, rater_id: int, subject_id: int, points: Sequence[int]
    ) -> list[StagedSkillUpdate]:
        if len(points) != self.skills.count():
            raise OutOfRange(
                f"Evaluation needs exactly {self.skills.count()} points, got {len(points)}"
            )
        staged = []
        for skill_index, raw_point in enumerate(points):
            with start_span(
                "evaluation.stage",
                {"skillIndex": skill_index, "raterId": rater_id},
            ):
                staged.append(
                    self.statistics.stage(rater_id, subject_id, skill_index, raw_point)
                )
        return staged

    def evaluate(
        self, rater_id: int, subject_id: int, points: Sequence[int]
    ) -> EvaluationOutcome:
        staged = self._stage_batch(rater_id, subject_id, points)
        for update in staged:
            self.statistics.commit(update)
            self.assessments.record_assessment(
                update.subject_id, update.skill_index, update.normalized
            )
            emit_metric(
                "evaluation.normalized_score",
                update.normalized,
                identity_id=subject_id,
                skill_index=update.skill_index,
                rater_id=rater_id,
            )
        logger.debug("committed evaluation of %s by %s", subject_id, rater_id)
        return EvaluationOutcome(
            rater_id=rater_id,
            subject_id=subject_id,
            normalized_scores=[update.normalized for update in staged],
        )
