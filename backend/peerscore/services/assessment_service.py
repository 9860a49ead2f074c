from __future__ import annotations

from peerscore.arithmetic import UINT8_MAX
from peerscore.errors import OutOfRange
from peerscore.repositories.assessment_repository import AssessmentRepository

NEUTRAL_ASSESSMENT = 50


class AssessmentService:
    def __init__(self, repo: AssessmentRepository) -> None:
        self.repo = repo

    def record_assessment(self, subject_id: int, skill_index: int, normalized: int) -> None:
        if normalized < 0 or normalized > UINT8_MAX:
            raise OutOfRange(f"Normalized score {normalized} does not fit in 8 bits")
        self.repo.append(subject_id, skill_index, normalized)

    def history(self, subject_id: int, skill_index: int) -> list[int]:
        return self.repo.list_scores(subject_id, skill_index)

    def aggregate(self, subject_id: int, skill_index: int) -> int:
        scores = self.repo.list_scores(subject_id, skill_index)
        if not scores:
            return NEUTRAL_ASSESSMENT
        return sum(scores) // len(scores)
