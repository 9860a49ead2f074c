from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Skill:
    index: int
    name: str


@dataclass(frozen=True)
class EvaluationStats:
    average: int = 0
    std_deviation: int = 0
    count: int = 0


@dataclass(frozen=True)
class StagedSkillUpdate:
    rater_id: int
    subject_id: int
    skill_index: int
    raw_point: int
    normalized: int
    stats: EvaluationStats


@dataclass(frozen=True)
class EvaluationOutcome:
    rater_id: int
    subject_id: int
    normalized_scores: list[int]
