from __future__ import annotations

from collections.abc import Sequence
import logging

from peerscore.arithmetic import UINT8_MAX
from peerscore.clients.authority_gate import AuthorityGate
from peerscore.clients.identity_registry import IdentityRegistry, InMemoryIdentityRegistry
from peerscore.config import Settings
from peerscore.errors import NotOwner, OutOfRange
from peerscore.models.ledger import EvaluationOutcome, EvaluationStats, Skill
from peerscore.repositories.assessment_repository import AssessmentRepository
from peerscore.repositories.occupation_repository import OccupationRepository
from peerscore.repositories.score_repository import ScoreRepository
from peerscore.repositories.skill_repository import SkillRepository
from peerscore.repositories.statistics_repository import StatisticsRepository
from peerscore.services.assessment_service import AssessmentService
from peerscore.services.evaluation_service import EvaluationService
from peerscore.services.statistics_service import StatisticsService
from peerscore.telemetry.tracing import emit_event

logger = logging.getLogger(__name__)


class PeerLedger:
    """Identity-keyed evaluation ledger.

    One instance owns every table for the lifetime of the process. All
    mutations go through the methods below; each either completes or
    raises a ``LedgerError`` before touching any table.
    """

    def __init__(
        self,
        *,
        registry: IdentityRegistry,
        gate: AuthorityGate,
        skills: SkillRepository,
        zero_variance_policy: str = "neutral",
        score_overflow_policy: str = "wrap",
    ) -> None:
        self.registry = registry
        self.gate = gate
        self.skills = skills
        self.statistics = StatisticsService(
            StatisticsRepository(),
            zero_variance_policy=zero_variance_policy,
            score_overflow_policy=score_overflow_policy,
            skill_count=skills.count(),
        )
        self.assessments = AssessmentService(AssessmentRepository())
        self.evaluations = EvaluationService(self.statistics, self.assessments, skills)
        self.scores = ScoreRepository()
        self.occupations = OccupationRepository()

    # identities

    def mint(self, to: str, occupation: str = "") -> int:
        identity_id = self.registry.mint(to)
        self.occupations.set_occupation(identity_id, occupation)
        emit_event("identity.minted", identity_id=identity_id, caller=to)
        return identity_id

    def burn(self, caller: str, identity_id: int) -> None:
        self.registry.burn(caller, identity_id)
        emit_event("identity.burned", identity_id=identity_id, caller=caller)

    def owner_of(self, identity_id: int) -> str:
        return self.registry.owner_of(identity_id)

    def balance_of(self, holder: str) -> int:
        return self.registry.balance_of(holder)

    def identity_of(self, holder: str) -> int:
        return self.registry.token_of(holder)

    def token_locator(self, identity_id: int) -> str:
        self.registry.owner_of(identity_id)
        base = self.skills.base_locator
        if not base:
            return ""
        return f"{base}{identity_id}"

    # evaluations

    def evaluate(
        self,
        caller: str | None,
        rater_id: int,
        subject_id: int,
        points: Sequence[int],
    ) -> EvaluationOutcome:
        self.gate.require_authority(caller)
        self.registry.owner_of(rater_id)
        self.registry.owner_of(subject_id)
        outcome = self.evaluations.evaluate(rater_id, subject_id, points)
        emit_event(
            "evaluation.recorded",
            identity_id=subject_id,
            caller=caller,
            detail={"raterId": rater_id, "normalized": outcome.normalized_scores},
        )
        return outcome

    def assessment(self, subject_id: int, skill_index: int) -> int:
        self.skills.require_index(skill_index)
        return self.assessments.aggregate(subject_id, skill_index)

    def assessment_history(self, subject_id: int, skill_index: int) -> list[int]:
        self.skills.require_index(skill_index)
        return self.assessments.history(subject_id, skill_index)

    def evaluation_stats(self, rater_id: int, skill_index: int) -> EvaluationStats:
        self.skills.require_index(skill_index)
        return self.statistics.get_stats(rater_id, skill_index)

    def point_history(self, rater_id: int, skill_index: int) -> list[int]:
        self.skills.require_index(skill_index)
        return self.statistics.get_points(rater_id, skill_index)

    # score overrides

    def set_scores(self, caller: str | None, identity_id: int, scores: Sequence[int]) -> None:
        self.gate.require_authority(caller)
        if len(scores) != self.skills.count():
            raise OutOfRange(f"Expected {self.skills.count()} scores, got {len(scores)}")
        for value in scores:
            if value < 0 or value > UINT8_MAX:
                raise OutOfRange(f"Score {value} does not fit in 8 bits")
        self.registry.owner_of(identity_id)
        self.scores.set_scores(identity_id, scores)
        emit_event(
            "scores.updated",
            identity_id=identity_id,
            caller=caller,
            detail={"scores": list(scores)},
        )

    def score(self, identity_id: int, skill_index: int) -> int:
        self.skills.require_index(skill_index)
        return self.scores.get_score(identity_id, skill_index)

    # occupations

    def occupation(self, identity_id: int) -> str:
        return self.occupations.get_occupation(identity_id)

    def set_occupation(self, caller: str | None, identity_id: int, occupation: str) -> None:
        owner = self.registry.owner_of(identity_id)
        if caller != owner:
            raise NotOwner(f"{caller or 'anonymous caller'} does not hold identity {identity_id}")
        self.occupations.set_occupation(identity_id, occupation)
        emit_event("occupation.updated", identity_id=identity_id, caller=caller)

    # catalog

    def skill(self, index: int) -> Skill:
        return self.skills.get_skill(index)

    def skill_list(self) -> list[Skill]:
        return self.skills.list_skills()

    def skill_count(self) -> int:
        return self.skills.count()

    def set_catalog_base_locator(self, caller: str | None, value: str) -> None:
        self.gate.require_authority(caller)
        self.skills.set_base_locator(value)
        emit_event("catalog.locator_updated", caller=caller, detail={"value": value})

    # authority

    def authority(self) -> str:
        return self.gate.authority

    def transfer_authority(self, caller: str | None, new_authority: str) -> None:
        if caller is None:
            raise NotOwner("anonymous caller is not the authority")
        previous = self.gate.transfer(caller, new_authority)
        emit_event(
            "authority.transferred",
            caller=caller,
            detail={"from": previous, "to": self.gate.authority},
        )


def build_ledger(settings: Settings) -> PeerLedger:
    logger.info(
        "building ledger (zero variance: %s, overflow: %s)",
        settings.zero_variance_policy,
        settings.score_overflow_policy,
    )
    return PeerLedger(
        registry=InMemoryIdentityRegistry(),
        gate=AuthorityGate(settings.authority_address),
        skills=SkillRepository(settings.skill_names, base_locator=settings.catalog_base_locator),
        zero_variance_policy=settings.zero_variance_policy,
        score_overflow_policy=settings.score_overflow_policy,
    )
