from __future__ import annotations

from collections.abc import Iterable

from peerscore.config import SKILL_COUNT
from peerscore.errors import OutOfRange
from peerscore.models.ledger import Skill


class SkillRepository:
    """Fixed catalog of the four evaluation skills, indexed 0-3."""

    def __init__(self, names: Iterable[str], *, base_locator: str = "") -> None:
        skills = tuple(Skill(index=index, name=name) for index, name in enumerate(names))
        if len(skills) != SKILL_COUNT:
            raise OutOfRange(f"Skill catalog needs exactly {SKILL_COUNT} skills, got {len(skills)}")
        self._skills = skills
        self._base_locator = base_locator

    def count(self) -> int:
        return len(self._skills)

    def list_skills(self) -> list[Skill]:
        return list(self._skills)

    def get_skill(self, index: int) -> Skill:
        self.require_index(index)
        return self._skills[index]

    def require_index(self, index: int) -> None:
        if index < 0 or index >= len(self._skills):
            raise OutOfRange(f"Skill index {index} is outside 0-{len(self._skills) - 1}")

    @property
    def base_locator(self) -> str:
        return self._base_locator

    def set_base_locator(self, value: str) -> None:
        self._base_locator = value
