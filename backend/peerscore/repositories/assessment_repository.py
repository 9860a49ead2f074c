from __future__ import annotations


class AssessmentRepository:
    def __init__(self) -> None:
        self._history: dict[tuple[int, int], list[int]] = {}

    def append(self, subject_id: int, skill_index: int, normalized: int) -> None:
        self._history.setdefault((subject_id, skill_index), []).append(normalized)

    def list_scores(self, subject_id: int, skill_index: int) -> list[int]:
        return list(self._history.get((subject_id, skill_index), []))
