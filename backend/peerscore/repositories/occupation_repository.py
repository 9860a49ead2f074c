from __future__ import annotations


class OccupationRepository:
    def __init__(self) -> None:
        self._occupations: dict[int, str] = {}

    def set_occupation(self, identity_id: int, occupation: str) -> None:
        self._occupations[identity_id] = occupation

    def get_occupation(self, identity_id: int) -> str:
        return self._occupations.get(identity_id, "")
