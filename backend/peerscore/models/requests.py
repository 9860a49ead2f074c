from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class MintRequest(BaseModel):
    to: str = Field(..., min_length=1)
    occupation: str = ""

    @field_validator("to")
    @classmethod
    def strip_address(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("to must not be blank")
        return value


class EvaluationCreate(BaseModel):
    raterId: int = Field(..., ge=0)
    subjectId: int = Field(..., ge=0)
    # Length and range are enforced by the ledger so failures surface as OutOfRange.
    points: list[int]


class ScoresUpdate(BaseModel):
    scores: list[int]


class OccupationUpdate(BaseModel):
    occupation: str


class LocatorUpdate(BaseModel):
    value: str


class AuthorityTransfer(BaseModel):
    address: str = Field(..., min_length=1)
