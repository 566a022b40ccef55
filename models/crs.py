"""Schemas for CRS breakdowns, history entries, overrides and persisted records."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import Field, model_validator

from models.profile import CamelModel, Profile


class ProficiencyLevels(CamelModel):
    """Standardized per-skill benchmark levels derived from one language test."""

    reading: int = Field(..., ge=0, le=10)
    listening: int = Field(..., ge=0, le=10)
    speaking: int = Field(..., ge=0, le=10)
    writing: int = Field(..., ge=0, le=10)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.reading, self.listening, self.speaking, self.writing)

    @property
    def minimum(self) -> int:
        return min(self.as_tuple())

    def all_at_least(self, level: int) -> bool:
        return self.minimum >= level


class _Subtotal(CamelModel):
    total: int

    def components(self) -> dict[str, int]:
        return {name: value for name, value in self if name != "total"}

    @model_validator(mode="after")
    def _total_matches_components(self):
        expected = sum(self.components().values())
        if self.total != expected:
            raise ValueError(f"total {self.total} does not equal sum of components {expected}")
        return self


class CoreHumanCapital(_Subtotal):
    age: int
    education: int
    first_language: int
    second_language: int
    canadian_work: int


class SpouseFactors(_Subtotal):
    education: int = 0
    language: int = 0
    canadian_work: int = 0
    total: int = 0


class SkillTransferability(_Subtotal):
    education_language: int = 0
    education_canadian_work: int = 0
    foreign_work_language: int = 0
    foreign_work_canadian_work: int = 0
    certificate_language: int = 0
    total: int = 0


class AdditionalPoints(_Subtotal):
    provincial_nomination: int = 0
    arranged_employment: int = 0
    canadian_study: int = 0
    siblings_in_canada: int = 0
    french_language_skills: int = 0
    total: int = 0


class Breakdown(CamelModel):
    core_human_capital: CoreHumanCapital
    spouse_factors: SpouseFactors
    skill_transferability: SkillTransferability
    additional_points: AdditionalPoints
    grand_total: int
    tables_version: str = Field(..., description="Version label of the point tables used")

    @property
    def subtotal(self) -> int:
        """Unclamped sum of the four category totals."""
        return (
            self.core_human_capital.total
            + self.spouse_factors.total
            + self.skill_transferability.total
            + self.additional_points.total
        )


class HistoryEntry(CamelModel):
    score: int
    breakdown: Breakdown
    calculated_at: datetime


class ActiveOverride(CamelModel):
    enabled: Literal[True] = True
    score: int
    reason: str
    set_by: str
    set_at: datetime


class InactiveOverride(CamelModel):
    """A disabled override, kept for audit."""

    enabled: Literal[False] = False
    score: int
    reason: str
    set_by: str
    set_at: datetime


Override = Union[ActiveOverride, InactiveOverride]


class CRSRecord(CamelModel):
    """Aggregate CRS document owned by the persistence layer."""

    inputs: Profile
    current_score: int
    breakdown: Breakdown
    history: tuple[HistoryEntry, ...] = ()
    override: Optional[Override] = None
    last_updated: datetime
