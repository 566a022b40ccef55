"""
Point tables for the CRS engine.

Every factor is an explicit, immutable lookup table. A table set is an
ordinary value (`CRSTables`) handed to the engine entry points, so an
alternate or revised set can be loaded and scored against without touching
any shared state. Tables check their own exhaustiveness when constructed:
an incomplete table fails at load time, never halfway through a lookup.

Band tables are tuples of ``(lower_bound, value)`` pairs sorted by strictly
descending lower bound. A lookup returns the value of the first band whose
lower bound the input meets or exceeds.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Iterable, Mapping, Sequence, TypeVar

from pydantic import AfterValidator, Field, model_validator

from models.profile import CamelModel, CanadianStudyLevel, EducationLevel, TestType

T = TypeVar("T")


class Skill(str, Enum):
    READING = "reading"
    LISTENING = "listening"
    SPEAKING = "speaking"
    WRITING = "writing"


class EducationTier(str, Enum):
    NONE = "none"
    POST_SECONDARY = "postSecondary"
    ADVANCED = "advanced"


class LanguageTier(str, Enum):
    BELOW_CLB5 = "belowClb5"
    CLB5 = "clb5"
    CLB7 = "clb7"
    CLB9 = "clb9"


class CanadianWorkTier(str, Enum):
    NONE = "none"
    ONE_YEAR = "oneYear"
    TWO_PLUS_YEARS = "twoPlusYears"


class ForeignWorkTier(str, Enum):
    NONE = "none"
    ONE_TO_TWO_YEARS = "oneToTwoYears"
    THREE_PLUS_YEARS = "threePlusYears"


class CertificateTier(str, Enum):
    NONE = "none"
    HELD = "held"


class Combination(str, Enum):
    EDUCATION_LANGUAGE = "educationLanguage"
    EDUCATION_CANADIAN_WORK = "educationCanadianWork"
    FOREIGN_WORK_LANGUAGE = "foreignWorkLanguage"
    FOREIGN_WORK_CANADIAN_WORK = "foreignWorkCanadianWork"
    CERTIFICATE_LANGUAGE = "certificateLanguage"


def _descending(bands: Sequence[tuple[float, Any]]) -> Sequence[tuple[float, Any]]:
    if not bands:
        raise ValueError("band table is empty")
    lowers = [lower for lower, _ in bands]
    if any(a <= b for a, b in zip(lowers, lowers[1:])):
        raise ValueError(f"band lower bounds must be strictly descending, got {lowers}")
    return bands


def _reaches_zero(bands: Sequence[tuple[float, Any]]) -> Sequence[tuple[float, Any]]:
    _descending(bands)
    if bands[-1][0] > 0:
        raise ValueError(f"band table must cover 0, lowest band starts at {bands[-1][0]}")
    return bands


# Bands over a domain that starts at zero (ages, years, benchmark levels).
PointBands = Annotated[tuple[tuple[float, int], ...], AfterValidator(_reaches_zero)]
# Bands whose floor is the documented minimum of a raw test score.
ScoreBands = Annotated[tuple[tuple[float, int], ...], AfterValidator(_descending)]
LanguageTierBands = Annotated[tuple[tuple[int, LanguageTier], ...], AfterValidator(_reaches_zero)]
CanadianWorkTierBands = Annotated[tuple[tuple[int, CanadianWorkTier], ...], AfterValidator(_reaches_zero)]
ForeignWorkTierBands = Annotated[tuple[tuple[int, ForeignWorkTier], ...], AfterValidator(_reaches_zero)]


def lookup_band(bands: Iterable[tuple[float, T]], value: float) -> T:
    """Return the value of the highest band whose lower bound `value` meets."""
    for lower, result in bands:
        if value >= lower:
            return result
    raise LookupError(f"{value!r} is below the lowest band")


def _require_keys(table: Mapping, keys: Iterable, name: str) -> None:
    missing = [k.value if isinstance(k, Enum) else k for k in keys if k not in table]
    if missing:
        raise ValueError(f"{name} has no entry for {missing}")


def _require_grid(grid: Mapping, rows: Iterable, cols: Iterable, name: str) -> None:
    rows, cols = list(rows), list(cols)
    _require_keys(grid, rows, name)
    for row in rows:
        _require_keys(grid[row], cols, f"{name}[{row.value}]")


# --- Proficiency conversion ---

class TestScale(CamelModel):
    """Raw score domain and benchmark bands of one language test."""

    step: float = Field(..., gt=0, description="Smallest raw score increment")
    maximum: dict[Skill, float]
    bands: dict[Skill, ScoreBands]

    @model_validator(mode="after")
    def _check(self):
        _require_keys(self.maximum, Skill, "maximum")
        _require_keys(self.bands, Skill, "bands")
        for skill, bands in self.bands.items():
            if any(not 0 <= level <= 10 for _, level in bands):
                raise ValueError(f"{skill.value} bands must map to levels 0-10")
            if self.maximum[skill] < bands[0][0]:
                raise ValueError(f"{skill.value} maximum is below its highest band")
        return self

    def floor(self, skill: Skill) -> float:
        return self.bands[skill][-1][0]


# --- Core human capital ---

class FactorTables(CamelModel):
    """Principal applicant tables for one spouse situation."""

    age: PointBands
    education: dict[EducationLevel, int]
    first_language: PointBands = Field(..., description="Points per skill keyed by benchmark level")
    second_language: PointBands = Field(..., description="Points per skill keyed by benchmark level")
    second_language_maximum: int
    canadian_work: PointBands

    @model_validator(mode="after")
    def _check(self):
        _require_keys(self.education, EducationLevel, "education")
        return self


class SpouseTables(CamelModel):
    education: dict[EducationLevel, int]
    language: PointBands = Field(..., description="Points per skill keyed by benchmark level")
    language_maximum: int
    canadian_work: PointBands

    @model_validator(mode="after")
    def _check(self):
        _require_keys(self.education, EducationLevel, "education")
        return self


# --- Skill transferability ---

class CombinationGroup(CamelModel):
    members: tuple[Combination, ...]
    cap: int = Field(..., ge=0)


class TransferabilityTables(CamelModel):
    education_tiers: dict[EducationLevel, EducationTier]
    language_tiers: LanguageTierBands
    canadian_work_tiers: CanadianWorkTierBands
    foreign_work_tiers: ForeignWorkTierBands
    education_language: dict[EducationTier, dict[LanguageTier, int]]
    education_canadian_work: dict[EducationTier, dict[CanadianWorkTier, int]]
    foreign_work_language: dict[ForeignWorkTier, dict[LanguageTier, int]]
    foreign_work_canadian_work: dict[ForeignWorkTier, dict[CanadianWorkTier, int]]
    certificate_language: dict[CertificateTier, dict[LanguageTier, int]]
    combination_caps: dict[Combination, int]
    groups: tuple[CombinationGroup, ...] = ()
    maximum: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check(self):
        _require_keys(self.education_tiers, EducationLevel, "educationTiers")
        _require_grid(self.education_language, EducationTier, LanguageTier, "educationLanguage")
        _require_grid(self.education_canadian_work, EducationTier, CanadianWorkTier, "educationCanadianWork")
        _require_grid(self.foreign_work_language, ForeignWorkTier, LanguageTier, "foreignWorkLanguage")
        _require_grid(self.foreign_work_canadian_work, ForeignWorkTier, CanadianWorkTier, "foreignWorkCanadianWork")
        _require_grid(self.certificate_language, CertificateTier, LanguageTier, "certificateLanguage")
        _require_keys(self.combination_caps, Combination, "combinationCaps")
        seen: set[Combination] = set()
        for group in self.groups:
            overlap = seen.intersection(group.members)
            if overlap:
                raise ValueError(f"combinations {sorted(c.value for c in overlap)} belong to more than one group")
            seen.update(group.members)
        return self

    def grid(self, combination: Combination) -> Mapping[Any, Mapping[Any, int]]:
        return {
            Combination.EDUCATION_LANGUAGE: self.education_language,
            Combination.EDUCATION_CANADIAN_WORK: self.education_canadian_work,
            Combination.FOREIGN_WORK_LANGUAGE: self.foreign_work_language,
            Combination.FOREIGN_WORK_CANADIAN_WORK: self.foreign_work_canadian_work,
            Combination.CERTIFICATE_LANGUAGE: self.certificate_language,
        }[combination]


# --- Additional points ---

class AdditionalTables(CamelModel):
    provincial_nomination: int
    arranged_employment: int
    canadian_study: dict[CanadianStudyLevel, int]
    siblings_in_canada: int
    french_strong_level: int = Field(7, description="Minimum French level on every skill")
    english_functional_level: int = Field(5, description="Minimum English level on every skill for the higher bonus")
    french_with_english: int
    french_only: int

    @model_validator(mode="after")
    def _check(self):
        _require_keys(self.canadian_study, CanadianStudyLevel, "canadianStudy")
        return self


class CRSTables(CamelModel):
    """Complete, versioned table set consumed by the engine."""

    version: str
    maximum_score: int = Field(1200, gt=0)
    no_equivalency_ceiling: EducationLevel = Field(
        ..., description="Highest education level credited to a foreign credential without an assessment"
    )
    proficiency: dict[TestType, TestScale]
    without_spouse: FactorTables
    with_spouse: FactorTables
    spouse: SpouseTables
    transferability: TransferabilityTables
    additional: AdditionalTables

    @model_validator(mode="after")
    def _check(self):
        _require_keys(self.proficiency, TestType, "proficiency")
        return self

    def factors(self, has_spouse: bool) -> FactorTables:
        return self.with_spouse if has_spouse else self.without_spouse


def load_tables(path: str | Path) -> CRSTables:
    """Load a table set from a JSON document."""
    return CRSTables.model_validate_json(Path(path).read_text(encoding="utf-8"))
