"""Core human capital: age, education, official languages, Canadian work."""

from __future__ import annotations

from typing import Optional

from models.crs import CoreHumanCapital, ProficiencyLevels
from models.profile import EducationCredential, EducationLevel
from app.crs.default_tables import DEFAULT_TABLES
from app.crs.tables import CRSTables, FactorTables, lookup_band


def effective_education(education: EducationCredential, tables: CRSTables = DEFAULT_TABLES) -> EducationLevel:
    """
    Education level credited for scoring.

    A foreign credential without an equivalency assessment is credited no
    higher than the table set's no-equivalency ceiling.
    """
    if education.has_equivalency:
        return education.highest
    ceiling = tables.no_equivalency_ceiling
    return education.highest if education.highest.rank <= ceiling.rank else ceiling


def age_points(age: int, factors: FactorTables) -> int:
    return lookup_band(factors.age, age)


def education_points(level: EducationLevel, factors: FactorTables) -> int:
    return factors.education[level]


def first_language_points(levels: ProficiencyLevels, factors: FactorTables) -> int:
    return sum(lookup_band(factors.first_language, level) for level in levels.as_tuple())


def second_language_points(levels: Optional[ProficiencyLevels], factors: FactorTables) -> int:
    # No second test is not an error; it simply earns nothing.
    if levels is None:
        return 0
    points = sum(lookup_band(factors.second_language, level) for level in levels.as_tuple())
    return min(points, factors.second_language_maximum)


def canadian_work_points(years: int, factors: FactorTables) -> int:
    return lookup_band(factors.canadian_work, years)


def compute_core_factors(
    age: int,
    education: EducationCredential,
    first_language: ProficiencyLevels,
    second_language: Optional[ProficiencyLevels],
    canadian_years: int,
    has_spouse: bool,
    tables: CRSTables = DEFAULT_TABLES,
) -> CoreHumanCapital:
    factors = tables.factors(has_spouse)
    points = {
        "age": age_points(age, factors),
        "education": education_points(effective_education(education, tables), factors),
        "first_language": first_language_points(first_language, factors),
        "second_language": second_language_points(second_language, factors),
        "canadian_work": canadian_work_points(canadian_years, factors),
    }
    return CoreHumanCapital(**points, total=sum(points.values()))
