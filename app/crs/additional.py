"""Additional points: nomination, arranged employment, Canadian study, sibling, French."""

from __future__ import annotations

from typing import Optional

from models.crs import AdditionalPoints, ProficiencyLevels
from models.profile import CanadianStudyLevel, TestType
from app.crs.default_tables import DEFAULT_TABLES
from app.crs.tables import AdditionalTables, CRSTables


def french_language_points(
    french: Optional[ProficiencyLevels],
    english: Optional[ProficiencyLevels],
    eligible: bool,
    t: AdditionalTables,
) -> int:
    """
    Bonus for strong French.

    Strong French on every skill earns the lower bonus; strong French plus
    at least functional English on every skill earns the higher one.
    """
    if not eligible or french is None or not french.all_at_least(t.french_strong_level):
        return 0
    if english is not None and english.all_at_least(t.english_functional_level):
        return t.french_with_english
    return t.french_only


def split_by_language(
    first: ProficiencyLevels,
    first_type: TestType,
    second: Optional[ProficiencyLevels],
    second_type: Optional[TestType],
) -> tuple[Optional[ProficiencyLevels], Optional[ProficiencyLevels]]:
    """Return (french, english) levels from the first and second test results."""
    french = english = None
    for levels, test_type in ((first, first_type), (second, second_type)):
        if levels is None or test_type is None:
            continue
        if test_type.is_french:
            french = levels
        else:
            english = levels
    return french, english


def compute_additional_points(
    provincial_nomination: bool,
    arranged_employment: bool,
    canadian_study: CanadianStudyLevel,
    siblings_in_canada: bool,
    french_bonus_eligible: bool,
    french: Optional[ProficiencyLevels],
    english: Optional[ProficiencyLevels],
    tables: CRSTables = DEFAULT_TABLES,
) -> AdditionalPoints:
    t = tables.additional
    points = {
        "provincial_nomination": t.provincial_nomination if provincial_nomination else 0,
        "arranged_employment": t.arranged_employment if arranged_employment else 0,
        "canadian_study": t.canadian_study[canadian_study],
        "siblings_in_canada": t.siblings_in_canada if siblings_in_canada else 0,
        "french_language_skills": french_language_points(french, english, french_bonus_eligible, t),
    }
    return AdditionalPoints(**points, total=sum(points.values()))
