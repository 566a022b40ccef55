"""Spouse or common-law partner factors."""

from __future__ import annotations

from typing import Optional

from models.crs import ProficiencyLevels, SpouseFactors
from models.profile import SpouseProfile
from app.crs.default_tables import DEFAULT_TABLES
from app.crs.errors import MissingSpouseProfile
from app.crs.tables import CRSTables, lookup_band


def compute_spouse_factors(
    spouse: Optional[SpouseProfile],
    language: Optional[ProficiencyLevels],
    has_spouse: bool,
    tables: CRSTables = DEFAULT_TABLES,
) -> SpouseFactors:
    """
    Points for an accompanying spouse's education, language and Canadian work.

    `language` holds the spouse's normalized levels, or None when the spouse
    supplied no test. All factors are zero without an accompanying spouse.
    """
    if not has_spouse:
        return SpouseFactors()
    if spouse is None:
        raise MissingSpouseProfile()

    spouse_tables = tables.spouse
    language_points = 0
    if language is not None:
        language_points = min(
            sum(lookup_band(spouse_tables.language, level) for level in language.as_tuple()),
            spouse_tables.language_maximum,
        )
    points = {
        "education": spouse_tables.education[spouse.education],
        "language": language_points,
        "canadian_work": lookup_band(spouse_tables.canadian_work, spouse.canadian_years),
    }
    return SpouseFactors(**points, total=sum(points.values()))
