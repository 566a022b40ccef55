"""
CRS (Comprehensive Ranking System) scoring engine for Express Entry.

Turns an applicant profile into a full, immutable points breakdown:

    profile -> validation -> language normalization
            -> core factors, spouse factors -> skill transferability
            -> additional points -> aggregate

The engine is a family of pure functions. It performs no I/O, holds no
mutable state and reads only the table set it is handed, so identical input
always yields an identical breakdown. Invalid input raises before any points
are looked up; a partial breakdown is never returned.

Legal disclaimer: This tool is for general guidance only. Official IRCC
system results govern. See Canada.ca CRS calculator disclaimer.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from models.crs import AdditionalPoints, Breakdown, CoreHumanCapital, SkillTransferability, SpouseFactors
from models.profile import Profile
from app.crs.additional import compute_additional_points, split_by_language
from app.crs.core_factors import compute_core_factors
from app.crs.default_tables import DEFAULT_TABLES
from app.crs.proficiency import normalize_test
from app.crs.spouse_factors import compute_spouse_factors
from app.crs.tables import CRSTables
from app.crs.transferability import compute_skill_transferability
from app.crs.validation import parse_profile, validate_profile

logger = logging.getLogger(__name__)


def aggregate(
    core: CoreHumanCapital,
    spouse: SpouseFactors,
    transferability: SkillTransferability,
    additional: AdditionalPoints,
    tables: CRSTables = DEFAULT_TABLES,
) -> Breakdown:
    """Assemble the breakdown; the grand total is the exact subtotal sum, clamped to the maximum."""
    subtotal = core.total + spouse.total + transferability.total + additional.total
    return Breakdown(
        core_human_capital=core,
        spouse_factors=spouse,
        skill_transferability=transferability,
        additional_points=additional,
        grand_total=min(tables.maximum_score, subtotal),
        tables_version=tables.version,
    )


def compute_crs(profile: Profile | Mapping[str, Any], tables: CRSTables = DEFAULT_TABLES) -> Breakdown:
    """
    Compute the CRS breakdown of a profile.

    Raises InvalidProfile, MissingSpouseProfile or InvalidTestScore.
    """
    profile = parse_profile(profile)
    validate_profile(profile)

    languages = profile.language_proficiency
    first = normalize_test(languages.first, tables)
    second = normalize_test(languages.second, tables) if languages.second is not None else None
    spouse_language = None
    if profile.has_spouse and profile.spouse.language is not None:
        spouse_language = normalize_test(profile.spouse.language, tables)

    work = profile.work_experience
    core = compute_core_factors(
        profile.age,
        profile.education,
        first,
        second,
        work.canadian_years,
        profile.has_spouse,
        tables,
    )
    spouse = compute_spouse_factors(profile.spouse, spouse_language, profile.has_spouse, tables)
    transferability = compute_skill_transferability(
        profile.education,
        first,
        work.canadian_years,
        work.foreign_years,
        profile.certificate_of_qualification,
        tables,
    )
    french, english = split_by_language(
        first,
        languages.first.test_type,
        second,
        languages.second.test_type if languages.second is not None else None,
    )
    additional = compute_additional_points(
        profile.provincial_nomination,
        profile.arranged_employment,
        profile.canadian_study,
        profile.siblings_in_canada,
        profile.french_bonus_eligible,
        french,
        english,
        tables,
    )

    breakdown = aggregate(core, spouse, transferability, additional, tables)
    logger.debug("CRS computed: total=%s tables=%s", breakdown.grand_total, tables.version)
    return breakdown
