"""
Skill transferability: points for combinations of education, language and work.

Each combination is read from a small two-dimensional table keyed by the
tiers of its two inputs. Caps are clamps applied on top of the table values,
in three layers:

1. each combination is clamped to its own cap,
2. each group of combinations (e.g. the two education combinations) is
   clamped to the group cap,
3. the category as a whole is clamped to the overall maximum.

Points trimmed by a group or overall cap are taken from the later members in
table order, so the reported combinations always add up to the category
total.
"""

from __future__ import annotations

from models.crs import ProficiencyLevels, SkillTransferability
from models.profile import EducationCredential, EducationLevel
from app.crs.core_factors import effective_education
from app.crs.default_tables import DEFAULT_TABLES
from app.crs.tables import CertificateTier, Combination, CRSTables, TransferabilityTables, lookup_band

_FIELD_NAMES = {
    Combination.EDUCATION_LANGUAGE: "education_language",
    Combination.EDUCATION_CANADIAN_WORK: "education_canadian_work",
    Combination.FOREIGN_WORK_LANGUAGE: "foreign_work_language",
    Combination.FOREIGN_WORK_CANADIAN_WORK: "foreign_work_canadian_work",
    Combination.CERTIFICATE_LANGUAGE: "certificate_language",
}


def combination_points(
    education_level: EducationLevel,
    first_language: ProficiencyLevels,
    canadian_years: int,
    foreign_years: int,
    has_certificate: bool,
    tables: CRSTables = DEFAULT_TABLES,
) -> dict[Combination, int]:
    """Uncapped table value of every combination."""
    t = tables.transferability
    education = t.education_tiers[education_level]
    language = lookup_band(t.language_tiers, first_language.minimum)
    canadian = lookup_band(t.canadian_work_tiers, canadian_years)
    foreign = lookup_band(t.foreign_work_tiers, foreign_years)
    certificate = CertificateTier.HELD if has_certificate else CertificateTier.NONE

    return {
        Combination.EDUCATION_LANGUAGE: t.education_language[education][language],
        Combination.EDUCATION_CANADIAN_WORK: t.education_canadian_work[education][canadian],
        Combination.FOREIGN_WORK_LANGUAGE: t.foreign_work_language[foreign][language],
        Combination.FOREIGN_WORK_CANADIAN_WORK: t.foreign_work_canadian_work[foreign][canadian],
        Combination.CERTIFICATE_LANGUAGE: t.certificate_language[certificate][language],
    }


def apply_caps(raw: dict[Combination, int], t: TransferabilityTables) -> dict[Combination, int]:
    """Clamp raw combination values by combination, group and overall caps."""
    capped = {combination: min(raw[combination], t.combination_caps[combination]) for combination in Combination}

    grouped = {member for group in t.groups for member in group.members}
    units = [(group.members, group.cap) for group in t.groups]
    units += [((combination,), t.maximum) for combination in Combination if combination not in grouped]

    awarded: dict[Combination, int] = {}
    remaining = t.maximum
    for members, cap in units:
        room = cap
        for combination in members:
            award = min(capped[combination], room, remaining)
            awarded[combination] = award
            room -= award
            remaining -= award
    return awarded


def compute_skill_transferability(
    education: EducationCredential,
    first_language: ProficiencyLevels,
    canadian_years: int,
    foreign_years: int,
    has_certificate: bool,
    tables: CRSTables = DEFAULT_TABLES,
) -> SkillTransferability:
    raw = combination_points(
        effective_education(education, tables),
        first_language,
        canadian_years,
        foreign_years,
        has_certificate,
        tables,
    )
    awarded = apply_caps(raw, tables.transferability)
    points = {_FIELD_NAMES[combination]: value for combination, value in awarded.items()}
    return SkillTransferability(**points, total=sum(points.values()))
