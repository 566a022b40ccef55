"""
Representative Express Entry point tables.

Values follow the published Canada.ca CRS criteria as of March 25, 2025:
https://www.canada.ca/en/immigration-refugees-citizenship/services/immigrate-canada/express-entry/check-score/crs-criteria.html

Job offers no longer earn points since that date, so arranged employment is
worth 0. Official results govern; revise by publishing a new table set with
its own version label.
"""

from __future__ import annotations

from models.profile import CanadianStudyLevel, EducationLevel, TestType
from app.crs.tables import (
    AdditionalTables,
    CanadianWorkTier,
    CertificateTier,
    Combination,
    CombinationGroup,
    CRSTables,
    EducationTier,
    FactorTables,
    ForeignWorkTier,
    LanguageTier,
    Skill,
    SpouseTables,
    TestScale,
    TransferabilityTables,
)

E = EducationLevel
L = LanguageTier

# --- Language test -> benchmark level ---

_IELTS = TestScale(
    step=0.5,
    maximum={skill: 9.0 for skill in Skill},
    bands={
        Skill.READING: ((8.0, 10), (7.0, 9), (6.5, 8), (6.0, 7), (5.0, 6), (4.0, 5), (3.5, 4)),
        Skill.WRITING: ((7.5, 10), (7.0, 9), (6.5, 8), (6.0, 7), (5.5, 6), (5.0, 5), (4.0, 4)),
        Skill.LISTENING: ((8.5, 10), (8.0, 9), (7.5, 8), (6.0, 7), (5.5, 6), (5.0, 5), (4.5, 4)),
        Skill.SPEAKING: ((7.5, 10), (7.0, 9), (6.5, 8), (6.0, 7), (5.5, 6), (5.0, 5), (4.0, 4)),
    },
)

# CELPIP-General levels equal benchmark levels; 11 and 12 credit as 10.
_CELPIP_BANDS = tuple((level, level) for level in range(10, 3, -1))
_CELPIP = TestScale(
    step=1,
    maximum={skill: 12 for skill in Skill},
    bands={skill: _CELPIP_BANDS for skill in Skill},
)

_TEF_PRODUCTIVE = ((393, 10), (371, 9), (349, 8), (310, 7), (271, 6), (226, 5), (181, 4))
_TEF = TestScale(
    step=1,
    maximum={Skill.READING: 300, Skill.LISTENING: 360, Skill.SPEAKING: 450, Skill.WRITING: 450},
    bands={
        Skill.READING: ((263, 10), (248, 9), (233, 8), (207, 7), (181, 6), (151, 5), (121, 4)),
        Skill.LISTENING: ((316, 10), (298, 9), (280, 8), (249, 7), (217, 6), (181, 5), (145, 4)),
        Skill.SPEAKING: _TEF_PRODUCTIVE,
        Skill.WRITING: _TEF_PRODUCTIVE,
    },
)

_TCF_PRODUCTIVE = ((16, 10), (14, 9), (12, 8), (10, 7), (7, 6), (6, 5), (4, 4))
_TCF = TestScale(
    step=1,
    maximum={Skill.READING: 699, Skill.LISTENING: 699, Skill.SPEAKING: 20, Skill.WRITING: 20},
    bands={
        Skill.READING: ((549, 10), (524, 9), (499, 8), (453, 7), (406, 6), (375, 5), (342, 4)),
        Skill.LISTENING: ((549, 10), (523, 9), (503, 8), (458, 7), (398, 6), (369, 5), (331, 4)),
        Skill.SPEAKING: _TCF_PRODUCTIVE,
        Skill.WRITING: _TCF_PRODUCTIVE,
    },
)

# --- Core human capital ---

_SECOND_LANGUAGE = ((9, 6), (7, 3), (5, 1), (0, 0))

WITHOUT_SPOUSE = FactorTables(
    age=(
        (45, 0), (44, 6), (43, 17), (42, 28), (41, 39), (40, 50), (39, 55), (38, 61),
        (37, 66), (36, 72), (35, 77), (34, 83), (33, 88), (32, 94), (31, 99), (30, 105),
        (20, 110), (19, 105), (18, 99), (0, 0),
    ),
    education={
        E.LESS_THAN_SECONDARY: 0,
        E.SECONDARY: 30,
        E.ONE_YEAR_POST_SECONDARY: 90,
        E.TWO_YEAR_POST_SECONDARY: 98,
        E.BACHELORS_OR_3_YEAR: 120,
        E.TWO_OR_MORE_CREDENTIALS: 128,
        E.MASTERS: 135,
        E.PROFESSIONAL_DEGREE: 135,
        E.DOCTORAL: 150,
    },
    first_language=((10, 34), (9, 31), (8, 23), (7, 17), (6, 9), (4, 6), (0, 0)),
    second_language=_SECOND_LANGUAGE,
    second_language_maximum=24,
    canadian_work=((5, 80), (4, 72), (3, 64), (2, 53), (1, 40), (0, 0)),
)

WITH_SPOUSE = FactorTables(
    age=(
        (45, 0), (44, 5), (43, 15), (42, 25), (41, 35), (40, 45), (39, 50), (38, 55),
        (37, 60), (36, 65), (35, 70), (34, 75), (33, 80), (32, 85), (31, 90), (30, 95),
        (20, 100), (19, 95), (18, 90), (0, 0),
    ),
    education={
        E.LESS_THAN_SECONDARY: 0,
        E.SECONDARY: 28,
        E.ONE_YEAR_POST_SECONDARY: 84,
        E.TWO_YEAR_POST_SECONDARY: 91,
        E.BACHELORS_OR_3_YEAR: 112,
        E.TWO_OR_MORE_CREDENTIALS: 119,
        E.MASTERS: 126,
        E.PROFESSIONAL_DEGREE: 126,
        E.DOCTORAL: 140,
    },
    first_language=((10, 32), (9, 29), (8, 22), (7, 16), (6, 8), (4, 6), (0, 0)),
    second_language=_SECOND_LANGUAGE,
    second_language_maximum=22,
    canadian_work=((5, 70), (4, 63), (3, 56), (2, 46), (1, 35), (0, 0)),
)

SPOUSE = SpouseTables(
    education={
        E.LESS_THAN_SECONDARY: 0,
        E.SECONDARY: 2,
        E.ONE_YEAR_POST_SECONDARY: 6,
        E.TWO_YEAR_POST_SECONDARY: 7,
        E.BACHELORS_OR_3_YEAR: 8,
        E.TWO_OR_MORE_CREDENTIALS: 9,
        E.MASTERS: 10,
        E.PROFESSIONAL_DEGREE: 10,
        E.DOCTORAL: 10,
    },
    language=((9, 5), (7, 3), (5, 1), (0, 0)),
    language_maximum=20,
    canadian_work=((5, 10), (4, 9), (3, 8), (2, 7), (1, 5), (0, 0)),
)

# --- Skill transferability ---

_NO_POINTS_BY_LANGUAGE = {L.BELOW_CLB5: 0, L.CLB5: 0, L.CLB7: 0, L.CLB9: 0}
_NO_POINTS_BY_CANADIAN_WORK = {
    CanadianWorkTier.NONE: 0,
    CanadianWorkTier.ONE_YEAR: 0,
    CanadianWorkTier.TWO_PLUS_YEARS: 0,
}

TRANSFERABILITY = TransferabilityTables(
    education_tiers={
        E.LESS_THAN_SECONDARY: EducationTier.NONE,
        E.SECONDARY: EducationTier.NONE,
        E.ONE_YEAR_POST_SECONDARY: EducationTier.POST_SECONDARY,
        E.TWO_YEAR_POST_SECONDARY: EducationTier.POST_SECONDARY,
        E.BACHELORS_OR_3_YEAR: EducationTier.POST_SECONDARY,
        E.TWO_OR_MORE_CREDENTIALS: EducationTier.ADVANCED,
        E.MASTERS: EducationTier.ADVANCED,
        E.PROFESSIONAL_DEGREE: EducationTier.ADVANCED,
        E.DOCTORAL: EducationTier.ADVANCED,
    },
    language_tiers=((9, L.CLB9), (7, L.CLB7), (5, L.CLB5), (0, L.BELOW_CLB5)),
    canadian_work_tiers=(
        (2, CanadianWorkTier.TWO_PLUS_YEARS),
        (1, CanadianWorkTier.ONE_YEAR),
        (0, CanadianWorkTier.NONE),
    ),
    foreign_work_tiers=(
        (3, ForeignWorkTier.THREE_PLUS_YEARS),
        (1, ForeignWorkTier.ONE_TO_TWO_YEARS),
        (0, ForeignWorkTier.NONE),
    ),
    education_language={
        EducationTier.NONE: _NO_POINTS_BY_LANGUAGE,
        EducationTier.POST_SECONDARY: {L.BELOW_CLB5: 0, L.CLB5: 0, L.CLB7: 13, L.CLB9: 25},
        EducationTier.ADVANCED: {L.BELOW_CLB5: 0, L.CLB5: 0, L.CLB7: 25, L.CLB9: 50},
    },
    education_canadian_work={
        EducationTier.NONE: _NO_POINTS_BY_CANADIAN_WORK,
        EducationTier.POST_SECONDARY: {
            CanadianWorkTier.NONE: 0,
            CanadianWorkTier.ONE_YEAR: 13,
            CanadianWorkTier.TWO_PLUS_YEARS: 25,
        },
        EducationTier.ADVANCED: {
            CanadianWorkTier.NONE: 0,
            CanadianWorkTier.ONE_YEAR: 25,
            CanadianWorkTier.TWO_PLUS_YEARS: 50,
        },
    },
    foreign_work_language={
        ForeignWorkTier.NONE: _NO_POINTS_BY_LANGUAGE,
        ForeignWorkTier.ONE_TO_TWO_YEARS: {L.BELOW_CLB5: 0, L.CLB5: 0, L.CLB7: 13, L.CLB9: 25},
        ForeignWorkTier.THREE_PLUS_YEARS: {L.BELOW_CLB5: 0, L.CLB5: 0, L.CLB7: 25, L.CLB9: 50},
    },
    foreign_work_canadian_work={
        ForeignWorkTier.NONE: _NO_POINTS_BY_CANADIAN_WORK,
        ForeignWorkTier.ONE_TO_TWO_YEARS: {
            CanadianWorkTier.NONE: 0,
            CanadianWorkTier.ONE_YEAR: 13,
            CanadianWorkTier.TWO_PLUS_YEARS: 25,
        },
        ForeignWorkTier.THREE_PLUS_YEARS: {
            CanadianWorkTier.NONE: 0,
            CanadianWorkTier.ONE_YEAR: 25,
            CanadianWorkTier.TWO_PLUS_YEARS: 50,
        },
    },
    certificate_language={
        CertificateTier.NONE: _NO_POINTS_BY_LANGUAGE,
        CertificateTier.HELD: {L.BELOW_CLB5: 0, L.CLB5: 25, L.CLB7: 50, L.CLB9: 50},
    },
    combination_caps={combination: 50 for combination in Combination},
    groups=(
        CombinationGroup(
            members=(Combination.EDUCATION_LANGUAGE, Combination.EDUCATION_CANADIAN_WORK),
            cap=50,
        ),
        CombinationGroup(
            members=(Combination.FOREIGN_WORK_LANGUAGE, Combination.FOREIGN_WORK_CANADIAN_WORK),
            cap=50,
        ),
        CombinationGroup(members=(Combination.CERTIFICATE_LANGUAGE,), cap=50),
    ),
    maximum=100,
)

# --- Additional points ---

ADDITIONAL = AdditionalTables(
    provincial_nomination=600,
    arranged_employment=0,
    canadian_study={
        CanadianStudyLevel.NONE: 0,
        CanadianStudyLevel.ONE_YEAR: 15,
        CanadianStudyLevel.TWO_PLUS_YEARS: 30,
    },
    siblings_in_canada=15,
    french_with_english=50,
    french_only=25,
)

DEFAULT_TABLES = CRSTables(
    version="2025-03-25",
    maximum_score=1200,
    no_equivalency_ceiling=E.SECONDARY,
    proficiency={
        TestType.IELTS: _IELTS,
        TestType.CELPIP: _CELPIP,
        TestType.TEF: _TEF,
        TestType.TCF: _TCF,
    },
    without_spouse=WITHOUT_SPOUSE,
    with_spouse=WITH_SPOUSE,
    spouse=SPOUSE,
    transferability=TRANSFERABILITY,
    additional=ADDITIONAL,
)
