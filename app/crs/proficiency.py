"""
Language test -> benchmark level conversion.

Each test type owns a band table per skill; a raw score converts to the
level of the highest band whose lower bound it meets. Scores outside the
documented domain of the test (below its lowest band, above its maximum,
or off its scoring increment) are rejected rather than clamped.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from models.crs import ProficiencyLevels
from models.profile import LanguageTest, TestType
from app.crs.default_tables import DEFAULT_TABLES
from app.crs.errors import InvalidTestScore
from app.crs.tables import CRSTables, Skill, TestScale, lookup_band


def _on_step(score: float, step: float) -> bool:
    try:
        return Decimal(str(score)) % Decimal(str(step)) == 0
    except InvalidOperation:
        return False


def _convert_skill(test_type: TestType, scale: TestScale, skill: Skill, raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise InvalidTestScore(test_type.value, skill.value, raw, "score must be a number")
    if not math.isfinite(raw):
        raise InvalidTestScore(test_type.value, skill.value, raw, "score must be finite")
    floor, maximum = scale.floor(skill), scale.maximum[skill]
    if raw < floor or raw > maximum:
        raise InvalidTestScore(
            test_type.value, skill.value, raw, f"outside documented range [{floor:g}, {maximum:g}]"
        )
    if not _on_step(raw, scale.step):
        raise InvalidTestScore(test_type.value, skill.value, raw, f"not a multiple of {scale.step:g}")
    return lookup_band(scale.bands[skill], raw)


def normalize_proficiency(
    test_type: TestType | str,
    raw_scores: Mapping[str, Any],
    tables: CRSTables = DEFAULT_TABLES,
) -> ProficiencyLevels:
    """
    Convert four raw skill scores of one test into benchmark levels.

    `raw_scores` is keyed by skill name (reading, listening, speaking, writing).
    Raises InvalidTestScore for an unknown test type, a missing skill, or a
    score outside the test's documented domain.
    """
    try:
        test_type = TestType(test_type)
    except ValueError:
        raise InvalidTestScore(str(test_type), "*", None, "unknown test type") from None
    scale = tables.proficiency[test_type]

    levels: dict[str, int] = {}
    for skill in Skill:
        if skill.value not in raw_scores:
            raise InvalidTestScore(test_type.value, skill.value, None, "score is missing")
        levels[skill.value] = _convert_skill(test_type, scale, skill, raw_scores[skill.value])
    return ProficiencyLevels(**levels)


def normalize_test(test: LanguageTest, tables: CRSTables = DEFAULT_TABLES) -> ProficiencyLevels:
    return normalize_proficiency(test.test_type, test.raw_scores(), tables)
