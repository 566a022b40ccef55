"""
Tests for skill transferability combinations and their caps.
"""

import pytest

from app.crs.default_tables import DEFAULT_TABLES
from app.crs.tables import Combination, CombinationGroup, EducationTier, LanguageTier
from app.crs.transferability import apply_caps, combination_points, compute_skill_transferability
from models.crs import ProficiencyLevels
from models.profile import EducationCredential, EducationLevel


def clb(level):
    return ProficiencyLevels(reading=level, listening=level, speaking=level, writing=level)


def assessed(level):
    return EducationCredential(highest=level, eca={"hasECA": True})


def tables_with(**transferability_updates):
    t = DEFAULT_TABLES.transferability.model_copy(update=transferability_updates)
    return DEFAULT_TABLES.model_copy(update={"transferability": t})


class TestCombinationTables:

    def test_every_cell_of_every_grid_resolves(self):
        t = DEFAULT_TABLES.transferability
        for combination in Combination:
            grid = t.grid(combination)
            for row in grid.values():
                assert all(isinstance(points, int) for points in row.values())

    def test_reference_candidate_combinations(self):
        raw = combination_points(EducationLevel.MASTERS, clb(9), 3, 0, False)
        assert raw[Combination.EDUCATION_LANGUAGE] == 50
        assert raw[Combination.EDUCATION_CANADIAN_WORK] == 50
        assert raw[Combination.FOREIGN_WORK_LANGUAGE] == 0
        assert raw[Combination.FOREIGN_WORK_CANADIAN_WORK] == 0
        assert raw[Combination.CERTIFICATE_LANGUAGE] == 0

    def test_language_tier_uses_weakest_skill(self):
        mixed = ProficiencyLevels(reading=10, listening=10, speaking=10, writing=6)
        raw = combination_points(EducationLevel.MASTERS, mixed, 0, 0, False)
        assert raw[Combination.EDUCATION_LANGUAGE] == 0

    def test_zero_foreign_years_contribute_exactly_zero(self):
        raw = combination_points(EducationLevel.DOCTORAL, clb(10), 5, 0, False)
        assert raw[Combination.FOREIGN_WORK_LANGUAGE] == 0
        assert raw[Combination.FOREIGN_WORK_CANADIAN_WORK] == 0

    def test_certificate_needs_only_benchmark_five(self):
        raw = combination_points(EducationLevel.SECONDARY, clb(5), 0, 0, True)
        assert raw[Combination.CERTIFICATE_LANGUAGE] == 25


class TestCaps:

    def test_education_pair_shares_one_group_cap(self):
        result = compute_skill_transferability(assessed(EducationLevel.MASTERS), clb(9), 3, 0, False)
        assert result.education_language == 50
        assert result.education_canadian_work == 0
        assert result.total == 50

    def test_mixed_groups(self):
        result = compute_skill_transferability(assessed(EducationLevel.BACHELORS_OR_3_YEAR), clb(9), 1, 3, False)
        assert result.education_language == 25
        assert result.education_canadian_work == 13
        assert result.foreign_work_language == 50
        assert result.foreign_work_canadian_work == 0
        assert result.total == 88

    def test_category_never_exceeds_overall_maximum(self):
        result = compute_skill_transferability(assessed(EducationLevel.DOCTORAL), clb(10), 5, 10, True)
        assert result.total == 100
        assert result.certificate_language == 0
        assert result.total == sum(result.components().values())

    def test_combination_cap_clamps_oversized_table_values(self):
        t = DEFAULT_TABLES.transferability
        oversized = {
            **t.education_language,
            EducationTier.ADVANCED: {**t.education_language[EducationTier.ADVANCED], LanguageTier.CLB9: 80},
        }
        tables = tables_with(
            education_language=oversized,
            combination_caps={combination: 25 for combination in Combination},
            groups=(),
        )
        raw = combination_points(EducationLevel.MASTERS, clb(9), 0, 0, False, tables)
        assert raw[Combination.EDUCATION_LANGUAGE] == 80

        result = compute_skill_transferability(assessed(EducationLevel.MASTERS), clb(9), 0, 0, False, tables)
        assert result.education_language == 25
        # the table value itself is untouched
        assert tables.transferability.education_language[EducationTier.ADVANCED][LanguageTier.CLB9] == 80

    def test_ungrouped_combinations_only_share_the_overall_cap(self):
        t = DEFAULT_TABLES.transferability
        raw = {combination: 50 for combination in Combination}
        awarded = apply_caps(raw, t.model_copy(update={"groups": ()}))
        assert awarded[Combination.EDUCATION_LANGUAGE] == 50
        assert awarded[Combination.EDUCATION_CANADIAN_WORK] == 50
        assert sum(awarded.values()) == 100

    @pytest.mark.parametrize("education", list(EducationLevel))
    @pytest.mark.parametrize("level", [4, 5, 7, 9, 10])
    @pytest.mark.parametrize("canadian,foreign", [(0, 0), (1, 1), (2, 3), (5, 10)])
    @pytest.mark.parametrize("certificate", [False, True])
    def test_caps_hold_for_every_input(self, education, level, canadian, foreign, certificate):
        t = DEFAULT_TABLES.transferability
        result = compute_skill_transferability(assessed(education), clb(level), canadian, foreign, certificate)
        assert 0 <= result.total <= t.maximum
        values = {
            Combination.EDUCATION_LANGUAGE: result.education_language,
            Combination.EDUCATION_CANADIAN_WORK: result.education_canadian_work,
            Combination.FOREIGN_WORK_LANGUAGE: result.foreign_work_language,
            Combination.FOREIGN_WORK_CANADIAN_WORK: result.foreign_work_canadian_work,
            Combination.CERTIFICATE_LANGUAGE: result.certificate_language,
        }
        for combination, value in values.items():
            assert 0 <= value <= t.combination_caps[combination]
        for group in t.groups:
            points = apply_caps(
                combination_points(education, clb(level), canadian, foreign, certificate), t
            )
            assert sum(points[member] for member in group.members) <= group.cap

    def test_custom_group(self):
        t = DEFAULT_TABLES.transferability.model_copy(
            update={
                "groups": (
                    CombinationGroup(
                        members=(Combination.EDUCATION_LANGUAGE, Combination.FOREIGN_WORK_LANGUAGE),
                        cap=30,
                    ),
                )
            }
        )
        raw = {combination: 0 for combination in Combination}
        raw[Combination.EDUCATION_LANGUAGE] = 25
        raw[Combination.FOREIGN_WORK_LANGUAGE] = 25
        awarded = apply_caps(raw, t)
        assert awarded[Combination.EDUCATION_LANGUAGE] == 25
        assert awarded[Combination.FOREIGN_WORK_LANGUAGE] == 5


def test_unassessed_foreign_degree_uses_capped_level():
    result = compute_skill_transferability(EducationCredential(highest=EducationLevel.MASTERS), clb(9), 3, 0, False)
    assert result.education_language == 0
    assert result.education_canadian_work == 0
