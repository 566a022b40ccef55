"""
End-to-end tests for compute_crs.
"""

import pytest

from app.crs.default_tables import DEFAULT_TABLES
from app.crs.engine import aggregate, compute_crs
from app.crs.errors import InvalidProfile, InvalidTestScore, MissingSpouseProfile
from models.crs import AdditionalPoints, CoreHumanCapital, SkillTransferability, SpouseFactors
from conftest import ielts, make_profile, married_profile, tef


def test_reference_candidate(reference_profile):
    breakdown = compute_crs(reference_profile)

    core = breakdown.core_human_capital
    assert (core.age, core.education, core.first_language, core.second_language, core.canadian_work) == (
        110, 135, 124, 0, 64,
    )
    assert core.total == 433
    assert breakdown.spouse_factors.total == 0
    assert breakdown.skill_transferability.total == 50
    assert breakdown.additional_points.total == 0
    assert breakdown.grand_total == 433 + 50
    assert breakdown.tables_version == DEFAULT_TABLES.version


def test_grand_total_is_exact_sum_of_subtotals(reference_profile):
    breakdown = compute_crs(reference_profile)
    assert breakdown.grand_total == (
        breakdown.core_human_capital.total
        + breakdown.spouse_factors.total
        + breakdown.skill_transferability.total
        + breakdown.additional_points.total
    )


def test_accompanying_spouse(spouse_profile):
    breakdown = compute_crs(spouse_profile)
    assert breakdown.core_human_capital.total == 100 + 126 + 116 + 56
    assert breakdown.spouse_factors.education == 8
    assert breakdown.spouse_factors.language == 12
    assert breakdown.spouse_factors.canadian_work == 5
    assert breakdown.grand_total == 398 + 25 + 50


def test_grand_total_is_clamped_to_system_maximum():
    profile = make_profile(
        languageProficiency={"first": ielts(9), "second": tef(7)},
        workExperience={"canadianYears": 3, "foreignYears": 3},
        provincialNomination=True,
        canadianStudy="twoPlusYears",
        siblingsInCanada=True,
        frenchBonusEligible=True,
    )
    breakdown = compute_crs(profile)
    assert breakdown.core_human_capital.second_language == 12
    assert breakdown.skill_transferability.total == 100
    assert breakdown.additional_points.french_language_skills == 50
    assert breakdown.subtotal == 445 + 100 + 695
    assert breakdown.grand_total == 1200


def test_alternate_maximum():
    tables = DEFAULT_TABLES.model_copy(update={"maximum_score": 400, "version": "test"})
    breakdown = compute_crs(make_profile(), tables)
    assert breakdown.grand_total == 400
    assert breakdown.tables_version == "test"


def test_identical_input_gives_identical_output(reference_profile):
    first = compute_crs(reference_profile)
    second = compute_crs(dict(reference_profile))
    assert first == second
    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_snake_case_documents_are_accepted():
    profile = {
        "age": 29,
        "language_proficiency": {"first": {"test_type": "IELTS", "reading": 7.0, "listening": 8.0, "speaking": 7.0, "writing": 7.0}},
        "education": {"highest": "Masters", "eca": {"hasECA": True}},
        "work_experience": {"canadian_years": 3},
    }
    assert compute_crs(profile).grand_total == 483


def test_ielts_listening_below_lowest_band_fails():
    first = dict(ielts(9), listening=4.0)
    with pytest.raises(InvalidTestScore) as exc:
        compute_crs(make_profile(languageProficiency={"first": first}))
    assert exc.value.skill == "listening"


def test_spouse_test_is_validated_too(spouse_profile):
    spouse_profile["spouse"]["language"] = dict(ielts(7), speaking=9.5)
    with pytest.raises(InvalidTestScore):
        compute_crs(spouse_profile)


def test_missing_spouse_profile():
    profile = married_profile()
    del profile["spouse"]
    with pytest.raises(MissingSpouseProfile):
        compute_crs(profile)


def test_profile_errors_take_precedence_over_test_scores():
    first = dict(ielts(9), listening=1.0)
    with pytest.raises(InvalidProfile) as exc:
        compute_crs(make_profile(age=12, languageProficiency={"first": first}))
    assert exc.value.fields == ["age"]


def test_aggregate_assembles_breakdown():
    core = CoreHumanCapital(age=1, education=2, first_language=3, second_language=0, canadian_work=4, total=10)
    breakdown = aggregate(
        core,
        SpouseFactors(),
        SkillTransferability(education_language=5, total=5),
        AdditionalPoints(provincial_nomination=600, total=600),
    )
    assert breakdown.grand_total == 615
