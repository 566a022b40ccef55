"""Structural profile checks run before any points are looked up."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from models.profile import MaritalStatus, Profile, TestType
from app.crs.errors import InvalidProfile, MissingSpouseProfile

_PARTNERED = (MaritalStatus.MARRIED, MaritalStatus.COMMON_LAW)
_MISSING = object()


def _partner_violations(
    has_spouse: Optional[bool],
    marital_status: Optional[MaritalStatus],
    spouse_supplied: bool,
) -> dict[str, str]:
    violations: dict[str, str] = {}
    if has_spouse and marital_status is not None and marital_status not in _PARTNERED:
        violations["hasSpouse"] = f"requires marital status married or common_law, got {marital_status.value}"
    if has_spouse is False and spouse_supplied:
        violations["spouse"] = "spouse profile supplied but hasSpouse is false"
    return violations


def _language_violations(first: Optional[TestType], second: Optional[TestType]) -> dict[str, str]:
    if first is not None and second is not None and first.is_french == second.is_french:
        return {"languageProficiency.second.testType": "second test must be in the other official language"}
    return {}


def _document_field(doc: Any, name: str, type_: Any, default: Any = None) -> Any:
    """Coerce one raw field; None when it is present but malformed."""
    if not isinstance(doc, Mapping):
        return None
    value = doc.get(to_camel(name), doc.get(name, _MISSING))
    if value is _MISSING:
        return default
    try:
        return TypeAdapter(type_).validate_python(value)
    except ValidationError:
        return None


def _document_violations(data: Mapping[str, Any]) -> dict[str, str]:
    """Cross-field checks on a raw document that failed to parse as a whole."""
    spouse = data.get("spouse")
    violations = _partner_violations(
        _document_field(data, "has_spouse", bool, False),
        _document_field(data, "marital_status", MaritalStatus, MaritalStatus.SINGLE),
        spouse is not None,
    )
    languages = _document_field(data, "language_proficiency", Any)
    first = _document_field(languages, "first", Any)
    second = _document_field(languages, "second", Any)
    violations.update(
        _language_violations(
            _document_field(first, "test_type", TestType),
            _document_field(second, "test_type", TestType),
        )
    )
    return violations


def parse_profile(data: Profile | Mapping[str, Any]) -> Profile:
    """
    Build a Profile from a raw document (camelCase or snake_case keys).

    Shape, type and range errors are reported together as one InvalidProfile,
    along with any cross-field violation the rest of the document shows.
    """
    if isinstance(data, Profile):
        return data
    try:
        return Profile.model_validate(data)
    except ValidationError as exc:
        violations = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "profile"
            violations.setdefault(field, error["msg"])
        if isinstance(data, Mapping):
            for field, message in _document_violations(data).items():
                violations.setdefault(field, message)
        raise InvalidProfile(violations) from None


def profile_violations(profile: Profile) -> dict[str, str]:
    """Every cross-field constraint a parsed profile breaks, keyed by field path."""
    violations = _partner_violations(profile.has_spouse, profile.marital_status, profile.spouse is not None)
    languages = profile.language_proficiency
    second = languages.second.test_type if languages.second is not None else None
    violations.update(_language_violations(languages.first.test_type, second))
    return violations


def validate_profile(profile: Profile) -> None:
    """
    Raise InvalidProfile listing every violated field, then MissingSpouseProfile
    when an accompanying spouse has no sub-profile.
    """
    violations = profile_violations(profile)
    if violations:
        raise InvalidProfile(violations)
    if profile.has_spouse and profile.spouse is None:
        raise MissingSpouseProfile()
