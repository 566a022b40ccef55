"""
Failures raised by the CRS engine.

All of them are validation failures raised before any points are looked up;
the engine never returns a partially computed breakdown.
"""

from __future__ import annotations

import math
from typing import Any, Mapping


class CRSError(Exception):
    """Base class for every scoring failure."""

    code = "crs_error"

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": str(self)}


class InvalidProfile(CRSError):
    """The profile violates one or more structural constraints."""

    code = "invalid_profile"

    def __init__(self, violations: Mapping[str, str]):
        self.violations = dict(violations)
        fields = ", ".join(self.violations)
        super().__init__(f"Invalid profile fields: {fields}")

    @property
    def fields(self) -> list[str]:
        return list(self.violations)

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["fields"] = self.fields
        out["violations"] = self.violations
        return out


class InvalidTestScore(CRSError):
    """A raw language test score lies outside the test's documented domain."""

    code = "invalid_test_score"

    def __init__(self, test_type: str, skill: str, score: Any, reason: str):
        self.test_type = test_type
        self.skill = skill
        self.score = score
        self.reason = reason
        super().__init__(f"{test_type} {skill} score {score!r}: {reason}")

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        score = self.score
        if isinstance(score, float) and not math.isfinite(score):
            # JSON has no NaN or Infinity
            score = str(score)
        out.update({"testType": self.test_type, "skill": self.skill, "score": score})
        return out


class MissingSpouseProfile(CRSError):
    code = "missing_spouse_profile"

    def __init__(self):
        super().__init__("hasSpouse is true but no spouse profile was supplied")


class InvalidOverrideScore(CRSError):
    code = "invalid_override_score"

    def __init__(self, score: Any, maximum: int):
        self.score = score
        self.maximum = maximum
        super().__init__(f"Override score {score!r} is outside [0, {maximum}]")

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out.update({"score": self.score, "maximum": self.maximum})
        return out
