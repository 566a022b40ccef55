from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MIN_AGE = 17
MAX_AGE = 100
MAX_CANADIAN_YEARS = 5
MAX_FOREIGN_YEARS = 10


class CamelModel(BaseModel):
    """Immutable model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class MaritalStatus(str, Enum):
    SINGLE = "single"
    MARRIED = "married"
    COMMON_LAW = "common_law"


class TestType(str, Enum):
    IELTS = "IELTS"
    CELPIP = "CELPIP"
    TEF = "TEF"
    TCF = "TCF"

    @property
    def is_french(self) -> bool:
        return self in (TestType.TEF, TestType.TCF)


class EducationLevel(str, Enum):
    LESS_THAN_SECONDARY = "LessThanSecondary"
    SECONDARY = "Secondary"
    ONE_YEAR_POST_SECONDARY = "OneYearPostSecondary"
    TWO_YEAR_POST_SECONDARY = "TwoYearPostSecondary"
    BACHELORS_OR_3_YEAR = "BachelorsOr3Year"
    TWO_OR_MORE_CREDENTIALS = "TwoOrMoreCredentials"
    MASTERS = "Masters"
    PROFESSIONAL_DEGREE = "ProfessionalDegree"
    DOCTORAL = "Doctoral"

    @property
    def rank(self) -> int:
        return list(EducationLevel).index(self)


class CanadianStudyLevel(str, Enum):
    NONE = "none"
    ONE_YEAR = "oneYear"
    TWO_PLUS_YEARS = "twoPlusYears"


class LanguageTest(CamelModel):
    test_type: TestType = Field(..., description="Language test taken")
    reading: float = Field(..., description="Raw reading score")
    listening: float = Field(..., description="Raw listening score")
    speaking: float = Field(..., description="Raw speaking score")
    writing: float = Field(..., description="Raw writing score")
    test_date: Optional[date] = Field(None, description="Date the test was taken")

    def raw_scores(self) -> dict[str, float]:
        return {
            "reading": self.reading,
            "listening": self.listening,
            "speaking": self.speaking,
            "writing": self.writing,
        }


class LanguageProficiency(CamelModel):
    first: LanguageTest
    second: Optional[LanguageTest] = None


class CredentialAssessment(CamelModel):
    has_eca: bool = Field(False, alias="hasECA", description="Foreign credential equivalency assessment on file")
    equivalency: Optional[str] = None
    assessed_on: Optional[date] = Field(None, alias="date")
    organization: Optional[str] = None


class EducationCredential(CamelModel):
    highest: EducationLevel
    is_canadian: bool = Field(False, description="Credential earned in Canada (no assessment needed)")
    eca: CredentialAssessment = Field(default_factory=CredentialAssessment)

    @property
    def has_equivalency(self) -> bool:
        return self.is_canadian or self.eca.has_eca


class WorkExperience(CamelModel):
    canadian_years: int = Field(0, ge=0, le=MAX_CANADIAN_YEARS, description="Skilled Canadian work experience")
    foreign_years: int = Field(0, ge=0, le=MAX_FOREIGN_YEARS, description="Skilled foreign work experience")


class SpouseProfile(CamelModel):
    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    education: EducationLevel
    language: Optional[LanguageTest] = None
    canadian_years: int = Field(0, ge=0, le=MAX_CANADIAN_YEARS)


class Profile(CamelModel):
    """Applicant profile as supplied by the caller."""

    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    marital_status: MaritalStatus = MaritalStatus.SINGLE
    has_spouse: bool = Field(False, description="Spouse or partner accompanies the applicant")
    language_proficiency: LanguageProficiency
    education: EducationCredential
    work_experience: WorkExperience = Field(default_factory=WorkExperience)
    certificate_of_qualification: bool = False
    arranged_employment: bool = False
    provincial_nomination: bool = False
    canadian_study: CanadianStudyLevel = CanadianStudyLevel.NONE
    siblings_in_canada: bool = False
    french_bonus_eligible: bool = False
    spouse: Optional[SpouseProfile] = None
