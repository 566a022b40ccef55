"""
Pytest configuration and shared fixtures.
"""

import copy
from types import SimpleNamespace
from typing import Any, Dict

import pytest
from pymongo.errors import DuplicateKeyError


# IELTS General scores that land exactly on a benchmark level for every skill.
IELTS_BY_LEVEL = {
    4: {"reading": 3.5, "listening": 4.5, "speaking": 4.0, "writing": 4.0},
    5: {"reading": 4.0, "listening": 5.0, "speaking": 5.0, "writing": 5.0},
    6: {"reading": 5.0, "listening": 5.5, "speaking": 5.5, "writing": 5.5},
    7: {"reading": 6.0, "listening": 6.0, "speaking": 6.0, "writing": 6.0},
    8: {"reading": 6.5, "listening": 7.5, "speaking": 6.5, "writing": 6.5},
    9: {"reading": 7.0, "listening": 8.0, "speaking": 7.0, "writing": 7.0},
    10: {"reading": 8.0, "listening": 8.5, "speaking": 7.5, "writing": 7.5},
}

TEF_BY_LEVEL = {
    7: {"reading": 207, "listening": 249, "speaking": 310, "writing": 310},
    9: {"reading": 248, "listening": 298, "speaking": 371, "writing": 371},
}


def ielts(level: int) -> Dict[str, Any]:
    return {"testType": "IELTS", **IELTS_BY_LEVEL[level]}


def tef(level: int) -> Dict[str, Any]:
    return {"testType": "TEF", **TEF_BY_LEVEL[level]}


def make_profile(**overrides) -> Dict[str, Any]:
    """
    Profile document of the reference candidate: 29 years old, single,
    assessed master's degree, benchmark 9 English, 3 years of Canadian work.
    """
    profile = {
        "age": 29,
        "maritalStatus": "single",
        "hasSpouse": False,
        "languageProficiency": {"first": ielts(9)},
        "education": {"highest": "Masters", "eca": {"hasECA": True, "organization": "WES"}},
        "workExperience": {"canadianYears": 3, "foreignYears": 0},
    }
    profile.update(overrides)
    return profile


def married_profile(**overrides) -> Dict[str, Any]:
    profile = make_profile(
        maritalStatus="married",
        hasSpouse=True,
        spouse={
            "age": 30,
            "education": "BachelorsOr3Year",
            "language": ielts(7),
            "canadianYears": 1,
        },
    )
    profile.update(overrides)
    return profile


@pytest.fixture
def reference_profile() -> Dict[str, Any]:
    return make_profile()


@pytest.fixture
def spouse_profile() -> Dict[str, Any]:
    return married_profile()


class FakeCollection:
    """In-memory stand-in for the handful of motor collection calls the store makes."""

    def __init__(self):
        self.docs: Dict[str, Dict[str, Any]] = {}

    async def find_one(self, query):
        doc = self.docs.get(query["_id"])
        return copy.deepcopy(doc)

    async def insert_one(self, doc):
        if doc["_id"] in self.docs:
            raise DuplicateKeyError("duplicate key")
        self.docs[doc["_id"]] = copy.deepcopy(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def update_one(self, query, update):
        doc = self.docs.get(query["_id"])
        if doc is None or doc["version"] != query["version"]:
            return SimpleNamespace(matched_count=0, modified_count=0)
        doc.update(copy.deepcopy(update["$set"]))
        doc["version"] += update["$inc"]["version"]
        return SimpleNamespace(matched_count=1, modified_count=1)


@pytest.fixture
def fake_collection() -> FakeCollection:
    return FakeCollection()
