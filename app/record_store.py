"""
MongoDB persistence for CRS records.

One document per candidate: ``{_id, version, crs}``. The engine never
writes; this store serializes writes per candidate with an integer version
so that two concurrent recalculations cannot silently drop a history entry.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request
from pymongo.errors import DuplicateKeyError

from app.db import get_crs_collection
from models.crs import CRSRecord

logger = logging.getLogger(__name__)


class ConcurrentUpdateError(Exception):
    """The stored record changed since it was loaded."""

    def __init__(self, candidate_id: str, expected_version: int):
        self.candidate_id = candidate_id
        self.expected_version = expected_version
        super().__init__(f"CRS record for {candidate_id} is no longer at version {expected_version}")


class CRSRecordStore:
    def __init__(self, collection):
        self.collection = collection

    async def load(self, candidate_id: str) -> tuple[Optional[CRSRecord], int]:
        """Return the stored record and its version (0 when absent)."""
        doc = await self.collection.find_one({"_id": candidate_id})
        if not doc:
            return None, 0
        return CRSRecord.model_validate(doc["crs"]), doc["version"]

    async def save(self, candidate_id: str, record: CRSRecord, expected_version: int) -> int:
        """Write `record` if the stored version still equals `expected_version`."""
        payload = record.model_dump(mode="json", by_alias=True)
        if expected_version == 0:
            try:
                await self.collection.insert_one({"_id": candidate_id, "version": 1, "crs": payload})
            except DuplicateKeyError:
                logger.warning(f"CRS record for {candidate_id} was created concurrently")
                raise ConcurrentUpdateError(candidate_id, expected_version) from None
            return 1

        result = await self.collection.update_one(
            {"_id": candidate_id, "version": expected_version},
            {"$set": {"crs": payload}, "$inc": {"version": 1}},
        )
        if result.matched_count == 0:
            logger.warning(f"CRS record for {candidate_id} changed since version {expected_version}")
            raise ConcurrentUpdateError(candidate_id, expected_version)
        return expected_version + 1


def get_record_store(request: Request) -> CRSRecordStore:
    return CRSRecordStore(get_crs_collection(request))
