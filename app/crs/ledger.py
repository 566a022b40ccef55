"""
History and override ledger for CRS records.

Every operation is pure: it takes a CRSRecord and returns a new one. History
is append-only and a recomputation always adds an entry, even when the score
did not change. An override supersedes the computed score for display
without replacing the breakdown or the history:

    absent -> active (set) -> inactive (clear, fields kept) -> active (set)

Only callers move an override between states.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from models.crs import ActiveOverride, Breakdown, CRSRecord, HistoryEntry, InactiveOverride
from models.profile import Profile
from app.crs.default_tables import DEFAULT_TABLES
from app.crs.errors import InvalidOverrideScore
from app.crs.tables import CRSTables

logger = logging.getLogger(__name__)


def _utc(now: Optional[datetime]) -> datetime:
    """The given instant as an aware UTC datetime; naive values are read as UTC."""
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def start_record(inputs: Profile, breakdown: Breakdown, now: Optional[datetime] = None) -> CRSRecord:
    """Create the first record for a candidate with a single history entry."""
    now = _utc(now)
    return CRSRecord(
        inputs=inputs,
        current_score=breakdown.grand_total,
        breakdown=breakdown,
        history=(HistoryEntry(score=breakdown.grand_total, breakdown=breakdown, calculated_at=now),),
        override=None,
        last_updated=now,
    )


def record_computation(
    record: CRSRecord,
    breakdown: Breakdown,
    inputs: Optional[Profile] = None,
    now: Optional[datetime] = None,
) -> CRSRecord:
    """Append a snapshot of `breakdown` and make it the current computation."""
    now = _utc(now)
    if record.history and now < record.history[-1].calculated_at:
        # Keep history ordered even if the clock stepped back.
        now = record.history[-1].calculated_at
    entry = HistoryEntry(score=breakdown.grand_total, breakdown=breakdown, calculated_at=now)
    return record.model_copy(
        update={
            "inputs": inputs if inputs is not None else record.inputs,
            "current_score": breakdown.grand_total,
            "breakdown": breakdown,
            "history": record.history + (entry,),
            "last_updated": now,
        }
    )


def set_override(
    record: CRSRecord,
    score: int,
    reason: str,
    author: str,
    now: Optional[datetime] = None,
    tables: CRSTables = DEFAULT_TABLES,
) -> CRSRecord:
    """Activate an override, replacing any active or inactive one."""
    if isinstance(score, bool) or not isinstance(score, int) or not 0 <= score <= tables.maximum_score:
        raise InvalidOverrideScore(score, tables.maximum_score)
    override = ActiveOverride(score=score, reason=reason, set_by=author, set_at=_utc(now))
    logger.info("CRS override set: score=%s by=%s (computed=%s)", score, author, record.current_score)
    return record.model_copy(update={"override": override})


def clear_override(record: CRSRecord) -> CRSRecord:
    """Deactivate the override, keeping its fields for audit."""
    if not isinstance(record.override, ActiveOverride):
        return record
    current = record.override
    inactive = InactiveOverride(
        score=current.score,
        reason=current.reason,
        set_by=current.set_by,
        set_at=current.set_at,
    )
    logger.info("CRS override cleared: score=%s restored=%s", current.score, record.current_score)
    return record.model_copy(update={"override": inactive})


def override_state(record: CRSRecord) -> str:
    if record.override is None:
        return "absent"
    return "active" if record.override.enabled else "inactive"


def effective_score(record: CRSRecord) -> int:
    """The score consumers should display."""
    if isinstance(record.override, ActiveOverride):
        return record.override.score
    return record.current_score
