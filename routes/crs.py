"""
CRS scoring API.

Thin adapter over the engine in `app.crs`: stateless normalization and
computation, plus per-candidate records with history and overrides stored
through `CRSRecordStore`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from app.crs.default_tables import DEFAULT_TABLES
from app.crs.engine import compute_crs
from app.crs.errors import CRSError
from app.crs.ledger import clear_override, effective_score, override_state, record_computation, set_override, start_record
from app.crs.proficiency import normalize_test
from app.crs.tables import CRSTables
from app.crs.validation import parse_profile
from app.record_store import ConcurrentUpdateError, CRSRecordStore, get_record_store
from models.crs import CRSRecord, HistoryEntry, ProficiencyLevels
from models.eligibility import CRSComputeResponse, CRSRecordOut, OverrideRequest
from models.profile import LanguageTest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["crs"])


def get_crs_tables(request: Request) -> CRSTables:
    return getattr(request.app.state, "crs_tables", DEFAULT_TABLES)


def _unprocessable(exc: CRSError) -> HTTPException:
    return HTTPException(status_code=422, detail=exc.to_dict())


def _record_out(record: CRSRecord, version: int) -> CRSRecordOut:
    return CRSRecordOut(
        record=record,
        effective_score=effective_score(record),
        override_state=override_state(record),
        version=version,
    )


async def _load_existing(store: CRSRecordStore, candidate_id: str) -> tuple[CRSRecord, int]:
    record, version = await store.load(candidate_id)
    if record is None:
        raise HTTPException(status_code=404, detail="CRS record not found")
    return record, version


async def _save(store: CRSRecordStore, candidate_id: str, record: CRSRecord, version: int) -> int:
    try:
        return await store.save(candidate_id, record, version)
    except ConcurrentUpdateError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.post("/crs/normalize", response_model=ProficiencyLevels)
async def crs_normalize(test: LanguageTest, tables: CRSTables = Depends(get_crs_tables)) -> ProficiencyLevels:
    """Convert raw language test scores into benchmark levels."""
    try:
        return normalize_test(test, tables)
    except CRSError as exc:
        raise _unprocessable(exc)


@router.post("/crs/compute", response_model=CRSComputeResponse)
async def crs_compute(
    profile: dict[str, Any] = Body(...),
    tables: CRSTables = Depends(get_crs_tables),
) -> CRSComputeResponse:
    """
    Compute the CRS breakdown of a profile without storing anything.

    Invalid profiles are rejected with every offending field listed.
    """
    try:
        breakdown = compute_crs(profile, tables)
    except CRSError as exc:
        raise _unprocessable(exc)
    return CRSComputeResponse(breakdown=breakdown)


@router.get("/candidates/{candidate_id}/crs", response_model=CRSRecordOut)
async def get_crs_record(candidate_id: str, store: CRSRecordStore = Depends(get_record_store)) -> CRSRecordOut:
    record, version = await _load_existing(store, candidate_id)
    return _record_out(record, version)


@router.post("/candidates/{candidate_id}/crs/calculate", response_model=CRSRecordOut)
async def calculate_crs(
    candidate_id: str,
    profile: dict[str, Any] = Body(...),
    tables: CRSTables = Depends(get_crs_tables),
    store: CRSRecordStore = Depends(get_record_store),
) -> CRSRecordOut:
    """Recompute the candidate's score and append it to their history."""
    try:
        inputs = parse_profile(profile)
        breakdown = compute_crs(inputs, tables)
    except CRSError as exc:
        raise _unprocessable(exc)

    record, version = await store.load(candidate_id)
    if record is None:
        record = start_record(inputs, breakdown)
    else:
        record = record_computation(record, breakdown, inputs=inputs)
    version = await _save(store, candidate_id, record, version)
    logger.info(f"CRS recalculated for {candidate_id}: total={breakdown.grand_total}")
    return _record_out(record, version)


@router.get("/candidates/{candidate_id}/crs/history", response_model=list[HistoryEntry])
async def get_crs_history(candidate_id: str, store: CRSRecordStore = Depends(get_record_store)) -> list[HistoryEntry]:
    record, _ = await _load_existing(store, candidate_id)
    return list(record.history)


@router.put("/candidates/{candidate_id}/crs/override", response_model=CRSRecordOut)
async def put_crs_override(
    candidate_id: str,
    body: OverrideRequest,
    tables: CRSTables = Depends(get_crs_tables),
    store: CRSRecordStore = Depends(get_record_store),
) -> CRSRecordOut:
    record, version = await _load_existing(store, candidate_id)
    try:
        record = set_override(record, body.score, body.reason, body.set_by, tables=tables)
    except CRSError as exc:
        raise _unprocessable(exc)
    version = await _save(store, candidate_id, record, version)
    return _record_out(record, version)


@router.delete("/candidates/{candidate_id}/crs/override", response_model=CRSRecordOut)
async def delete_crs_override(candidate_id: str, store: CRSRecordStore = Depends(get_record_store)) -> CRSRecordOut:
    """Deactivate the override; its fields stay on the record for audit."""
    record, version = await _load_existing(store, candidate_id)
    cleared = clear_override(record)
    if cleared is not record:
        version = await _save(store, candidate_id, cleared, version)
    return _record_out(cleared, version)
