"""Schemas for the CRS compute, record and override API."""

from __future__ import annotations

from pydantic import Field

from models.crs import Breakdown, CRSRecord
from models.profile import CamelModel


class CRSComputeResponse(CamelModel):
    """Response for POST /crs/compute."""

    breakdown: Breakdown
    disclaimer: str = Field(
        default="This tool is for general guidance only. Official IRCC system results govern. See Canada.ca Express Entry CRS calculator. Not legal advice.",
        description="Legal disclaimer",
    )


class OverrideRequest(CamelModel):
    score: int = Field(..., description="Score that supersedes the computed one")
    reason: str = Field(..., min_length=1, description="Why the computed score is overridden")
    set_by: str = Field(..., min_length=1, description="Who set the override")


class CRSRecordOut(CamelModel):
    record: CRSRecord
    effective_score: int = Field(..., description="Override score when active, else the computed score")
    override_state: str = Field(..., description="absent, active or inactive")
    version: int = Field(..., description="Stored record version for optimistic concurrency")
