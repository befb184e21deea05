"""Suspicious registry lookup and report endpoints."""

from typing import List

from fastapi import APIRouter, HTTPException, Request

from app.models import RecipientRiskEntry, ReportRequest
from app.screening.engine import RiskEngine

router = APIRouter(prefix="/api")


def _get_engine(request: Request) -> RiskEngine:
    """Retrieve the risk engine from application state."""
    return request.app.state.engine


@router.post("/reports", response_model=RecipientRiskEntry)
async def report_recipient(
    report: ReportRequest,
    request: Request,
) -> RecipientRiskEntry:
    """Report a recipient identifier. Each call adds one to its tally."""
    return _get_engine(request).report(report.recipient_id)


@router.get("/registry", response_model=List[RecipientRiskEntry])
async def list_registry(request: Request) -> List[RecipientRiskEntry]:
    return _get_engine(request).registry.entries()


@router.get("/registry/{recipient_id}", response_model=RecipientRiskEntry)
async def get_registry_entry(
    recipient_id: str,
    request: Request,
) -> RecipientRiskEntry:
    """Look up one identifier using the configured matching mode."""
    entry = _get_engine(request).registry.lookup(recipient_id)
    if entry is None:
        raise HTTPException(
            status_code=404,
            detail=f"Recipient '{recipient_id}' is not listed",
        )
    return entry
