"""Evaluation endpoint for proposed transfers."""

from fastapi import APIRouter, Request

from app.models import EvaluationRequest, EvaluationResponse
from app.screening.engine import RiskEngine

router = APIRouter(prefix="/api")


def _get_engine(request: Request) -> RiskEngine:
    """Retrieve the risk engine from application state."""
    return request.app.state.engine


@router.post("/evaluate", response_model=EvaluationResponse)
async def evaluate_transfer(
    proposal: EvaluationRequest,
    request: Request,
) -> EvaluationResponse:
    """Decide on a transfer without recording anything."""
    engine = _get_engine(request)
    decision = engine.evaluate(proposal.amount, proposal.recipient_id)
    return EvaluationResponse(
        decision=decision.kind,
        requires_confirmation=decision.requires_confirmation,
        can_proceed=decision.can_proceed,
        reasons=decision.reasons,
        entry=decision.entry,
    )
