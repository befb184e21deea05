"""Transaction finalization and history endpoints."""

from typing import List

from fastapi import APIRouter, Request

from app.models import Transaction, TransactionRequest
from app.screening.engine import RiskEngine

router = APIRouter(prefix="/api")


def _get_engine(request: Request) -> RiskEngine:
    """Retrieve the risk engine from application state."""
    return request.app.state.engine


@router.post("/transactions", response_model=Transaction, status_code=201)
async def create_transaction(
    tx: TransactionRequest,
    request: Request,
) -> Transaction:
    """Finalize a transfer.

    The decision is recomputed here rather than taken from the client, so
    a stale or forged decision cannot unlock a blocked recipient.
    A flagged transfer without ``user_confirmed`` is rejected with 409 and
    nothing is recorded.
    """
    engine = _get_engine(request)
    return engine.screen(tx.amount, tx.recipient_id, tx.user_confirmed)


@router.get("/transactions", response_model=List[Transaction])
async def list_transactions(request: Request) -> List[Transaction]:
    """Return the ledger, most recent first."""
    return _get_engine(request).list_transactions()
