"""Payment Risk Decision API.

Decides whether a proposed transfer can go through, needs the user to
confirm it, or must be blocked. Checks the recipient against a registry of
reported identifiers and flags unusually large amounts.

Run with:
    python3 -m uvicorn app.main:app --host 0.0.0.0 --port 8000
"""

import json
import logging
from pathlib import Path
from typing import Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.errors import (
    InvalidReportTransition,
    RiskEngineError,
    UnconfirmedOverride,
)
from app.models import RiskConfig
from app.routes import evaluation, registry, rules, transactions
from app.screening.engine import RiskEngine
from app.storage.ledger import TransactionLedger
from app.storage.registry import load_registry

logger = logging.getLogger(__name__)

# Resolve the data/ directory relative to this file so the server works
# regardless of which directory uvicorn is launched from.
DATA_DIR = Path(__file__).parent.parent / "data"

app = FastAPI(
    title="Payment Risk Decision API",
    description=(
        "Risk decisions for outgoing transfers. Flags reported recipients, "
        "blocks transfers above a recipient's safe limit, and asks for "
        "confirmation on large amounts."
    ),
    version="1.0.0",
)


@app.on_event("startup")
async def startup() -> None:
    """Load reference data and initialize the risk engine."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Load tunable thresholds (or use defaults)
    config_path = DATA_DIR / "risk_config.json"
    if config_path.exists():
        with open(config_path, "r") as f:
            config = RiskConfig(**json.load(f))
    else:
        config = RiskConfig()

    # Seed the registry of reported recipients
    suspicious = load_registry(
        DATA_DIR / "suspicious_recipients.json",
        default_max_safe_amount=config.default_max_safe_amount,
        matching=config.recipient_matching,
        fuzzy_threshold=config.fuzzy_match_threshold,
    )

    # One ledger and registry per process; lost on restart
    engine = RiskEngine(
        registry=suspicious,
        ledger=TransactionLedger(),
        config=config,
    )

    # Attach to app state for dependency injection in routes
    app.state.engine = engine
    app.state.config = config


@app.exception_handler(RiskEngineError)
async def risk_engine_error_handler(
    request: Request, exc: RiskEngineError
) -> JSONResponse:
    """Turn rejected engine calls into JSON error responses."""
    if isinstance(exc, (UnconfirmedOverride, InvalidReportTransition)):
        status_code = 409
    else:
        status_code = 422
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


# Mount all API routers
app.include_router(evaluation.router)
app.include_router(transactions.router)
app.include_router(registry.router)
app.include_router(rules.router)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "healthy"}
