"""Risk configuration endpoints for reading and updating thresholds."""

from fastapi import APIRouter, Request

from app.models import RiskConfig

router = APIRouter(prefix="/api")


@router.get("/rules", response_model=RiskConfig)
async def get_rules(request: Request) -> RiskConfig:
    """Return the current risk configuration."""
    return request.app.state.config


@router.put("/rules", response_model=RiskConfig)
async def update_rules(
    new_config: RiskConfig,
    request: Request,
) -> RiskConfig:
    """Update the risk configuration.

    The engine passes matching and default-limit changes on to its
    registry, so subsequent evaluations and reports use them immediately.
    """
    request.app.state.config = new_config
    request.app.state.engine.update_config(new_config)
    return new_config
