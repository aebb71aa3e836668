"""API endpoints for the quote oracle."""

from decimal import Decimal

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from quote_oracle.config import OracleConfig, load_config
from quote_oracle.engine import EquivalenceOracle, build_onchain_backends
from quote_oracle.errors import InvalidTrade
from quote_oracle.models.types import Uint256
from quote_oracle.scenarios import Scenario

logger = structlog.get_logger()

router = APIRouter()


class CheckRequest(BaseModel):
    """A single comparison request."""

    from_token: str = Field(alias="fromToken", description="Symbol of the token sold")
    to_token: str = Field(alias="toToken", description="Symbol of the token bought")
    amount_in: Uint256 | None = Field(default=None, alias="amountIn")
    fee: int | None = Field(default=None, ge=0)

    model_config = {"populate_by_name": True}


class QuoteView(BaseModel):
    """One backend's quote in a check response."""

    source: str
    raw_amount: str = Field(serialization_alias="rawAmount")
    amount: Decimal


class CheckResponse(BaseModel):
    """Outcome of a comparison."""

    name: str
    passed: bool
    minimum: Decimal | None = None
    maximum: Decimal | None = None
    relative_deviation: Decimal | None = Field(default=None, serialization_alias="relativeDeviation")
    tolerance: Decimal
    quotes: list[QuoteView] = Field(default_factory=list)
    failure: str | None = None
    error: str | None = None


def get_config() -> OracleConfig:
    """Dependency provider for the oracle configuration.

    Reads ORACLE_* environment variables on every request.
    """
    return load_config()


def get_oracle(config: OracleConfig = Depends(get_config)) -> EquivalenceOracle:
    """Dependency provider for the oracle instance.

    Override this in tests to inject mock backends:
        app.dependency_overrides[get_oracle] = lambda: EquivalenceOracle([a, b], config)
    """
    try:
        return EquivalenceOracle(build_onchain_backends(config), config)
    except ValueError as e:
        logger.warning("oracle_not_configured", error=str(e))
        raise HTTPException(status_code=503, detail=str(e)) from e


@router.post("/check", response_model=CheckResponse, response_model_by_alias=True)
async def check(
    request: CheckRequest,
    oracle: EquivalenceOracle = Depends(get_oracle),
) -> CheckResponse:
    """Compare backend quotes for one pair.

    Error Handling:
        - Unknown token or invalid trade: 422
        - Backend failure, revert, timeout or mismatch: 200 with passed=false
    """
    scenario = Scenario(request.from_token, request.to_token, request.amount_in, request.fee)
    try:
        scenario.to_trade(oracle.config)
    except InvalidTrade as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    logger.info("received_check", name=scenario.name)
    outcome = await oracle.run_scenario(scenario)

    response = CheckResponse(
        name=scenario.name,
        passed=outcome.passed,
        tolerance=oracle.config.tolerance,
        failure=outcome.failure,
        error=outcome.error,
    )
    if outcome.result is not None:
        result = outcome.result
        response.minimum = result.minimum
        response.maximum = result.maximum
        response.relative_deviation = result.relative_deviation
        response.quotes = [
            QuoteView(source=q.source, raw_amount=str(q.raw_amount), amount=q.amount)
            for q in result.quotes
        ]
    return response
