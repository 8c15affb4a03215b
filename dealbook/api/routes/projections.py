"""Projection routes: stateless engine calls."""

import logging

from fastapi import APIRouter, HTTPException

from dealbook.api.schemas import (
    BatchProjectionRequest,
    FlipRequest,
    FlipResponse,
    ProjectionRequest,
    ProjectionResponse,
    ScenarioRequest,
    ScenarioResponse,
)
from dealbook.data.cache import cached
from dealbook.engine.flip import calculate_flip
from dealbook.engine.projection import run_projection
from dealbook.engine.scenarios import STANDARD_SCENARIOS, compare_financing
from dealbook.engine.validation import InvalidInputError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projections", tags=["projections"])


def invalid_input(e: InvalidInputError, **extra) -> HTTPException:
    return HTTPException(status_code=400, detail={"field": e.field, "message": e.message, **extra})


def projection_payload(req: ProjectionRequest) -> dict:
    """Run the engine and return the camelCase JSON body stored on property records."""
    result = run_projection(req.to_inputs())
    return ProjectionResponse.from_result(result, sparse=req.sparse).model_dump(
        mode="json", by_alias=True
    )


@cached("projection")
async def cached_projection_payload(req: ProjectionRequest) -> dict:
    return projection_payload(req)


@router.post("", response_model=ProjectionResponse)
async def project(req: ProjectionRequest):
    """Year-by-year table and summary for one deal."""
    try:
        result = run_projection(req.to_inputs())
    except InvalidInputError as e:
        raise invalid_input(e)
    return ProjectionResponse.from_result(result, sparse=req.sparse)


@router.post("/batch")
async def project_batch(req: BatchProjectionRequest):
    """Independent projections for many deals; identical inputs hit the cache."""
    results = []
    for i, deal in enumerate(req.deals):
        try:
            results.append(await cached_projection_payload(deal))
        except InvalidInputError as e:
            raise invalid_input(e, index=i)
    logger.info("Batch projected %d deals", len(results))
    return {"results": results}


@router.post("/scenarios", response_model=list[ScenarioResponse])
async def compare_scenarios(req: ScenarioRequest):
    """Same deal under several loan structures (FHA/conventional ladder by default)."""
    scenarios = (
        [s.to_scenario() for s in req.scenarios]
        if req.scenarios is not None
        else STANDARD_SCENARIOS
    )
    try:
        rows = compare_financing(req.deal.to_inputs(), scenarios)
    except InvalidInputError as e:
        raise invalid_input(e)
    return [ScenarioResponse.model_validate(r) for r in rows]


@router.post("/flip", response_model=FlipResponse)
async def project_flip(req: FlipRequest):
    """Fix-and-flip returns: cash required, holding and selling costs, profit at ARV."""
    try:
        result = calculate_flip(req.to_inputs())
    except InvalidInputError as e:
        raise invalid_input(e)
    return FlipResponse.from_result(result)
