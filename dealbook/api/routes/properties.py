"""Property routes: published deals with their attached 30-year tables."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from dealbook.api.deps import get_repository
from dealbook.api.routes.projections import invalid_input, projection_payload
from dealbook.api.schemas import (
    ProjectionRequest,
    PropertyCreate,
    PropertyResponse,
    PropertyUpdate,
)
from dealbook.data.property_repo import PropertyRepository
from dealbook.engine.validation import InvalidInputError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


def _computed_fields(projection_inputs: ProjectionRequest) -> dict:
    """Stored input snapshot plus the table computed from it."""
    try:
        table = projection_payload(projection_inputs)
    except InvalidInputError as e:
        raise invalid_input(e)
    return {
        "projection_inputs": projection_inputs.snapshot(),
        "thirty_year_projections": table,
    }


def _attach_projections(prop: dict) -> dict:
    """Fill in the table for records that only carry inputs (the static deals)."""
    if prop.get("thirty_year_projections") or not prop.get("projection_inputs"):
        return prop
    req = ProjectionRequest.model_validate(prop["projection_inputs"])
    prop["thirty_year_projections"] = projection_payload(req)
    return prop


@router.get("", response_model=list[PropertyResponse])
async def list_properties(
    include_drafts: bool = False,
    repo: PropertyRepository = Depends(get_repository),
):
    props = await repo.list_all() if include_drafts else await repo.list_published()
    return [_attach_projections(p) for p in props]


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(property_id: str, repo: PropertyRepository = Depends(get_repository)):
    prop = await repo.get(property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail=f"Property {property_id} not found")
    return _attach_projections(prop)


@router.post("", response_model=PropertyResponse, status_code=201)
async def create_property(body: PropertyCreate, repo: PropertyRepository = Depends(get_repository)):
    data = body.model_dump(exclude={"projection_inputs"})
    if body.projection_inputs is not None:
        data.update(_computed_fields(body.projection_inputs))
        if data["price"] is None:
            data["price"] = body.projection_inputs.purchase_price
        if data["monthly_rent"] is None:
            data["monthly_rent"] = body.projection_inputs.gross_monthly_rent
    return await repo.create(data)


@router.patch("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: str,
    body: PropertyUpdate,
    repo: PropertyRepository = Depends(get_repository),
):
    updates = body.model_dump(exclude_unset=True, exclude={"projection_inputs"})
    if body.projection_inputs is not None:
        updates.update(_computed_fields(body.projection_inputs))
    prop = await repo.update(property_id, updates)
    if prop is None:
        raise HTTPException(status_code=404, detail=f"Property {property_id} not found")
    return prop


@router.delete("/{property_id}", status_code=204)
async def delete_property(property_id: str, repo: PropertyRepository = Depends(get_repository)):
    if not await repo.soft_delete(property_id):
        raise HTTPException(status_code=404, detail=f"Property {property_id} not found")
    return Response(status_code=204)


@router.post("/{property_id}/projections", response_model=PropertyResponse)
async def recompute_projections(
    property_id: str, repo: PropertyRepository = Depends(get_repository)
):
    """Re-run the engine on the stored inputs and save the fresh table."""
    prop = await repo.get(property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail=f"Property {property_id} not found")
    if not prop.get("projection_inputs"):
        raise HTTPException(status_code=400, detail="Property has no projection inputs")

    req = ProjectionRequest.model_validate(prop["projection_inputs"])
    fields = _computed_fields(req)
    updated = await repo.update(property_id, fields)
    if updated is None:
        # Static deals are read-only; return the freshly computed table without storing it
        prop.update(fields)
        return prop
    logger.info("Recomputed projections for %s", property_id)
    return updated
