"""Stages API endpoints."""

from fastapi import APIRouter, Request

from ..models.pipelines import StageCreate, StageUpdate
from ..pagination import PaginationOptions
from .resources import ResourceConfig, ENVELOPE_RESPONSES, add_crud_routes, list_resource


STAGES = ResourceConfig(
    table="stages",
    label="Stage",
    create_model=StageCreate,
    update_model=StageUpdate
)

router = APIRouter(
    prefix="/stages",
    tags=["Stages"],
    responses={
        404: {"description": "Not Found"}
    }
)


@router.get(
    "/with-contacts",
    response_model=None,
    summary="List stages with their contacts",
    responses=ENVELOPE_RESPONSES
)
async def list_stages_with_contacts(request: Request):
    """One row per contact, joined with the stage it is in."""
    return await list_resource(request, "stages_with_contacts")


@router.get(
    "/{stage_id:int}/contacts",
    response_model=None,
    summary="List contacts of a stage",
    responses=ENVELOPE_RESPONSES
)
async def list_stage_contacts(stage_id: int, request: Request):
    options = PaginationOptions(where_clause="WHERE id = ?", params=[stage_id])
    return await list_resource(request, "stages_with_contacts", options)


add_crud_routes(router, STAGES)
