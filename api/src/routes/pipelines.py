"""Pipelines API endpoints."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Request

from ..models.pipelines import PipelineCreate, PipelineStageCreate
from ..pagination import PaginationOptions
from ..db.resources import create_row
from .resources import ResourceConfig, ENVELOPE_RESPONSES, add_crud_routes, list_resource


logger = logging.getLogger(__name__)

PIPELINES = ResourceConfig(
    table="pipelines",
    label="Pipeline",
    create_model=PipelineCreate
)

router = APIRouter(
    prefix="/pipelines",
    tags=["Pipelines"],
    responses={
        404: {"description": "Not Found"}
    }
)


@router.get(
    "/{pipeline_id:int}/stages",
    response_model=None,
    summary="List stages of a pipeline",
    description="List the stages of one pipeline, ordered by position unless a sort is given.",
    responses=ENVELOPE_RESPONSES
)
async def list_pipeline_stages(pipeline_id: int, request: Request):
    """List the stages belonging to a pipeline."""
    options = PaginationOptions(
        where_clause="WHERE pipeline_id = ?",
        params=[pipeline_id],
        order_by="ORDER BY position"
    )
    return await list_resource(request, "stages", options)


@router.post(
    "/{pipeline_id:int}/stages",
    status_code=201,
    summary="Create a stage in a pipeline",
    responses={
        201: {"description": "Stage created"},
        409: {"description": "Conflict - Pipeline does not exist"}
    }
)
async def create_pipeline_stage(pipeline_id: int, payload: PipelineStageCreate) -> Dict[str, Any]:
    """Create a stage whose pipeline is taken from the path."""
    stage = payload.for_pipeline(pipeline_id)
    logger.info(f"Creating stage '{stage.name}' in pipeline {pipeline_id}")

    new_id = await create_row("stages", stage.model_dump())
    return {"id": new_id, **stage.model_dump(mode="json")}


add_crud_routes(router, PIPELINES)
