"""Tasks API endpoints."""

from fastapi import APIRouter, Request

from ..models.tasks import TaskCreate
from ..pagination import PaginationOptions
from .resources import ResourceConfig, ENVELOPE_RESPONSES, add_crud_routes, list_resource


TASKS = ResourceConfig(
    table="tasks",
    label="Task",
    create_model=TaskCreate
)

# Fixed scopes; none of them take client input
DUE_TODAY = PaginationOptions(where_clause="WHERE due_date = CURRENT_DATE")
COMPLETED = PaginationOptions(where_clause="WHERE status = 'completed'")
PENDING = PaginationOptions(where_clause="WHERE status = 'pending'")

router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
    responses={
        404: {"description": "Not Found"}
    }
)


@router.get("/today", response_model=None, summary="Tasks due today", responses=ENVELOPE_RESPONSES)
async def list_tasks_due_today(request: Request):
    return await list_resource(request, "tasks", DUE_TODAY)


@router.get("/completed", response_model=None, summary="Completed tasks", responses=ENVELOPE_RESPONSES)
async def list_completed_tasks(request: Request):
    return await list_resource(request, "tasks", COMPLETED)


@router.get("/pending", response_model=None, summary="Pending tasks", responses=ENVELOPE_RESPONSES)
async def list_pending_tasks(request: Request):
    return await list_resource(request, "tasks", PENDING)


add_crud_routes(router, TASKS)
