"""Generic CRUD endpoints shared by every CRM resource."""

import logging
from typing import Any, Dict, Optional, Type, Union

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from ..pagination import PaginationOptions, parse_query_params, paginate
from ..db.resources import create_row, update_row, delete_row
from ..errors.problem_details import NotFoundError, InternalServerError
from ..errors.query_errors import StoreError


logger = logging.getLogger(__name__)

ENVELOPE_RESPONSES = {
    200: {"description": "Page of results with pagination metadata"},
    400: {"description": "Bad Request - Invalid sort or filter identifier"},
    500: {"description": "Database error while listing"}
}


class ResourceConfig(BaseModel):
    """Describes one CRUD resource backed by a table."""

    table: str
    label: str
    create_model: Type[BaseModel]
    update_model: Optional[Type[BaseModel]] = None
    order_by: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def body_model(self) -> Type[BaseModel]:
        return self.update_model or self.create_model


def request_path(request: Request) -> str:
    """Path and query string of the request, as echoed in list metadata."""
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


def envelope_response(envelope: Dict[str, Any]) -> Union[Dict[str, Any], JSONResponse]:
    """Return a list envelope with a status code matching its outcome."""
    if envelope["success"]:
        return envelope

    kind = envelope.get("error", {}).get("kind")
    status_code = 500 if kind == StoreError.kind else 400
    return JSONResponse(status_code=status_code, content=jsonable_encoder(envelope))


async def list_resource(
    request: Request,
    table: str,
    options: Optional[PaginationOptions] = None
) -> Union[Dict[str, Any], JSONResponse]:
    """Paginate a table or view using the request's query string."""
    envelope = await paginate(
        parse_query_params(request.query_params),
        table,
        options,
        path=request_path(request)
    )
    return envelope_response(envelope)


async def fetch_one(table: str, item_id: int, label: str) -> Dict[str, Any]:
    """Fetch a single row by id through the paginated query builder.

    Raises:
        NotFoundError: If no row has the id
        InternalServerError: If the lookup fails
    """
    envelope = await paginate(
        {},
        table,
        PaginationOptions(where_clause="WHERE id = ?", params=[item_id])
    )

    if not envelope["success"]:
        raise InternalServerError(f"Failed to fetch {label.lower()}: {envelope['error']['details']}")
    if not envelope["data"]:
        raise NotFoundError(f"{label} not found")
    return envelope["data"][0]


def add_crud_routes(router: APIRouter, resource: ResourceConfig) -> APIRouter:
    """Register list, get, create, update and delete endpoints on a router.

    Register resource-specific routes on the router before calling this, so
    fixed paths such as ``/today`` are matched ahead of ``/{item_id}``.
    """
    table = resource.table
    label = resource.label
    create_model = resource.create_model
    update_model = resource.body_model
    default_options = PaginationOptions(order_by=resource.order_by)

    @router.get(
        "",
        response_model=None,
        summary=f"List {table}",
        description=f"List {table} with page-number pagination, sorting and substring filters.",
        responses=ENVELOPE_RESPONSES
    )
    async def list_items(request: Request):
        logger.info(f"Listing {table}")
        return await list_resource(request, table, default_options)

    @router.get(
        "/{item_id:int}",
        summary=f"Get a {label.lower()}",
        responses={404: {"description": f"{label} not found"}}
    )
    async def get_item(item_id: int) -> Dict[str, Any]:
        return await fetch_one(table, item_id, label)

    @router.post(
        "",
        status_code=201,
        summary=f"Create a {label.lower()}",
        responses={
            201: {"description": f"{label} created"},
            409: {"description": "Conflict - Referenced row does not exist"}
        }
    )
    async def create_item(payload: create_model) -> Dict[str, Any]:
        values = payload.model_dump()
        new_id = await create_row(table, values)
        return {"id": new_id, **payload.model_dump(mode="json")}

    @router.put(
        "/{item_id:int}",
        summary=f"Update a {label.lower()}",
        responses={404: {"description": f"{label} not found"}}
    )
    async def update_item(item_id: int, payload: update_model) -> Dict[str, str]:
        updated = await update_row(table, item_id, payload.model_dump())
        if not updated:
            raise NotFoundError(f"{label} not found")
        return {"message": f"{label} updated successfully"}

    @router.delete(
        "/{item_id:int}",
        summary=f"Delete a {label.lower()}",
        responses={404: {"description": f"{label} not found"}}
    )
    async def delete_item(item_id: int) -> Dict[str, str]:
        deleted = await delete_row(table, item_id)
        if not deleted:
            raise NotFoundError(f"{label} not found")
        return {"message": f"{label} deleted successfully"}

    return router
