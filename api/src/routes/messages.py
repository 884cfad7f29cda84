"""Messages API endpoints.

Messages are written through three channels (private, department group and
company support). Only support conversations can be listed, edited or
removed through the API.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter
from pydantic import BaseModel

from ..models.messages import (
    PrivateMessageCreate,
    GroupMessageCreate,
    SupportMessageCreate,
    MessageContentUpdate
)
from ..db.resources import create_row, update_row, delete_row
from ..db.messages import list_company_messages
from ..errors.problem_details import NotFoundError


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/messages",
    tags=["Messages"],
    responses={
        404: {"description": "Not Found"}
    }
)

CREATED_RESPONSES = {
    201: {"description": "Message created"},
    409: {"description": "Conflict - Referenced row does not exist"}
}


async def _send(payload: BaseModel, channel: str) -> Dict[str, Any]:
    new_id = await create_row("messages", payload.model_dump())
    logger.info(f"Stored {channel} message {new_id}")
    return {"id": new_id, **payload.model_dump(mode="json")}


@router.post("/private", status_code=201, summary="Send a private message", responses=CREATED_RESPONSES)
async def send_private_message(payload: PrivateMessageCreate) -> Dict[str, Any]:
    return await _send(payload, "private")


@router.post("/group", status_code=201, summary="Send a group message", responses=CREATED_RESPONSES)
async def send_group_message(payload: GroupMessageCreate) -> Dict[str, Any]:
    return await _send(payload, "group")


@router.post("/support", status_code=201, summary="Send a support message", responses=CREATED_RESPONSES)
async def send_support_message(payload: SupportMessageCreate) -> Dict[str, Any]:
    return await _send(payload, "support")


@router.get(
    "/support/list/{company_id:int}",
    summary="List a company's support messages",
    description="Return every support message of a company, oldest first. This list is not paginated."
)
async def list_support_messages(company_id: int) -> List[Dict[str, Any]]:
    return await list_company_messages(company_id)


@router.put(
    "/support/{message_id:int}",
    summary="Edit a support message",
    responses={404: {"description": "Message not found"}}
)
async def update_support_message(message_id: int, payload: MessageContentUpdate) -> Dict[str, str]:
    if not await update_row("messages", message_id, payload.model_dump()):
        raise NotFoundError("Message not found")
    return {"message": "Message updated successfully"}


@router.delete(
    "/support/{message_id:int}",
    summary="Delete a support message",
    responses={404: {"description": "Message not found"}}
)
async def delete_support_message(message_id: int) -> Dict[str, str]:
    if not await delete_row("messages", message_id):
        raise NotFoundError("Message not found")
    return {"message": "Message deleted successfully"}
