"""Pydantic models for messages."""

from typing import Optional

from pydantic import BaseModel, Field


class MessageBase(BaseModel):
    content: str = Field(..., min_length=1, description="Message text")
    sender_id: int = Field(..., gt=0, description="Sending employee")


class PrivateMessageCreate(MessageBase):
    """Direct message between two employees."""

    receiver_id: int = Field(..., gt=0, description="Receiving employee")


class GroupMessageCreate(MessageBase):
    """Message posted to a department."""

    department_id: int = Field(..., gt=0, description="Target department")


class SupportMessageCreate(MessageBase):
    """Support conversation message for a company."""

    receiver_id: Optional[int] = Field(default=None, gt=0, description="Receiving employee")
    company_id: int = Field(..., gt=0, description="Company the conversation belongs to")


class MessageContentUpdate(BaseModel):
    content: str = Field(..., min_length=1, description="New message text")
