"""Pydantic models for contacts and tags."""

from datetime import date
from typing import Optional, Literal, Union

from pydantic import BaseModel, EmailStr, Field, ConfigDict


ContactStatus = Literal["open", "closed", "lost"]


class TagCreate(BaseModel):
    """Model for creating or replacing a tag."""

    name: str = Field(..., min_length=1, description="Tag name", examples=["VIP"])
    color: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex color",
        examples=["#FFD700"]
    )


class ContactCreate(BaseModel):
    """Model for creating or replacing a contact.

    A contact always sits in a stage. Email may be left empty, which is
    stored as an empty string rather than NULL.
    """

    name: str = Field(..., min_length=1, description="Contact name")
    email: Optional[Union[EmailStr, Literal[""]]] = Field(default=None, description="Email address")
    phone: Optional[str] = Field(default=None, description="Phone number")
    stage_id: int = Field(..., gt=0, description="Stage the contact is in")
    deal_value: float = Field(default=0, ge=0, description="Negotiated deal value")
    tag_id: Optional[int] = Field(default=None, gt=0, description="Tag applied to the contact")
    status: ContactStatus = Field(default="open", description="Deal status")
    registered_on: Optional[date] = Field(default=None, description="Registration date")
    closed_on: Optional[date] = Field(default=None, description="Closing date")
    confidence: Optional[int] = Field(default=None, ge=0, le=100, description="Closing confidence (0-100)")
    employee_id: Optional[int] = Field(default=None, gt=0, description="Responsible employee")
    description: Optional[str] = Field(default=None, description="Free-form description")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "John Smith",
                "email": "john.smith@example.com",
                "phone": "(11) 91234-5678",
                "stage_id": 1,
                "deal_value": 15000.0,
                "tag_id": 2,
                "status": "open",
                "registered_on": "2024-01-15",
                "confidence": 60,
                "employee_id": 3
            }
        }
    )
