"""Pydantic models for tasks."""

from datetime import date
from typing import Optional, Literal

from pydantic import BaseModel, Field


TaskStatus = Literal["pending", "in progress", "completed", "overdue"]


class TaskCreate(BaseModel):
    """Model for creating or replacing a task."""

    title: str = Field(..., min_length=1, description="Task title")
    description: Optional[str] = Field(default=None, description="Task details")
    status: TaskStatus = Field(default="pending", description="Task status")
    due_date: Optional[date] = Field(default=None, description="Due date")
    employee_id: int = Field(..., gt=0, description="Assigned employee")
