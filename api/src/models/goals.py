"""Pydantic models for goals and projects."""

from datetime import date
from typing import Optional, Literal

from pydantic import BaseModel, Field, model_validator


ProjectPriority = Literal["low", "medium", "high", "critical"]
ProjectStatus = Literal["planning", "in progress", "completed", "paused"]


class GoalCreate(BaseModel):
    """Model for creating or replacing a goal."""

    title: str = Field(..., min_length=1, description="Goal title")
    description: Optional[str] = Field(default=None, description="Goal details")
    start_date: Optional[date] = Field(default=None, description="Start of the goal period")
    end_date: Optional[date] = Field(default=None, description="End of the goal period")
    target_amount: Optional[float] = Field(default=None, ge=0, description="Amount to reach")
    achieved: float = Field(default=0, ge=0, description="Amount reached so far")
    item_id: Optional[int] = Field(default=None, gt=0, description="Tracked item")

    @model_validator(mode="after")
    def check_period(self):
        """The period must not end before it starts."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProjectCreate(BaseModel):
    """Model for creating or replacing a project."""

    name: str = Field(..., min_length=1, description="Project name")
    amount: Optional[float] = Field(default=None, ge=0, description="Project budget")
    start_date: Optional[date] = Field(default=None)
    expected_end_date: Optional[date] = Field(default=None)
    end_date: Optional[date] = Field(default=None)
    priority: Optional[ProjectPriority] = Field(default=None)
    manager_id: Optional[int] = Field(default=None, gt=0, description="Managing employee")
    status: ProjectStatus = Field(default="planning")
