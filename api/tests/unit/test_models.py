"""Unit tests for request body models."""

import pytest
from datetime import date
from pydantic import ValidationError

from src.models import (
    PipelineCreate,
    StageCreate,
    PipelineStageCreate,
    TagCreate,
    ContactCreate,
    PrivateMessageCreate,
    SupportMessageCreate,
    MessageContentUpdate,
    TaskCreate,
    GoalCreate,
    ProjectCreate
)


class TestPipelineModels:
    """Test pipeline and stage models."""

    def test_pipeline_minimal(self):
        pipeline = PipelineCreate(name="Sales")
        assert pipeline.description is None

    def test_pipeline_requires_name(self):
        with pytest.raises(ValidationError):
            PipelineCreate(name="")

    def test_stage_position_non_negative(self):
        with pytest.raises(ValidationError):
            StageCreate(pipeline_id=1, name="Lead", position=-1)

    def test_stage_for_pipeline(self):
        stage = PipelineStageCreate(name="Lead", position=0).for_pipeline(4)
        assert stage == StageCreate(pipeline_id=4, name="Lead", position=0)


class TestContactModels:
    """Test contact and tag models."""

    def test_tag_color(self):
        assert TagCreate(name="VIP", color="#FFD700").color == "#FFD700"
        with pytest.raises(ValidationError):
            TagCreate(name="VIP", color="gold")

    def test_contact_defaults(self):
        contact = ContactCreate(name="John", stage_id=1)
        assert contact.deal_value == 0
        assert contact.status == "open"
        assert contact.email is None

    def test_contact_empty_email_allowed(self):
        assert ContactCreate(name="John", stage_id=1, email="").email == ""

    def test_contact_invalid_email(self):
        with pytest.raises(ValidationError):
            ContactCreate(name="John", stage_id=1, email="not-an-email")

    def test_contact_confidence_range(self):
        with pytest.raises(ValidationError):
            ContactCreate(name="John", stage_id=1, confidence=101)

    def test_contact_status(self):
        with pytest.raises(ValidationError):
            ContactCreate(name="John", stage_id=1, status="won")

    def test_contact_dates_dump_as_iso(self):
        contact = ContactCreate(name="John", stage_id=1, registered_on="2024-01-15")
        assert contact.registered_on == date(2024, 1, 15)
        assert contact.model_dump(mode="json")["registered_on"] == "2024-01-15"


class TestMessageModels:
    """Test message models."""

    def test_private_requires_receiver(self):
        with pytest.raises(ValidationError):
            PrivateMessageCreate(content="Hi", sender_id=1)

    def test_support_receiver_optional(self):
        message = SupportMessageCreate(content="Help", sender_id=1, company_id=2)
        assert message.receiver_id is None

    def test_content_required(self):
        with pytest.raises(ValidationError):
            MessageContentUpdate(content="")


class TestTaskGoalProjectModels:
    """Test task, goal and project models."""

    def test_task_defaults(self):
        task = TaskCreate(title="Call back", employee_id=3)
        assert task.status == "pending"

    def test_task_status_values(self):
        assert TaskCreate(title="x", employee_id=1, status="in progress").status == "in progress"
        with pytest.raises(ValidationError):
            TaskCreate(title="x", employee_id=1, status="done")

    def test_goal_period(self):
        GoalCreate(title="Q3", start_date="2024-07-01", end_date="2024-09-30")
        with pytest.raises(ValidationError):
            GoalCreate(title="Q3", start_date="2024-09-30", end_date="2024-07-01")

    def test_project_defaults(self):
        project = ProjectCreate(name="Website")
        assert project.status == "planning"
        assert project.priority is None

    def test_project_priority(self):
        with pytest.raises(ValidationError):
            ProjectCreate(name="Website", priority="urgent")
