"""Request body models for the CRM API."""

from .pipelines import (
    PipelineCreate,
    StageCreate,
    StageUpdate,
    PipelineStageCreate
)
from .contacts import TagCreate, ContactCreate
from .messages import (
    PrivateMessageCreate,
    GroupMessageCreate,
    SupportMessageCreate,
    MessageContentUpdate
)
from .tasks import TaskCreate
from .goals import GoalCreate, ProjectCreate

__all__ = [
    "PipelineCreate",
    "StageCreate",
    "StageUpdate",
    "PipelineStageCreate",
    "TagCreate",
    "ContactCreate",
    "PrivateMessageCreate",
    "GroupMessageCreate",
    "SupportMessageCreate",
    "MessageContentUpdate",
    "TaskCreate",
    "GoalCreate",
    "ProjectCreate"
]
