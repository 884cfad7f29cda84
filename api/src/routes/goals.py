"""Goals and projects API endpoints."""

from fastapi import APIRouter

from ..models.goals import GoalCreate, ProjectCreate
from .resources import ResourceConfig, add_crud_routes


GOALS = ResourceConfig(
    table="goals",
    label="Goal",
    create_model=GoalCreate
)

PROJECTS = ResourceConfig(
    table="projects",
    label="Project",
    create_model=ProjectCreate
)

router = add_crud_routes(
    APIRouter(prefix="/goals", tags=["Goals"]),
    GOALS
)

projects_router = add_crud_routes(
    APIRouter(prefix="/projects", tags=["Projects"]),
    PROJECTS
)
