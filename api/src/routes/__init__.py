"""HTTP routers for the CRM API."""

from . import pipelines, stages, contacts, tasks, messages, goals

# Mounted under /api, in this order
ROUTERS = [
    pipelines.router,
    stages.router,
    contacts.tags_router,
    contacts.router,
    messages.router,
    tasks.router,
    goals.router,
    goals.projects_router,
]

__all__ = ["ROUTERS"]
