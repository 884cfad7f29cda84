"""Contacts and tags API endpoints."""

from fastapi import APIRouter

from ..models.contacts import ContactCreate, TagCreate
from .resources import ResourceConfig, add_crud_routes


CONTACTS = ResourceConfig(
    table="contacts",
    label="Contact",
    create_model=ContactCreate
)

TAGS = ResourceConfig(
    table="tags",
    label="Tag",
    create_model=TagCreate
)

router = add_crud_routes(
    APIRouter(prefix="/contacts", tags=["Contacts"]),
    CONTACTS
)

tags_router = add_crud_routes(
    APIRouter(prefix="/tags", tags=["Tags"]),
    TAGS
)
