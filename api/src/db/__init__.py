"""Database access for the CRM API."""
