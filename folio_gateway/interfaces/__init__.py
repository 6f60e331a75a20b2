"""
Interfaces layer package.

Contains FastAPI routers, Pydantic response schemas and the
JSON projection of domain entities. No business logic belongs here.
"""
