"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from eventdesk.api.routes import employees, events, tickets

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(employees.router)
api_router.include_router(events.router)
api_router.include_router(tickets.router)
