# eventhost/api/v1/api.py

from fastapi import APIRouter
from eventhost.api.v1.endpoints import (
    dashboard,
    emails,
    events,
    public,
    registrations,
    settings,
    themes,
    users,
)

# This is the main router for the v1 API.
api_router = APIRouter()

api_router.include_router(public.router)
api_router.include_router(events.router)
api_router.include_router(registrations.router)
api_router.include_router(emails.router)
api_router.include_router(dashboard.router)
api_router.include_router(settings.router)
api_router.include_router(themes.router)
api_router.include_router(users.router)
