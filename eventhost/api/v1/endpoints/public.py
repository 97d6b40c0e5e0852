# eventhost/api/v1/endpoints/public.py
"""
Unauthenticated endpoints behind an event's public registration page.
"""
import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from eventhost.core.config import settings
from eventhost.core.email import event_page_url
from eventhost.core.limiter import limiter
from eventhost.core.themes import resolve_theme
from eventhost.crud import crud_event, crud_registration
from eventhost.db.session import get_db
from eventhost.schemas.event import CalendarLinks, PublicEvent
from eventhost.schemas.registration import Registration, RegistrationCreate
from eventhost.services.notifications import notify_host_of_registration
from eventhost.utils.calendar_utils import (
    generate_event_ics,
    generate_ics_filename,
    google_calendar_link,
    outlook_calendar_link,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Public"])


def get_event_or_404(db: Session, event_id: str):
    event = crud_event.event.get(db, id=event_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event with ID {event_id} not found",
        )
    return event


@router.get("/public/events/{event_id}", response_model=PublicEvent)
def get_public_event_by_id(event_id: str, db: Session = Depends(get_db)):
    """
    Retrieves the publicly viewable details of a single event, with its
    theme resolved.
    """
    event = get_event_or_404(db, event_id)
    return PublicEvent(
        id=event.id,
        title=event.title,
        description=event.description,
        start_date=event.start_date,
        end_date=event.end_date,
        location=event.location,
        cover_image_url=event.cover_image_url,
        agenda=event.agenda or [],
        custom_questions=event.custom_questions or [],
        price=event.price,
        theme=resolve_theme(event.theme),
    )


@router.post(
    "/public/events/{event_id}/registrations",
    response_model=Registration,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.PUBLIC_REGISTRATION_RATE_LIMIT)
async def register_for_event(
    request: Request,  # Required for rate limiter
    event_id: str,
    registration_in: RegistrationCreate,
    db: Session = Depends(get_db),
):
    """
    Registers an attendee for an event.

    Custom answers must cover every question of the event. One registration
    per email address per event; a second one is rejected with 409.
    The host is notified afterwards, and a failed notification does not
    fail the registration.
    """
    event = await asyncio.to_thread(get_event_or_404, db, event_id)
    registration = await asyncio.to_thread(
        crud_registration.registration.create_for_event,
        db,
        obj_in=registration_in,
        event=event,
    )
    logger.info(f"New registration {registration.id} for event {event.id}")

    await notify_host_of_registration(db, event=event, registration=registration)
    return registration


@router.get("/public/events/{event_id}/calendar", response_model=CalendarLinks)
def get_calendar_links(event_id: str, request: Request, db: Session = Depends(get_db)):
    event = get_event_or_404(db, event_id)
    return CalendarLinks(
        google=google_calendar_link(event),
        outlook=outlook_calendar_link(event),
        ics=str(request.url_for("download_event_calendar", event_id=event.id)),
    )


@router.get("/public/events/{event_id}/calendar.ics")
def download_event_calendar(event_id: str, db: Session = Depends(get_db)):
    """Download the event as an .ics file for Apple Calendar and others."""
    event = get_event_or_404(db, event_id)
    ics_content = generate_event_ics(event, event_url=event_page_url(event.id))
    filename = generate_ics_filename(event.title)

    return Response(
        content=ics_content,
        media_type="text/calendar",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Content-Type": "text/calendar; charset=utf-8",
        },
    )
