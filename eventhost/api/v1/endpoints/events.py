# eventhost/api/v1/endpoints/events.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from eventhost.api import deps
from eventhost.crud import crud_event
from eventhost.db.session import get_db
from eventhost.schemas.event import (
    Event as EventSchema,
    EventCreate,
    EventUpdate,
    EventWithCount,
)
from eventhost.schemas.token import TokenPayload

router = APIRouter(tags=["Events"])


def get_owned_event(db: Session, event_id: str, host_id: str):
    event = crud_event.event.get_for_host(db, id=event_id, host_id=host_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        )
    return event


@router.post(
    "/events",
    response_model=EventSchema,
    status_code=status.HTTP_201_CREATED,
)
def create_event(
    event_in: EventCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Creates a new event owned by the current host."""
    return crud_event.event.create_with_host(
        db, obj_in=event_in, host_id=current_user.sub
    )


@router.get("/events", response_model=List[EventWithCount])
def list_events(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """The host's events, newest start date first, with registration counts."""
    return crud_event.event.get_multi_with_counts(db, host_id=current_user.sub)


@router.get("/events/{event_id}", response_model=EventWithCount)
def get_event_by_id(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = get_owned_event(db, event_id, current_user.sub)
    counts = crud_event.event.get_registration_counts(db, event_ids=[event.id])
    result = EventWithCount.model_validate(event)
    result.registrations_count = counts.get(event.id, 0)
    return result


@router.patch("/events/{event_id}", response_model=EventSchema)
def update_event(
    event_id: str,
    event_in: EventUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Partially update an event."""
    event = get_owned_event(db, event_id, current_user.sub)
    return crud_event.event.update(db, db_obj=event, obj_in=event_in)


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Deletes the event together with its registrations."""
    get_owned_event(db, event_id, current_user.sub)
    crud_event.event.remove(db, id=event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
