# eventhost/api/v1/endpoints/registrations.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventhost.api import deps
from eventhost.api.v1.endpoints.events import get_owned_event
from eventhost.crud import crud_registration
from eventhost.db.session import get_db
from eventhost.schemas.registration import Attendee, Registration
from eventhost.schemas.token import TokenPayload

router = APIRouter(tags=["Registrations"])


@router.get("/events/{event_id}/registrations", response_model=List[Registration])
def list_registrations(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Retrieve all registrations for one of the host's events.
    """
    get_owned_event(db, event_id, current_user.sub)
    return crud_registration.registration.get_multi_by_event(db, event_id=event_id)


@router.get("/attendees", response_model=List[Attendee])
def list_attendees(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Registrations across all of the host's events, with event titles."""
    registrations = crud_registration.registration.get_multi_for_host(
        db, host_id=current_user.sub
    )
    return [
        Attendee(
            **Registration.model_validate(r).model_dump(),
            event_title=r.event.title,
        )
        for r in registrations
    ]
