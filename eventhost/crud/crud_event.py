# eventhost/crud/crud_event.py
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from eventhost.core.exceptions import ValidationError
from eventhost.models.event import Event
from eventhost.models.registration import Registration
from eventhost.schemas.event import EventCreate, EventUpdate
from eventhost.utils.time import as_utc
from .base import CRUDBase


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):

    def create_with_host(
        self, db: Session, *, obj_in: EventCreate, host_id: str
    ) -> Event:
        return self.create(db, obj_in=obj_in, host_id=host_id)

    def get_for_host(self, db: Session, *, id: str, host_id: str) -> Optional[Event]:
        """
        Returns the event only when it belongs to the host.
        """
        event = self.get(db, id=id)
        if event is None or event.host_id != host_id:
            return None
        return event

    def get_multi_by_host(self, db: Session, *, host_id: str) -> List[Event]:
        return (
            db.query(self.model)
            .filter(self.model.host_id == host_id)
            .order_by(self.model.start_date.desc())
            .all()
        )

    def get_registration_counts(
        self, db: Session, *, event_ids: List[str]
    ) -> dict[str, int]:
        """
        Registration count per event id, in a single grouped query.
        Events without registrations are absent from the map.
        """
        if not event_ids:
            return {}
        rows = (
            db.query(Registration.event_id, func.count(Registration.id))
            .filter(Registration.event_id.in_(event_ids))
            .group_by(Registration.event_id)
            .all()
        )
        return {event_id: count for event_id, count in rows}

    def get_multi_with_counts(self, db: Session, *, host_id: str) -> List[dict]:
        events = self.get_multi_by_host(db, host_id=host_id)
        counts = self.get_registration_counts(
            db, event_ids=[event.id for event in events]
        )

        event_dicts = []
        for event in events:
            event_dict = {
                c.name: getattr(event, c.name) for c in event.__table__.columns
            }
            event_dict["registrations_count"] = counts.get(event.id, 0)
            event_dicts.append(event_dict)
        return event_dicts

    def update(self, db: Session, *, db_obj: Event, obj_in: EventUpdate) -> Event:
        update_data = obj_in.model_dump(exclude_unset=True)

        start = update_data.get("start_date", db_obj.start_date)
        end = update_data.get("end_date", db_obj.end_date)
        if as_utc(end) < as_utc(start):
            raise ValidationError(
                "End date must be after the start date", field="end_date"
            )

        return super().update(db, db_obj=db_obj, obj_in=update_data)


event = CRUDEvent(Event)
