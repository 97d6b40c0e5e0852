# eventhost/crud/crud_registration.py
import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from eventhost.core.exceptions import DuplicateRegistrationError, ValidationError
from eventhost.models.event import Event
from eventhost.models.registration import Registration
from eventhost.schemas.registration import RegistrationCreate
from eventhost.utils.time import utcnow
from .base import CRUDBase

logger = logging.getLogger(__name__)


def check_custom_answers(
    questions: List[str], answers: Dict[str, str]
) -> Dict[str, str]:
    """
    Every question needs exactly one non-blank answer keyed by its index.

    Returns the answers with surrounding whitespace removed.
    Raises ValidationError naming the first offending field.
    """
    expected = {str(index) for index in range(len(questions))}
    unknown = sorted(set(answers) - expected)
    if unknown:
        raise ValidationError(
            f"Unknown custom answer key '{unknown[0]}'",
            field=f"custom_answers.{unknown[0]}",
        )

    cleaned = {}
    for index, question in enumerate(questions):
        answer = (answers.get(str(index)) or "").strip()
        if not answer:
            raise ValidationError(
                f"An answer to '{question}' is required",
                field=f"custom_answers.{index}",
            )
        cleaned[str(index)] = answer
    return cleaned


class CRUDRegistration(CRUDBase[Registration, RegistrationCreate, RegistrationCreate]):
    def get_by_email(
        self, db: Session, *, event_id: str, email: str
    ) -> Optional[Registration]:
        """
        Checks if a registration exists for this email on a specific event.
        """
        return (
            db.query(self.model)
            .filter(and_(self.model.event_id == event_id, self.model.email == email))
            .first()
        )

    def get_multi_by_event(
        self, db: Session, *, event_id: str, skip: int = 0, limit: int = 1000
    ) -> List[Registration]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id)
            .order_by(self.model.registered_at.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_count_by_event(self, db: Session, *, event_id: str) -> int:
        return db.query(self.model).filter(self.model.event_id == event_id).count()

    def get_multi_for_host(self, db: Session, *, host_id: str) -> List[Registration]:
        """
        All registrations across the host's events, with the event loaded.
        """
        return (
            db.query(self.model)
            .join(Event, Event.id == self.model.event_id)
            .options(joinedload(self.model.event))
            .filter(Event.host_id == host_id)
            .order_by(self.model.registered_at.desc())
            .all()
        )

    def create_for_event(
        self, db: Session, *, obj_in: RegistrationCreate, event: Event
    ) -> Registration:
        """
        Validates the custom answers against the event's questions and
        stores the registration.

        The unique (event_id, email) constraint is what actually rejects a
        duplicate; the lookup before the insert only gives the common case a
        cheap early answer.
        """
        answers = check_custom_answers(event.custom_questions or [], obj_in.custom_answers)

        if self.get_by_email(db, event_id=event.id, email=obj_in.email):
            raise DuplicateRegistrationError()

        db_obj = self.model(
            event_id=event.id,
            full_name=obj_in.full_name.strip(),
            email=obj_in.email,
            phone=obj_in.phone.strip(),
            company=obj_in.company.strip(),
            address=obj_in.address.model_dump(),
            custom_answers=answers,
            notify_before=obj_in.notify_before,
        )
        db.add(db_obj)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(
                f"Concurrent duplicate registration rejected for event {event.id}"
            )
            raise DuplicateRegistrationError()
        db.refresh(db_obj)
        return db_obj

    def get_pending_reminders(
        self, db: Session, *, lead: timedelta, now: Optional[datetime] = None
    ) -> List[Registration]:
        """
        Opted-in registrations whose event starts within the lead time and
        that have not been reminded yet.
        """
        now = now or utcnow()
        return (
            db.query(self.model)
            .join(Event, Event.id == self.model.event_id)
            .options(joinedload(self.model.event))
            .filter(
                self.model.notify_before == True,  # noqa: E712
                self.model.reminder_sent_at.is_(None),
                Event.start_date > now,
                Event.start_date <= now + lead,
            )
            .all()
        )

    def mark_reminder_sent(self, db: Session, *, db_obj: Registration) -> Registration:
        db_obj.reminder_sent_at = utcnow()
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


registration = CRUDRegistration(Registration)
