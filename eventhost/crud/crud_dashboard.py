# eventhost/crud/crud_dashboard.py
"""
Aggregated metrics for the host dashboard.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from eventhost.models.event import Event
from eventhost.schemas.dashboard import Dashboard, DashboardEvent, DashboardMetrics
from eventhost.utils.time import as_utc, utcnow
from .crud_event import event as crud_event


class CRUDDashboard:
    """
    Dashboard statistics for a single host. Nothing is cached; every call
    reads the host's current events and registration counts.
    """

    def get_host_events(self, db: Session, *, host_id: str) -> list[Event]:
        return crud_event.get_multi_by_host(db, host_id=host_id)

    def get_host_dashboard(
        self, db: Session, *, host_id: str, now: Optional[datetime] = None
    ) -> Dashboard:
        """
        totalAttendees is the sum of registrations, upcomingEvents counts
        events starting after now, totalRevenue is price x registrations with
        free events contributing nothing.
        """
        now = now or utcnow()
        events = self.get_host_events(db, host_id=host_id)
        counts = crud_event.get_registration_counts(
            db, event_ids=[e.id for e in events]
        )

        rows = []
        metrics = DashboardMetrics()
        for e in events:
            registrations = counts.get(e.id, 0)
            metrics.totalAttendees += registrations
            if as_utc(e.start_date) > now:
                metrics.upcomingEvents += 1
            if e.price:
                metrics.totalRevenue += e.price * registrations

            rows.append(
                DashboardEvent(
                    id=e.id,
                    title=e.title,
                    start_date=e.start_date,
                    end_date=e.end_date,
                    registrations=registrations,
                    price=e.price,
                )
            )

        return Dashboard(metrics=metrics, events=rows)


dashboard = CRUDDashboard()
