from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class DashboardEvent(BaseModel):
    id: str
    title: str
    start_date: datetime
    end_date: datetime
    registrations: int
    price: Optional[float] = None


class DashboardMetrics(BaseModel):
    totalAttendees: int = 0
    upcomingEvents: int = 0
    totalRevenue: float = 0.0


class Dashboard(BaseModel):
    metrics: DashboardMetrics
    events: List[DashboardEvent]
