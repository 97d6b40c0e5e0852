# eventhost/api/v1/endpoints/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventhost.api import deps
from eventhost.crud import crud_dashboard
from eventhost.db.session import get_db
from eventhost.schemas.dashboard import Dashboard
from eventhost.schemas.token import TokenPayload

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_model=Dashboard)
def get_dashboard(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Attendee, upcoming-event and revenue totals plus per-event counts for
    the current host.
    """
    return crud_dashboard.dashboard.get_host_dashboard(db, host_id=current_user.sub)
