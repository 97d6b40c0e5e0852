# eventhost/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from eventhost import __version__
from eventhost.api.v1.api import api_router
from eventhost.core.config import settings
from eventhost.core.exceptions import register_exception_handlers
from eventhost.core.limiter import limiter
from eventhost.core.logging import setup_logging
from eventhost.db.base_class import Base
from eventhost.db.session import engine
from eventhost import models  # noqa: F401  registers tables on Base.metadata
from eventhost.scheduler import init_scheduler, shutdown_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Application starting up...")

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables checked and created if necessary.")

    if settings.SCHEDULER_ENABLED:
        init_scheduler()

    yield

    logger.info("Application shutting down...")
    shutdown_scheduler()


app = FastAPI(
    title="EventHost Service",
    version=__version__,
    description="""
        **EventHost** lets hosts publish events with a themed public
        registration page and reach their attendees by email.

        ## Features

        * **Events**: Create, update and delete events with agenda, custom questions and theme
        * **Registrations**: Public registration with custom answers, one per email per event
        * **Emails**: Bulk and notification emails through SendGrid or EmailJS, 100 per host per day
        * **Dashboard**: Attendee, upcoming event and revenue totals
        * **Calendar**: Google/Outlook links and .ics download

        ## Authentication

        Host endpoints require a JWT from the identity provider in the
        `Authorization: Bearer <token>` header. Endpoints under `/public/`
        need no authentication.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "EventHost service is running"}
