from datetime import datetime, timezone
from types import SimpleNamespace

from icalendar import Calendar

from eventhost.utils.calendar_utils import (
    generate_event_ics,
    generate_ics_filename,
    google_calendar_link,
    outlook_calendar_link,
)

EVENT = SimpleNamespace(
    id="evt_cal",
    title="Launch Party",
    description="Drinks, demos; and music",
    start_date=datetime(2026, 3, 14, 18, 30),
    end_date=datetime(2026, 3, 14, 21, 0, tzinfo=timezone.utc),
    location="Berlin",
)


def test_google_calendar_link():
    link = google_calendar_link(EVENT)

    assert link.startswith("https://calendar.google.com/calendar/render?action=TEMPLATE")
    assert "dates=20260314T183000Z%2F20260314T210000Z" in link
    assert "location=Berlin" in link


def test_outlook_calendar_link():
    link = outlook_calendar_link(EVENT)

    assert "subject=Launch+Party" in link
    assert "startdt=2026-03-14T18%3A30%3A00%2B00%3A00" in link


def test_generate_event_ics():
    cal = Calendar.from_ical(
        generate_event_ics(EVENT, event_url="https://example.com/events/evt_cal")
    )
    vevent = cal.walk("VEVENT")[0]

    assert str(vevent["summary"]) == "Launch Party"
    assert str(vevent["location"]) == "Berlin"
    assert vevent.decoded("dtstart") == datetime(2026, 3, 14, 18, 30, tzinfo=timezone.utc)
    assert str(vevent["url"]) == "https://example.com/events/evt_cal"
    assert "https://example.com/events/evt_cal" in str(vevent["description"])
    assert len(vevent.walk("VALARM")) == 2


def test_generate_ics_filename():
    assert generate_ics_filename("Launch Party: 2026!") == "event-Launch-Party-2026.ics"
    assert generate_ics_filename("???") == "event-calendar.ics"
