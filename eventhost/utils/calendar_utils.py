"""
Calendar helpers for the public event page: "add to calendar" deep links
for Google Calendar and Outlook, and an RFC 5545 ICS file.
"""

from datetime import datetime, timedelta, timezone
from urllib.parse import urlencode

from icalendar import Alarm, Calendar, Event

from eventhost.utils.time import as_utc

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"
OUTLOOK_CALENDAR_URL = "https://outlook.live.com/calendar/0/deeplink/compose"


def google_calendar_link(event) -> str:
    start = as_utc(event.start_date).strftime("%Y%m%dT%H%M%SZ")
    end = as_utc(event.end_date).strftime("%Y%m%dT%H%M%SZ")
    params = {
        "action": "TEMPLATE",
        "text": event.title,
        "details": event.description,
        "location": event.location,
        "dates": f"{start}/{end}",
    }
    return f"{GOOGLE_CALENDAR_URL}?{urlencode(params)}"


def outlook_calendar_link(event) -> str:
    params = {
        "subject": event.title,
        "body": event.description,
        "location": event.location,
        "startdt": as_utc(event.start_date).isoformat(),
        "enddt": as_utc(event.end_date).isoformat(),
    }
    return f"{OUTLOOK_CALENDAR_URL}?{urlencode(params)}"


def generate_event_ics(event, event_url: str = "") -> bytes:
    """
    Build a single-event calendar file with a one-day and a one-hour
    reminder alarm.
    """
    cal = Calendar()
    cal.add("prodid", "-//EventHost//Event Registration//EN")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")

    vevent = Event()
    vevent.add("uid", f"{event.id}@eventhost")
    vevent.add("dtstamp", datetime.now(timezone.utc))
    vevent.add("dtstart", as_utc(event.start_date))
    vevent.add("dtend", as_utc(event.end_date))
    vevent.add("summary", event.title)

    description = event.description or ""
    if event_url:
        description = f"{description}\n\n{event_url}".strip()
        vevent.add("url", event_url)
    vevent.add("description", description)
    vevent.add("location", event.location)
    vevent.add("status", "CONFIRMED")

    for lead, label in ((timedelta(days=1), "tomorrow"), (timedelta(hours=1), "in 1 hour")):
        alarm = Alarm()
        alarm.add("action", "DISPLAY")
        alarm.add("trigger", -lead)
        alarm.add("description", f"{event.title} starts {label}")
        vevent.add_component(alarm)

    cal.add_component(vevent)
    return cal.to_ical()


def generate_ics_filename(title: str) -> str:
    sanitized = "".join(c if c.isalnum() or c in " -_" else "" for c in title)
    sanitized = sanitized.strip().replace(" ", "-")[:50]
    return f"event-{sanitized or 'calendar'}.ics"
