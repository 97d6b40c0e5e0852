# eventhost/core/email.py
"""
Email templates for attendee and host notifications.

Each builder returns a RenderedEmail: a subject, an HTML body rendered with
Jinja2 (autoescaped, so event text supplied by hosts cannot inject markup),
and template params for template-based providers such as EmailJS.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from jinja2 import DictLoader, Environment, select_autoescape

from eventhost.core.config import settings
from eventhost.schemas.email import BulkEmailRequest, BulkEmailTemplate, EmailRequest

_LAYOUT = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="color: #333;">{{ heading }}</h1>
    {% block content %}{% endblock %}
    {% if event %}
    <div style="background: #f5f5f5; padding: 15px; border-radius: 5px; margin: 20px 0;">
      <p><strong>Event:</strong> {{ event.title }}</p>
      <p><strong>Date:</strong> {{ event.start_date | event_date }}</p>
      <p><strong>Time:</strong> {{ event.start_date | event_time }} - {{ event.end_date | event_time }}</p>
      <p><strong>Location:</strong> {{ event.location }}</p>
    </div>
    {% endif %}
  </div>
</body>
</html>
"""

_TEMPLATES = {
    "layout.html": _LAYOUT,
    "reminder.html": """{% extends "layout.html" %}{% block content %}
    <p>Don't forget about {{ event.title }}!</p>
    {% endblock %}""",
    "update.html": """{% extends "layout.html" %}{% block content %}
    {% for paragraph in message.split("\\n\\n") %}<p>{{ paragraph }}</p>{% endfor %}
    {% if changes %}<ul>{% for change in changes %}<li>{{ change }}</li>{% endfor %}</ul>{% endif %}
    <hr style="margin: 20px 0;" />
    <h2 style="color: #666;">Event Details</h2>
    {% endblock %}""",
    "cancellation.html": """{% extends "layout.html" %}{% block content %}
    <p>We regret to inform you that {{ event.title }} has been cancelled.</p>
    {% if reason %}<p><strong>Reason:</strong> {{ reason }}</p>{% endif %}
    {% endblock %}""",
    "survey.html": """{% extends "layout.html" %}{% block content %}
    <p>Thank you for attending {{ event.title }}! We would love to hear your thoughts about the event.</p>
    <p><a href="{{ survey_link }}">Share your feedback</a></p>
    {% endblock %}""",
    "host_registration.html": """{% extends "layout.html" %}{% block content %}
    <p>{{ registration.full_name }} ({{ registration.email }}) just registered for {{ event.title }}.</p>
    <p><strong>Company:</strong> {{ registration.company }}<br>
       <strong>Phone:</strong> {{ registration.phone }}</p>
    {% if answers %}<ul>{% for question, answer in answers %}<li><strong>{{ question }}</strong>: {{ answer }}</li>{% endfor %}</ul>{% endif %}
    {% endblock %}""",
    "event_notification.html": """{% extends "layout.html" %}{% block content %}
    <p>{{ event.description }}</p>
    <p>We look forward to seeing you there!</p>
    {% endblock %}""",
}


def _event_date(value: datetime) -> str:
    return value.strftime("%A, %B %d, %Y")


def _event_time(value: datetime) -> str:
    return value.strftime("%I:%M %p")


_env = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=select_autoescape(default_for_string=True, default=True),
)
_env.filters["event_date"] = _event_date
_env.filters["event_time"] = _event_time


@dataclass
class RenderedEmail:
    subject: str
    html: str
    template_params: Dict[str, Any] = field(default_factory=dict)

    def to_request(self, to: Union[str, List[str]]) -> EmailRequest:
        return EmailRequest(
            to=to,
            subject=self.subject,
            html=self.html,
            template_params=self.template_params,
        )


def _render(template_name: str, heading: str, **context: Any) -> str:
    return _env.get_template(template_name).render(heading=heading, **context)


def _event_params(event) -> Dict[str, Any]:
    return {
        "event_title": event.title,
        "start_date": _event_date(event.start_date),
        "start_time": _event_time(event.start_date),
        "end_time": _event_time(event.end_date),
        "location": event.location,
    }


def event_page_url(event_id: str) -> str:
    return f"{settings.APP_URL.rstrip('/')}/events/{event_id}"


def reminder_email(event) -> RenderedEmail:
    return RenderedEmail(
        subject=f"Reminder: {event.title} is coming up!",
        html=_render("reminder.html", f"{event.title} is coming up!", event=event),
        template_params={
            **_event_params(event),
            "message": f"Don't forget about {event.title}!",
        },
    )


def update_email(
    event, subject: str, message: str, changes: Optional[List[str]] = None
) -> RenderedEmail:
    """Free-form host message to registrants, with the event details below it."""
    return RenderedEmail(
        subject=subject,
        html=_render(
            "update.html", subject, event=event, message=message, changes=changes or []
        ),
        template_params={
            **_event_params(event),
            "changes": changes or [],
            "message": message,
        },
    )


def cancellation_email(event, reason: Optional[str] = None) -> RenderedEmail:
    return RenderedEmail(
        subject=f"Cancelled: {event.title}",
        html=_render(
            "cancellation.html", f"{event.title} is cancelled", event=event, reason=reason
        ),
        template_params={
            "event_title": event.title,
            "reason": reason,
            "message": f"We regret to inform you that {event.title} has been cancelled.",
        },
    )


def survey_email(event, survey_link: str) -> RenderedEmail:
    return RenderedEmail(
        subject=f"Feedback Request: {event.title}",
        html=_render(
            "survey.html", "How did it go?", event=event, survey_link=survey_link
        ),
        template_params={
            "event_title": event.title,
            "survey_link": survey_link,
            "message": (
                f"Thank you for attending {event.title}! "
                "We would love to hear your thoughts about the event."
            ),
        },
    )


def host_registration_email(event, registration) -> RenderedEmail:
    """Sent to the host when someone registers for one of their events."""
    questions = event.custom_questions or []
    answers = registration.custom_answers or {}
    answered = [
        (question, answers.get(str(index), ""))
        for index, question in enumerate(questions)
    ]
    return RenderedEmail(
        subject=f"New Registration for {event.title}",
        html=_render(
            "host_registration.html",
            "New registration",
            event=event,
            registration=registration,
            answers=answered,
        ),
        template_params={
            "event_title": event.title,
            "attendee_name": registration.full_name,
            "attendee_email": registration.email,
            "message": f"{registration.full_name} just registered for {event.title}.",
        },
    )


def event_notification_email(event) -> RenderedEmail:
    return RenderedEmail(
        subject=f"Event Reminder: {event.title}",
        html=_render("event_notification.html", event.title, event=event),
        template_params={
            **_event_params(event),
            "message": event.description,
        },
    )


def render_bulk_email(event, email_in: BulkEmailRequest) -> RenderedEmail:
    """Build the message a host sends to all registrants of an event."""
    template = email_in.template
    if template == BulkEmailTemplate.update:
        return update_email(event, subject=email_in.subject, message=email_in.body)

    if template == BulkEmailTemplate.reminder:
        rendered = reminder_email(event)
    elif template == BulkEmailTemplate.cancellation:
        rendered = cancellation_email(event, reason=email_in.reason or email_in.body)
    elif template == BulkEmailTemplate.survey:
        rendered = survey_email(event, email_in.survey_link)
    else:
        rendered = event_notification_email(event)

    if email_in.subject and email_in.subject.strip():
        rendered.subject = email_in.subject
    return rendered
