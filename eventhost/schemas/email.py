# eventhost/schemas/email.py
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator


class EmailStatus(str, Enum):
    sent = "sent"
    delivered = "delivered"
    opened = "opened"
    clicked = "clicked"
    bounced = "bounced"


class EmailRequest(BaseModel):
    """
    One send call: literal html/text, or a provider template id with params.
    """
    to: Union[str, List[str]]
    subject: str = "Event Notification"
    text: Optional[str] = None
    html: Optional[str] = None
    from_email: Optional[str] = None
    template_id: Optional[str] = None
    template_params: Dict[str, Any] = Field(default_factory=dict)

    @property
    def recipients(self) -> List[str]:
        return [self.to] if isinstance(self.to, str) else list(self.to)


class EmailSendResult(BaseModel):
    success: bool
    error: Optional[str] = None
    # 'invalid_recipient', 'quota_exceeded', 'provider_not_configured', 'provider_error'
    error_code: Optional[str] = None
    tracking_id: Optional[str] = None
    recipients: int = 0


class EmailStats(BaseModel):
    total: int = 0
    delivered: int = 0
    opened: int = 0
    clicked: int = 0
    bounced: int = 0


class BulkEmailTemplate(str, Enum):
    update = "update"
    reminder = "reminder"
    cancellation = "cancellation"
    survey = "survey"
    event_notification = "event_notification"


class BulkEmailRequest(BaseModel):
    """
    Email to every registrant of an event.

    `update` needs a subject and body. `survey` needs a survey link. The
    other templates build their own text; a subject, when given, replaces
    the template subject.
    """
    template: BulkEmailTemplate = BulkEmailTemplate.update
    subject: Optional[str] = None
    body: Optional[str] = None
    reason: Optional[str] = None
    survey_link: Optional[str] = None

    @model_validator(mode="after")
    def check_template_fields(self):
        if self.template == BulkEmailTemplate.update:
            if not (self.subject or "").strip() or not (self.body or "").strip():
                raise ValueError("Please fill in both subject and body")
        if self.template == BulkEmailTemplate.survey and not (self.survey_link or "").strip():
            raise ValueError("A survey link is required for survey emails")
        return self


class EmailConfigCheckRequest(BaseModel):
    to_email: Optional[str] = None
