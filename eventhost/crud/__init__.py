# eventhost/crud/__init__.py

from .crud_dashboard import dashboard
from .crud_email_tracking import email_tracking
from .crud_event import event
from .crud_host_settings import host_settings
from .crud_registration import registration
from .crud_user import user
