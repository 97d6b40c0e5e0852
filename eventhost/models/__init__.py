# eventhost/models/__init__.py
# Import all models so Base.metadata knows every table and relationships resolve

from eventhost.db.base_class import Base
from eventhost.models.event import Event
from eventhost.models.registration import Registration
from eventhost.models.email_tracking import EmailTracking
from eventhost.models.host_settings import HostSettings
from eventhost.models.user import User
