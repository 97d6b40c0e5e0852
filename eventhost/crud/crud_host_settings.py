# eventhost/crud/crud_host_settings.py
from typing import Optional

from sqlalchemy.orm import Session

from eventhost.models.host_settings import HostSettings
from eventhost.schemas.settings import MASK_PREFIX, EmailSettingsUpdate
from .base import CRUDBase


class CRUDHostSettings(CRUDBase[HostSettings, EmailSettingsUpdate, EmailSettingsUpdate]):
    def get_by_host(self, db: Session, *, host_id: str) -> Optional[HostSettings]:
        return self.get(db, id=host_id)

    def upsert(
        self, db: Session, *, host_id: str, obj_in: EmailSettingsUpdate
    ) -> HostSettings:
        """
        Creates the host's email settings, or updates the fields sent in the
        payload. An empty or masked secret keeps the stored one.
        """
        data = obj_in.model_dump(exclude_unset=True)
        if "email_provider" in obj_in.model_fields_set:
            data["email_provider"] = obj_in.email_provider.value
        for secret in ("sendgrid_api_key", "emailjs_private_key"):
            value = data.get(secret)
            if not value or value.startswith(MASK_PREFIX):
                data.pop(secret, None)

        db_obj = self.get_by_host(db, host_id=host_id)
        if db_obj is None:
            data.setdefault("email_provider", obj_in.email_provider.value)
            db_obj = self.model(host_id=host_id, **data)
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
            return db_obj
        return self.update(db, db_obj=db_obj, obj_in=data)


host_settings = CRUDHostSettings(HostSettings)
