# eventhost/crud/crud_user.py
from typing import Optional

from sqlalchemy.orm import Session

from eventhost.models.user import User
from eventhost.schemas.user import UserUpdate
from .base import CRUDBase


class CRUDUser(CRUDBase[User, UserUpdate, UserUpdate]):
    def upsert(self, db: Session, *, id: str, obj_in: UserUpdate) -> User:
        db_obj = self.get(db, id=id)
        if db_obj is None:
            return self.create(db, obj_in=obj_in, id=id)
        return self.update(db, db_obj=db_obj, obj_in=obj_in)

    def get_email(self, db: Session, *, id: str) -> Optional[str]:
        db_obj = self.get(db, id=id)
        return db_obj.email if db_obj else None


user = CRUDUser(User)
