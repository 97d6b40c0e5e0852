from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from eventhost.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    # The identity provider's subject id
    id = Column(String, primary_key=True)
    email = Column(String, nullable=False)
    display_name = Column(String, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
