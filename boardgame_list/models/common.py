from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import DateTime

def utcnow():
    return datetime.now(timezone.utc)

class TimestampMixin:
    created_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_modified_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
