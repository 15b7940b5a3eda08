from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Text
from datetime import datetime, timezone
from app.database import Base


def utc_now():
    """Return current UTC timezone-aware datetime."""
    return datetime.now(timezone.utc)


class Notification(Base):
    __tablename__ = "notifications"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String(64), nullable=False)  # e.g. "new_post"
    title = Column(String)
    body = Column(Text)
    payload = Column(Text, nullable=True)  # JSON payload string
    is_read = Column(Boolean, default=False)
    created_at = Column(DateTime, default=utc_now)
