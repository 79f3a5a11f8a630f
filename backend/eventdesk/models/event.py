"""
Event model.

Key design decisions:
- `id` is supplied by the caller, never generated (autoincrement off)
- `event_date` is a calendar date; the service fills in today when omitted
- Index on `event_date` for chronological listings
"""

from sqlalchemy import Column, Integer, String, Date, Index, CheckConstraint

from eventdesk.db.base import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    event_date = Column(Date, nullable=False)
    event_type = Column(String(20), nullable=False)

    # Optimistic locking version counter
    version = Column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("id > 0", name="check_event_id_positive"),
        Index("ix_events_event_date", "event_date"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name}, date={self.event_date})>"
