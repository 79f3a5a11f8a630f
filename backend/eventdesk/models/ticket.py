"""
Ticket model referencing one employee (seller) and one event.

Key design decisions:
- `ticket_number` is supplied by the caller, never generated
- Foreign keys carry no ON DELETE CASCADE: deleting a referenced employee or
  event is refused by the services before it reaches the database
- Relationships are many-to-one only; employees and events hold no
  collection of tickets
- Indexes on both foreign keys back the dependency checks
"""

from sqlalchemy import Column, Integer, String, Date, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from eventdesk.db.base import Base


class Ticket(Base):
    __tablename__ = "tickets"

    ticket_number = Column(Integer, primary_key=True, autoincrement=False)
    service_number = Column(
        Integer, ForeignKey("employees.service_number"), nullable=False, index=True
    )
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    sale_date = Column(Date, nullable=False)
    ticket_type = Column(String(20), nullable=False)
    payment_method = Column(String(20), nullable=False)

    # Optimistic locking version counter
    version = Column(Integer, nullable=False, default=1)

    # Relationships
    employee = relationship("Employee", lazy="selectin")
    event = relationship("Event", lazy="selectin")

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("ticket_number > 0", name="check_ticket_number_positive"),
    )

    @property
    def employee_full_name(self) -> str | None:
        return self.employee.full_name if self.employee is not None else None

    @property
    def event_name(self) -> str | None:
        return self.event.name if self.event is not None else None

    def __repr__(self) -> str:
        return (
            f"<Ticket(ticket_number={self.ticket_number}, employee={self.service_number}, "
            f"event={self.event_id})>"
        )
