"""
Employee model keyed by the caller-assigned service number.

Key design decisions:
- `service_number` is supplied by the caller, never generated (autoincrement off)
- No `tickets` collection: tickets point at employees, the reverse direction
  is a query (see Repository.tickets_by_employee)
- `version` column enables optimistic locking on update/delete
"""

from sqlalchemy import Column, Integer, String, CheckConstraint

from eventdesk.db.base import Base


class Employee(Base):
    __tablename__ = "employees"

    service_number = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(50), nullable=False)
    surname = Column(String(50), nullable=False)
    post = Column(String(50), nullable=False)
    phone_number = Column(String(20), nullable=False)

    # Optimistic locking version counter
    version = Column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        CheckConstraint("service_number > 0", name="check_employee_service_number_positive"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.surname} {self.name}"

    def __repr__(self) -> str:
        return f"<Employee(service_number={self.service_number}, full_name={self.full_name})>"
