"""
Persistence gateway: one Repository per mapped model.

Repositories wrap an AsyncSession and expose the handful of queries the
services need. They never commit; the service that owns the transaction does.
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.core.metrics import record_db_operation
from eventdesk.db.base import Base
from eventdesk.models import Employee, Event, Ticket

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Collection-style access to a single table."""

    def __init__(self, db: AsyncSession, model: type[ModelT]) -> None:
        self.db = db
        self.model = model
        self._pk = model.__mapper__.primary_key[0]

    async def all(self) -> list[ModelT]:
        record_db_operation("read")
        result = await self.db.execute(select(self.model))
        return list(result.scalars().all())

    async def get(self, key: Any) -> ModelT | None:
        record_db_operation("read")
        return await self.db.get(self.model, key)

    async def first(self, *criteria) -> ModelT | None:
        record_db_operation("read")
        result = await self.db.execute(select(self.model).where(*criteria).limit(1))
        return result.scalars().first()

    async def filter(self, *criteria, order_by: Sequence = ()) -> list[ModelT]:
        record_db_operation("read")
        query = select(self.model).where(*criteria)
        if order_by:
            query = query.order_by(*order_by)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def exists(self, key: Any) -> bool:
        return await self.any(self._pk == key)

    async def any(self, *criteria) -> bool:
        record_db_operation("read")
        result = await self.db.execute(select(exists().where(*criteria)))
        return bool(result.scalar())

    def add(self, instance: ModelT) -> ModelT:
        record_db_operation("write")
        self.db.add(instance)
        return instance

    def update(self, instance: ModelT, values: dict[str, Any]) -> ModelT:
        record_db_operation("write")
        for field_name, value in values.items():
            setattr(instance, field_name, value)
        return instance

    async def remove(self, instance: ModelT) -> None:
        record_db_operation("write")
        await self.db.delete(instance)


class Gateway:
    """Entry point bundling the three repositories for one session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.employees: Repository[Employee] = Repository(db, Employee)
        self.events: Repository[Event] = Repository(db, Event)
        self.tickets: Repository[Ticket] = Repository(db, Ticket)

    async def tickets_by_employee(self, service_number: int) -> list[Ticket]:
        return await self.tickets.filter(
            Ticket.service_number == service_number, order_by=(Ticket.ticket_number,)
        )

    async def tickets_by_event(self, event_id: int) -> list[Ticket]:
        return await self.tickets.filter(
            Ticket.event_id == event_id, order_by=(Ticket.ticket_number,)
        )

    async def employee_has_tickets(self, service_number: int) -> bool:
        return await self.tickets.any(Ticket.service_number == service_number)

    async def event_has_tickets(self, event_id: int) -> bool:
        return await self.tickets.any(Ticket.event_id == event_id)

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        record_db_operation("rollback")
        await self.db.rollback()

    async def refresh(self, instance: Base) -> None:
        await self.db.refresh(instance)
