"""
Ticket service with the richest validation surface.

Every applicable rule is checked and all violations are reported together;
a ticket is written only when none remain. Lookups that need a valid key
(duplicate ticket, referenced employee, referenced event) are skipped when
that key already failed the positivity check.

Tickets have no dependents, so deleting one never needs a pre-check.
"""

from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from eventdesk.core.errors import ConcurrencyConflictError, MalformedInputError, NotFoundError
from eventdesk.core.logging import get_logger
from eventdesk.core.metrics import record_entity_operation, record_validation_errors
from eventdesk.core.validation import ValidationResult, check_positive
from eventdesk.db.gateway import Gateway
from eventdesk.models.ticket import Ticket
from eventdesk.schemas.common import Choice
from eventdesk.schemas.ticket import TicketIn, TicketOptions

logger = get_logger(__name__)

ENTITY = "ticket"
TICKET_NUMBER_POSITIVE = "Ticket number must be a positive number"
SERVICE_NUMBER_POSITIVE = "Service number must be a positive number"
EVENT_ID_POSITIVE = "Event ID must be a positive number"

TICKET_TYPES = ("Adult", "VIP", "Student", "Child", "Senior", "Discounted")
PAYMENT_METHODS = ("Cash", "Card", "Bank transfer", "Online", "Transfer")


def require_ticket_number(ticket_number: int | None) -> int:
    """Reject a missing or non-positive key before touching storage."""
    if ticket_number is None or ticket_number <= 0:
        record_entity_operation(ENTITY, "lookup", "invalid")
        raise MalformedInputError(ENTITY, TICKET_NUMBER_POSITIVE)
    return ticket_number


def _with_default_date(data: TicketIn) -> TicketIn:
    if data.sale_date is None:
        return data.model_copy(update={"sale_date": date.today()})
    return data


def _field_values(data: TicketIn) -> dict:
    return data.model_dump(exclude={"ticket_number"})


def _reject(result: ValidationResult, operation: str, data: TicketIn) -> None:
    if not result.is_valid:
        record_entity_operation(ENTITY, operation, "invalid")
        record_validation_errors(ENTITY, result.errors)
        logger.warning(
            "ticket_validation_failed",
            operation=operation,
            ticket_number=data.ticket_number,
            errors=result.as_dict(),
        )
    result.raise_if_invalid(ENTITY, data)


async def validate_references(gateway: Gateway, data: TicketIn) -> ValidationResult:
    """Positivity of the foreign keys plus existence of what they point at."""
    result = ValidationResult()
    employee_ok = check_positive(result, "service_number", data.service_number, SERVICE_NUMBER_POSITIVE)
    event_ok = check_positive(result, "event_id", data.event_id, EVENT_ID_POSITIVE)
    if employee_ok and not await gateway.employees.exists(data.service_number):
        result.add("service_number", "Employee not found")
    if event_ok and not await gateway.events.exists(data.event_id):
        result.add("event_id", "Event not found")
    return result


async def validate_new_ticket(gateway: Gateway, data: TicketIn) -> ValidationResult:
    result = ValidationResult()
    key_ok = check_positive(result, "ticket_number", data.ticket_number, TICKET_NUMBER_POSITIVE)
    if data.sale_date > date.today():
        result.add("sale_date", "Sale date cannot be in the future")
    if key_ok and await gateway.tickets.exists(data.ticket_number):
        result.add("ticket_number", "A ticket with this number already exists")
    return result.merge(await validate_references(gateway, data))


async def validate_ticket_edit(gateway: Gateway, data: TicketIn) -> ValidationResult:
    result = ValidationResult()
    check_positive(result, "ticket_number", data.ticket_number, TICKET_NUMBER_POSITIVE)
    return result.merge(await validate_references(gateway, data))


async def list_tickets(db: AsyncSession) -> list[Ticket]:
    """Return all tickets with their employee and event loaded."""
    return await Gateway(db).tickets.all()


async def get_ticket(db: AsyncSession, ticket_number: int | None) -> Ticket:
    """Get a single ticket by number."""
    key = require_ticket_number(ticket_number)
    ticket = await Gateway(db).tickets.get(key)
    if ticket is None:
        record_entity_operation(ENTITY, "get", "not_found")
        raise NotFoundError(ENTITY, key)
    return ticket


async def create_ticket(db: AsyncSession, data: TicketIn) -> Ticket:
    """Validate and persist a new ticket in a single transaction."""
    data = _with_default_date(data)
    gateway = Gateway(db)
    _reject(await validate_new_ticket(gateway, data), "create", data)

    ticket = gateway.tickets.add(Ticket(ticket_number=data.ticket_number, **_field_values(data)))
    try:
        await gateway.commit()
    except IntegrityError:
        # Duplicate key or a referenced row deleted since validation
        await gateway.rollback()
        record_entity_operation(ENTITY, "create", "conflict")
        logger.error("ticket_create_conflict", ticket_number=data.ticket_number)
        raise ConcurrencyConflictError(ENTITY, data.ticket_number)

    await gateway.refresh(ticket)
    record_entity_operation(ENTITY, "create")
    logger.info(
        "ticket_created",
        ticket_number=ticket.ticket_number,
        service_number=ticket.service_number,
        event_id=ticket.event_id,
    )
    return ticket


async def update_ticket(db: AsyncSession, ticket_number: int, data: TicketIn) -> Ticket:
    """
    Replace a ticket's fields in place.
    The ticket number is immutable, so uniqueness is not re-checked; the
    referenced employee and event must still exist.
    """
    if ticket_number != data.ticket_number:
        record_entity_operation(ENTITY, "update", "not_found")
        raise NotFoundError(ENTITY, ticket_number)

    data = _with_default_date(data)
    gateway = Gateway(db)
    _reject(await validate_ticket_edit(gateway, data), "update", data)

    ticket = await gateway.tickets.get(ticket_number)
    if ticket is None:
        record_entity_operation(ENTITY, "update", "not_found")
        raise NotFoundError(ENTITY, ticket_number)

    gateway.tickets.update(ticket, _field_values(data))
    try:
        await gateway.commit()
    except (StaleDataError, IntegrityError):
        await gateway.rollback()
        if not await gateway.tickets.exists(ticket_number):
            record_entity_operation(ENTITY, "update", "not_found")
            raise NotFoundError(ENTITY, ticket_number)
        record_entity_operation(ENTITY, "update", "conflict")
        logger.error("ticket_update_conflict", ticket_number=ticket_number)
        raise ConcurrencyConflictError(ENTITY, ticket_number)

    await gateway.refresh(ticket)
    record_entity_operation(ENTITY, "update")
    logger.info("ticket_updated", ticket_number=ticket_number)
    return ticket


async def delete_ticket(db: AsyncSession, ticket_number: int) -> None:
    """Delete a ticket. Deleting an absent ticket is a no-op."""
    ticket_number = require_ticket_number(ticket_number)
    gateway = Gateway(db)
    ticket = await gateway.tickets.get(ticket_number)
    if ticket is None:
        return

    await gateway.tickets.remove(ticket)
    try:
        await gateway.commit()
    except StaleDataError:
        await gateway.rollback()
        if await gateway.tickets.exists(ticket_number):
            record_entity_operation(ENTITY, "delete", "conflict")
            raise ConcurrencyConflictError(ENTITY, ticket_number)
        return

    record_entity_operation(ENTITY, "delete")
    logger.info("ticket_deleted", ticket_number=ticket_number)


async def ticket_options(db: AsyncSession) -> TicketOptions:
    """Choices a client needs to fill in a ticket form."""
    gateway = Gateway(db)
    employees = await gateway.employees.all()
    events = await gateway.events.all()
    return TicketOptions(
        ticket_types=list(TICKET_TYPES),
        payment_methods=list(PAYMENT_METHODS),
        employees=[Choice(value=e.service_number, label=e.full_name) for e in employees],
        events=[Choice(value=e.id, label=e.name) for e in events],
    )
