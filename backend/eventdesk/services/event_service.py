"""
Event service handling validation and CRUD operations.

Rules on top of the employee-style key handling:
- A new event's date is a calendar date (time of day dropped) defaulting to
  today, and may not lie in the past. Edits do not re-check the date, so an
  event that has already happened can still be corrected.
- Event types are offered to clients as suggestions; only the length limit
  is enforced.
- An event cannot be deleted while tickets reference it.
"""

from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from eventdesk.core.errors import (
    ConcurrencyConflictError,
    DependencyConflictError,
    MalformedInputError,
    NotFoundError,
)
from eventdesk.core.logging import get_logger
from eventdesk.core.metrics import record_entity_operation, record_validation_errors
from eventdesk.core.validation import ValidationResult, check_positive
from eventdesk.db.gateway import Gateway
from eventdesk.models.event import Event
from eventdesk.models.ticket import Ticket
from eventdesk.schemas.event import EventIn

logger = get_logger(__name__)

ENTITY = "event"
EVENT_ID_POSITIVE = "Event ID must be a positive number"

EVENT_TYPES = (
    "Conference",
    "Seminar",
    "Training",
    "Webinar",
    "Exhibition",
    "Forum",
    "Presentation",
    "Round table",
    "Workshop",
    "Festival",
    "Lecture",
)


def event_types() -> list[str]:
    return list(EVENT_TYPES)


def require_event_id(event_id: int | None) -> int:
    """Reject a missing or non-positive key before touching storage."""
    if event_id is None or event_id <= 0:
        record_entity_operation(ENTITY, "lookup", "invalid")
        raise MalformedInputError(ENTITY, EVENT_ID_POSITIVE)
    return event_id


def _with_default_date(data: EventIn) -> EventIn:
    if data.event_date is None:
        return data.model_copy(update={"event_date": date.today()})
    return data


def _field_values(data: EventIn) -> dict:
    return data.model_dump(exclude={"id"})


def _reject(result: ValidationResult, operation: str, data: EventIn) -> None:
    if not result.is_valid:
        record_entity_operation(ENTITY, operation, "invalid")
        record_validation_errors(ENTITY, result.errors)
        logger.warning(
            "event_validation_failed",
            operation=operation,
            event_id=data.id,
            errors=result.as_dict(),
        )
    result.raise_if_invalid(ENTITY, data)


async def list_events(db: AsyncSession) -> list[Event]:
    """Return all events, soonest first. Uses the ix_events_event_date index."""
    return await Gateway(db).events.filter(order_by=(Event.event_date, Event.id))


async def get_event(db: AsyncSession, event_id: int | None) -> Event:
    """Get a single event by ID."""
    key = require_event_id(event_id)
    event = await Gateway(db).events.get(key)
    if event is None:
        record_entity_operation(ENTITY, "get", "not_found")
        raise NotFoundError(ENTITY, key)
    return event


async def validate_new_event(gateway: Gateway, data: EventIn) -> ValidationResult:
    result = ValidationResult()
    key_ok = check_positive(result, "id", data.id, EVENT_ID_POSITIVE)
    if data.event_date < date.today():
        result.add("event_date", "Event date cannot be in the past")
    if key_ok and await gateway.events.exists(data.id):
        result.add("id", "An event with this ID already exists")
    return result


async def create_event(db: AsyncSession, data: EventIn) -> Event:
    """Validate and persist a new event in a single transaction."""
    data = _with_default_date(data)
    gateway = Gateway(db)
    _reject(await validate_new_event(gateway, data), "create", data)

    event = gateway.events.add(Event(id=data.id, **_field_values(data)))
    try:
        await gateway.commit()
    except IntegrityError:
        await gateway.rollback()
        record_entity_operation(ENTITY, "create", "conflict")
        logger.error("event_create_conflict", event_id=data.id)
        raise ConcurrencyConflictError(ENTITY, data.id)

    record_entity_operation(ENTITY, "create")
    logger.info("event_created", event_id=event.id, name=event.name, date=str(event.event_date))
    return event


async def update_event(db: AsyncSession, event_id: int, data: EventIn) -> Event:
    """
    Replace an event's fields in place.
    The route key must equal the body key. The past-date rule is not applied.
    """
    if event_id != data.id:
        record_entity_operation(ENTITY, "update", "not_found")
        raise NotFoundError(ENTITY, event_id)

    data = _with_default_date(data)
    result = ValidationResult()
    check_positive(result, "id", data.id, EVENT_ID_POSITIVE)
    _reject(result, "update", data)

    gateway = Gateway(db)
    event = await gateway.events.get(event_id)
    if event is None:
        record_entity_operation(ENTITY, "update", "not_found")
        raise NotFoundError(ENTITY, event_id)

    gateway.events.update(event, _field_values(data))
    try:
        await gateway.commit()
    except StaleDataError:
        await gateway.rollback()
        if not await gateway.events.exists(event_id):
            record_entity_operation(ENTITY, "update", "not_found")
            raise NotFoundError(ENTITY, event_id)
        record_entity_operation(ENTITY, "update", "conflict")
        logger.error("event_update_conflict", event_id=event_id)
        raise ConcurrencyConflictError(ENTITY, event_id)

    record_entity_operation(ENTITY, "update")
    logger.info("event_updated", event_id=event_id)
    return event


async def delete_event(db: AsyncSession, event_id: int) -> None:
    """
    Delete an event unless tickets still reference it.
    Deleting an absent event is a no-op.
    """
    event_id = require_event_id(event_id)
    gateway = Gateway(db)
    event = await gateway.events.get(event_id)
    if event is None:
        return

    if await gateway.event_has_tickets(event_id):
        record_entity_operation(ENTITY, "delete", "blocked")
        logger.warning("event_delete_blocked", event_id=event_id)
        raise DependencyConflictError(
            ENTITY,
            event_id,
            ValidationResult().add("tickets", "Cannot delete an event that has tickets"),
        )

    await gateway.events.remove(event)
    try:
        await gateway.commit()
    except StaleDataError:
        await gateway.rollback()
        if await gateway.events.exists(event_id):
            record_entity_operation(ENTITY, "delete", "conflict")
            raise ConcurrencyConflictError(ENTITY, event_id)
        return

    record_entity_operation(ENTITY, "delete")
    logger.info("event_deleted", event_id=event_id)


async def list_event_tickets(db: AsyncSession, event_id: int | None) -> list[Ticket]:
    """Tickets issued for one event, ordered by ticket number."""
    event = await get_event(db, event_id)
    return await Gateway(db).tickets_by_event(event.id)
