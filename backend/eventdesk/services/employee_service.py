"""
Employee service: validation and CRUD for employees.

Employees are keyed by a caller-assigned service number. The key is immutable:
an update must target the same service number it carries in its body. An
employee cannot be deleted while any ticket references them.
"""

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
from eventdesk.models.employee import Employee
from eventdesk.models.ticket import Ticket
from eventdesk.schemas.employee import EmployeeIn

logger = get_logger(__name__)

ENTITY = "employee"
SERVICE_NUMBER_POSITIVE = "Service number must be a positive number"


def require_service_number(service_number: int | None) -> int:
    """Reject a missing or non-positive key before touching storage."""
    if service_number is None or service_number <= 0:
        record_entity_operation(ENTITY, "lookup", "invalid")
        raise MalformedInputError(ENTITY, SERVICE_NUMBER_POSITIVE)
    return service_number


def _field_values(data: EmployeeIn) -> dict:
    return data.model_dump(exclude={"service_number"})


def _reject(result: ValidationResult, operation: str, data: EmployeeIn) -> None:
    if not result.is_valid:
        record_entity_operation(ENTITY, operation, "invalid")
        record_validation_errors(ENTITY, result.errors)
        logger.warning(
            "employee_validation_failed",
            operation=operation,
            service_number=data.service_number,
            errors=result.as_dict(),
        )
    result.raise_if_invalid(ENTITY, data)


async def list_employees(db: AsyncSession) -> list[Employee]:
    """Return all employees in storage order."""
    return await Gateway(db).employees.all()


async def get_employee(db: AsyncSession, service_number: int | None) -> Employee:
    """Get a single employee by service number."""
    key = require_service_number(service_number)
    employee = await Gateway(db).employees.get(key)
    if employee is None:
        record_entity_operation(ENTITY, "get", "not_found")
        raise NotFoundError(ENTITY, key)
    return employee


async def validate_new_employee(gateway: Gateway, data: EmployeeIn) -> ValidationResult:
    result = ValidationResult()
    if check_positive(result, "service_number", data.service_number, SERVICE_NUMBER_POSITIVE):
        if await gateway.employees.exists(data.service_number):
            result.add("service_number", "An employee with this service number already exists")
    return result


async def create_employee(db: AsyncSession, data: EmployeeIn) -> Employee:
    """Validate and persist a new employee in a single transaction."""
    gateway = Gateway(db)
    _reject(await validate_new_employee(gateway, data), "create", data)

    employee = gateway.employees.add(
        Employee(service_number=data.service_number, **_field_values(data))
    )
    try:
        await gateway.commit()
    except IntegrityError:
        # Lost a race against a concurrent create with the same key
        await gateway.rollback()
        record_entity_operation(ENTITY, "create", "conflict")
        logger.error("employee_create_conflict", service_number=data.service_number)
        raise ConcurrencyConflictError(ENTITY, data.service_number)

    record_entity_operation(ENTITY, "create")
    logger.info(
        "employee_created",
        service_number=employee.service_number,
        full_name=employee.full_name,
    )
    return employee


async def update_employee(db: AsyncSession, service_number: int, data: EmployeeIn) -> Employee:
    """
    Replace an employee's fields in place.
    The route key must equal the body key; the key itself never changes.
    """
    if service_number != data.service_number:
        record_entity_operation(ENTITY, "update", "not_found")
        raise NotFoundError(ENTITY, service_number)

    result = ValidationResult()
    check_positive(result, "service_number", data.service_number, SERVICE_NUMBER_POSITIVE)
    _reject(result, "update", data)

    gateway = Gateway(db)
    employee = await gateway.employees.get(service_number)
    if employee is None:
        record_entity_operation(ENTITY, "update", "not_found")
        raise NotFoundError(ENTITY, service_number)

    gateway.employees.update(employee, _field_values(data))
    try:
        await gateway.commit()
    except StaleDataError:
        await gateway.rollback()
        if not await gateway.employees.exists(service_number):
            record_entity_operation(ENTITY, "update", "not_found")
            raise NotFoundError(ENTITY, service_number)
        record_entity_operation(ENTITY, "update", "conflict")
        logger.error("employee_update_conflict", service_number=service_number)
        raise ConcurrencyConflictError(ENTITY, service_number)

    record_entity_operation(ENTITY, "update")
    logger.info("employee_updated", service_number=service_number)
    return employee


async def delete_employee(db: AsyncSession, service_number: int) -> None:
    """
    Delete an employee unless tickets still reference them.
    Deleting an absent employee is a no-op.
    """
    service_number = require_service_number(service_number)
    gateway = Gateway(db)
    employee = await gateway.employees.get(service_number)
    if employee is None:
        return

    if await gateway.employee_has_tickets(service_number):
        record_entity_operation(ENTITY, "delete", "blocked")
        logger.warning("employee_delete_blocked", service_number=service_number)
        raise DependencyConflictError(
            ENTITY,
            service_number,
            ValidationResult().add("tickets", "Cannot delete an employee who has tickets"),
        )

    await gateway.employees.remove(employee)
    try:
        await gateway.commit()
    except StaleDataError:
        # Someone else removed or changed the row first
        await gateway.rollback()
        if await gateway.employees.exists(service_number):
            record_entity_operation(ENTITY, "delete", "conflict")
            raise ConcurrencyConflictError(ENTITY, service_number)
        return

    record_entity_operation(ENTITY, "delete")
    logger.info("employee_deleted", service_number=service_number)


async def list_employee_tickets(db: AsyncSession, service_number: int | None) -> list[Ticket]:
    """Tickets sold by one employee, ordered by ticket number."""
    employee = await get_employee(db, service_number)
    return await Gateway(db).tickets_by_employee(employee.service_number)
