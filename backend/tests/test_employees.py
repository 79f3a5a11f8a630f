"""
Tests for the employee service: keys, uniqueness, edits and dependency checks.
"""

import pytest
from sqlalchemy import text

from eventdesk.core.errors import (
    ConcurrencyConflictError,
    DependencyConflictError,
    MalformedInputError,
    NotFoundError,
    ValidationFailedError,
)
from eventdesk.models import Employee, Ticket
from eventdesk.services import employee_service
from factories import employee_data


@pytest.mark.asyncio
async def test_create_employee(db_session):
    """A valid employee is stored and exposes surname-first full name."""
    employee = await employee_service.create_employee(db_session, employee_data())
    assert employee.service_number == 1
    assert employee.full_name == "Lee Ann"
    assert await db_session.get(Employee, 1) is not None


@pytest.mark.asyncio
@pytest.mark.parametrize("service_number", [0, -3, None])
async def test_create_employee_non_positive_key(db_session, service_number):
    """Zero, negative or missing service numbers are field errors."""
    with pytest.raises(ValidationFailedError) as exc_info:
        await employee_service.create_employee(db_session, employee_data(service_number))

    assert "service_number" in exc_info.value.errors.as_dict()
    assert await employee_service.list_employees(db_session) == []


@pytest.mark.asyncio
async def test_create_employee_duplicate_key(db_session, test_employee):
    """A second employee with the same service number is rejected."""
    with pytest.raises(ValidationFailedError) as exc_info:
        await employee_service.create_employee(
            db_session, employee_data(1, name="Bob", surname="Stone")
        )

    assert exc_info.value.errors.as_dict() == {
        "service_number": ["An employee with this service number already exists"]
    }
    assert exc_info.value.candidate.name == "Bob"

    await db_session.refresh(test_employee)
    assert test_employee.name == "Ann"
    assert len(await employee_service.list_employees(db_session)) == 1


@pytest.mark.asyncio
async def test_get_employee(db_session, test_employee):
    employee = await employee_service.get_employee(db_session, 1)
    assert employee.surname == "Lee"


@pytest.mark.asyncio
@pytest.mark.parametrize("service_number", [None, 0, -1])
async def test_get_employee_malformed_key(db_session, service_number):
    with pytest.raises(MalformedInputError):
        await employee_service.get_employee(db_session, service_number)


@pytest.mark.asyncio
async def test_get_employee_not_found(db_session):
    with pytest.raises(NotFoundError):
        await employee_service.get_employee(db_session, 99)


@pytest.mark.asyncio
async def test_update_employee(db_session, test_employee):
    updated = await employee_service.update_employee(
        db_session, 1, employee_data(1, post="Manager", phone_number="555-0199")
    )
    assert updated.post == "Manager"

    await db_session.refresh(test_employee)
    assert test_employee.phone_number == "555-0199"


@pytest.mark.asyncio
async def test_update_employee_key_mismatch(db_session, test_employee):
    """Route key and body key must match; nothing is changed otherwise."""
    with pytest.raises(NotFoundError):
        await employee_service.update_employee(db_session, 1, employee_data(2, post="Manager"))

    await db_session.refresh(test_employee)
    assert test_employee.post == "Clerk"


@pytest.mark.asyncio
async def test_update_employee_non_positive_key(db_session):
    with pytest.raises(ValidationFailedError) as exc_info:
        await employee_service.update_employee(db_session, 0, employee_data(0))
    assert "service_number" in exc_info.value.errors.as_dict()


@pytest.mark.asyncio
async def test_update_missing_employee(db_session):
    with pytest.raises(NotFoundError):
        await employee_service.update_employee(db_session, 7, employee_data(7))


@pytest.mark.asyncio
async def test_update_employee_deleted_concurrently(db_session, test_employee):
    """The row vanished between load and save: reported as not found."""
    await db_session.execute(text("DELETE FROM employees WHERE service_number = 1"))
    await db_session.commit()

    with pytest.raises(NotFoundError):
        await employee_service.update_employee(db_session, 1, employee_data(1, post="Manager"))


@pytest.mark.asyncio
async def test_update_employee_modified_concurrently(db_session, test_employee):
    """The row changed between load and save: the conflict is not retried."""
    await db_session.execute(
        text("UPDATE employees SET post = 'Director', version = version + 1 WHERE service_number = 1")
    )
    await db_session.commit()

    with pytest.raises(ConcurrencyConflictError):
        await employee_service.update_employee(db_session, 1, employee_data(1, post="Manager"))

    employee = await employee_service.get_employee(db_session, 1)
    assert employee.post == "Director"


@pytest.mark.asyncio
async def test_delete_employee(db_session, test_employee):
    await employee_service.delete_employee(db_session, 1)
    assert await employee_service.list_employees(db_session) == []


@pytest.mark.asyncio
async def test_delete_missing_employee_is_noop(db_session):
    await employee_service.delete_employee(db_session, 42)


@pytest.mark.asyncio
async def test_delete_employee_with_tickets_blocked(db_session, test_ticket):
    """Employees who sold tickets cannot be deleted; nothing is removed."""
    with pytest.raises(DependencyConflictError) as exc_info:
        await employee_service.delete_employee(db_session, 1)

    assert "tickets" in exc_info.value.errors.as_dict()
    assert await db_session.get(Employee, 1) is not None
    assert await db_session.get(Ticket, 5) is not None


@pytest.mark.asyncio
async def test_list_employee_tickets(db_session, test_ticket):
    tickets = await employee_service.list_employee_tickets(db_session, 1)
    assert [t.ticket_number for t in tickets] == [5]


@pytest.mark.asyncio
async def test_create_employee_loses_race(db_session, stub_exists):
    """Another writer stores the same service number after the duplicate check."""
    stub_exists(Employee, False)
    await db_session.execute(
        text(
            "INSERT INTO employees (service_number, name, surname, post, phone_number, version) "
            "VALUES (1, 'Bob', 'Stone', 'Clerk', '555-0111', 1)"
        )
    )
    await db_session.commit()

    with pytest.raises(ConcurrencyConflictError):
        await employee_service.create_employee(db_session, employee_data())

    names = (await db_session.execute(text("SELECT name FROM employees"))).scalars().all()
    assert names == ["Bob"]


@pytest.mark.asyncio
async def test_delete_employee_already_deleted(db_session, test_employee):
    """Someone else removed the row first: nothing left to do."""
    await db_session.execute(text("DELETE FROM employees WHERE service_number = 1"))
    await db_session.commit()

    await employee_service.delete_employee(db_session, 1)


@pytest.mark.asyncio
async def test_delete_employee_modified_concurrently(db_session, test_employee):
    await db_session.execute(
        text("UPDATE employees SET version = version + 1 WHERE service_number = 1")
    )
    await db_session.commit()

    with pytest.raises(ConcurrencyConflictError):
        await employee_service.delete_employee(db_session, 1)

    count = (await db_session.execute(text("SELECT COUNT(*) FROM employees"))).scalar_one()
    assert count == 1
