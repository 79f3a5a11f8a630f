"""Valid request payloads; override any field per test."""

from datetime import date

from eventdesk.schemas import EmployeeIn, EventIn, TicketIn


def employee_data(service_number=1, **overrides) -> EmployeeIn:
    values = {
        "service_number": service_number,
        "name": "Ann",
        "surname": "Lee",
        "post": "Clerk",
        "phone_number": "555-0100",
    }
    values.update(overrides)
    return EmployeeIn(**values)


def event_data(event_id=10, **overrides) -> EventIn:
    values = {
        "id": event_id,
        "name": "Expo",
        "event_date": date.today(),
        "event_type": "Exhibition",
    }
    values.update(overrides)
    return EventIn(**values)


def ticket_data(ticket_number=5, **overrides) -> TicketIn:
    values = {
        "ticket_number": ticket_number,
        "service_number": 1,
        "event_id": 10,
        "sale_date": date.today(),
        "ticket_type": "Adult",
        "payment_method": "Card",
    }
    values.update(overrides)
    return TicketIn(**values)
