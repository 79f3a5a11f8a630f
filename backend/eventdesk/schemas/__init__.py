from eventdesk.schemas.common import Choice
from eventdesk.schemas.employee import EmployeeIn, EmployeeResponse
from eventdesk.schemas.event import EventIn, EventResponse, EventOptions
from eventdesk.schemas.ticket import TicketIn, TicketResponse, TicketOptions

__all__ = [
    "Choice",
    "EmployeeIn", "EmployeeResponse",
    "EventIn", "EventResponse", "EventOptions",
    "TicketIn", "TicketResponse", "TicketOptions",
]
