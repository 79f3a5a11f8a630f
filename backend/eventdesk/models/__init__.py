from eventdesk.models.employee import Employee
from eventdesk.models.event import Event
from eventdesk.models.ticket import Ticket

__all__ = ["Employee", "Event", "Ticket"]
