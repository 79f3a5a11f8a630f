"""
Ticket endpoints.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.params import KeyPath
from eventdesk.db.session import get_db
from eventdesk.schemas.ticket import TicketIn, TicketOptions, TicketResponse
from eventdesk.services import ticket_service

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.get("/", response_model=list[TicketResponse])
async def list_tickets_endpoint(db: AsyncSession = Depends(get_db)):
    """List all tickets with seller name and event name."""
    return await ticket_service.list_tickets(db)


@router.get("/options", response_model=TicketOptions)
async def ticket_options_endpoint(db: AsyncSession = Depends(get_db)):
    """Ticket types, payment methods, employees and events for input forms."""
    return await ticket_service.ticket_options(db)


@router.post("/", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def create_ticket_endpoint(ticket_data: TicketIn, db: AsyncSession = Depends(get_db)):
    """
    Sell a ticket. All field errors are reported together in one 422 response.
    """
    return await ticket_service.create_ticket(db, ticket_data)


@router.get("/{ticket_number}", response_model=TicketResponse)
async def get_ticket_endpoint(ticket_number: KeyPath, db: AsyncSession = Depends(get_db)):
    return await ticket_service.get_ticket(db, ticket_number)


@router.put("/{ticket_number}", response_model=TicketResponse)
async def update_ticket_endpoint(
    ticket_number: KeyPath,
    ticket_data: TicketIn,
    db: AsyncSession = Depends(get_db),
):
    return await ticket_service.update_ticket(db, ticket_number, ticket_data)


@router.delete("/{ticket_number}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket_endpoint(ticket_number: KeyPath, db: AsyncSession = Depends(get_db)):
    await ticket_service.delete_ticket(db, ticket_number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
