"""
Event endpoints.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.params import KeyPath
from eventdesk.db.session import get_db
from eventdesk.schemas.event import EventIn, EventOptions, EventResponse
from eventdesk.schemas.ticket import TicketResponse
from eventdesk.services import event_service

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("/", response_model=list[EventResponse])
async def list_events_endpoint(db: AsyncSession = Depends(get_db)):
    """List all events."""
    return await event_service.list_events(db)


@router.get("/options", response_model=EventOptions)
async def event_options_endpoint():
    """Suggested event types for input forms."""
    return EventOptions(event_types=event_service.event_types())


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(event_data: EventIn, db: AsyncSession = Depends(get_db)):
    """
    Create an event. The date defaults to today and may not be in the past.
    """
    return await event_service.create_event(db, event_data)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(event_id: KeyPath, db: AsyncSession = Depends(get_db)):
    return await event_service.get_event(db, event_id)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event_endpoint(
    event_id: KeyPath,
    event_data: EventIn,
    db: AsyncSession = Depends(get_db),
):
    return await event_service.update_event(db, event_id, event_data)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event_endpoint(event_id: KeyPath, db: AsyncSession = Depends(get_db)):
    """Delete an event. Returns 409 while any ticket references it."""
    await event_service.delete_event(db, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{event_id}/tickets", response_model=list[TicketResponse])
async def list_event_tickets_endpoint(event_id: KeyPath, db: AsyncSession = Depends(get_db)):
    return await event_service.list_event_tickets(db, event_id)
