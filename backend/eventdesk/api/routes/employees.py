"""
Employee endpoints.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.params import KeyPath
from eventdesk.db.session import get_db
from eventdesk.schemas.employee import EmployeeIn, EmployeeResponse
from eventdesk.schemas.ticket import TicketResponse
from eventdesk.services import employee_service

router = APIRouter(prefix="/employees", tags=["Employees"])


@router.get("/", response_model=list[EmployeeResponse])
async def list_employees_endpoint(db: AsyncSession = Depends(get_db)):
    """List all employees."""
    return await employee_service.list_employees(db)


@router.post("/", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee_endpoint(employee_data: EmployeeIn, db: AsyncSession = Depends(get_db)):
    """Create an employee. The service number is chosen by the caller."""
    return await employee_service.create_employee(db, employee_data)


@router.get("/{service_number}", response_model=EmployeeResponse)
async def get_employee_endpoint(service_number: KeyPath, db: AsyncSession = Depends(get_db)):
    return await employee_service.get_employee(db, service_number)


@router.put("/{service_number}", response_model=EmployeeResponse)
async def update_employee_endpoint(
    service_number: KeyPath,
    employee_data: EmployeeIn,
    db: AsyncSession = Depends(get_db),
):
    """Replace an employee. The body's service number must match the path."""
    return await employee_service.update_employee(db, service_number, employee_data)


@router.delete("/{service_number}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee_endpoint(service_number: KeyPath, db: AsyncSession = Depends(get_db)):
    """Delete an employee. Returns 409 while any ticket references them."""
    await employee_service.delete_employee(db, service_number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{service_number}/tickets", response_model=list[TicketResponse])
async def list_employee_tickets_endpoint(service_number: KeyPath, db: AsyncSession = Depends(get_db)):
    """Tickets sold by this employee."""
    return await employee_service.list_employee_tickets(db, service_number)
