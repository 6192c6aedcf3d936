"""Employee record endpoints."""

from fastapi import APIRouter, HTTPException, status

from employee_editor.api.dependencies import Gateway
from employee_editor.api.schemas import (
    EmployeeCreate,
    EmployeeCreated,
    EmployeeListResponse,
    EmployeeResponse,
    ErrorResponse,
)
from employee_editor.errors import ValidationError
from employee_editor.form.validation import validate_draft

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get(
    "",
    response_model=EmployeeListResponse,
    responses={502: {"model": ErrorResponse}},
)
async def list_employees(gateway: Gateway) -> EmployeeListResponse:
    """List every employee in store order."""
    employees = await gateway.list_employees()
    return EmployeeListResponse(
        items=[EmployeeResponse.from_employee(e) for e in employees],
        total=len(employees),
    )


@router.post(
    "",
    response_model=EmployeeCreated,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def create_employee(gateway: Gateway, payload: EmployeeCreate) -> EmployeeCreated:
    """Add an employee; the store assigns the identifier."""
    draft = payload.to_draft()
    try:
        validate_draft(draft)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.message,
        )
    employee_id = await gateway.create_employee(draft.with_id(""))
    return EmployeeCreated(id=employee_id)
