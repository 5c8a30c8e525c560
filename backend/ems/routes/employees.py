"""
EMS Backend — Employee Route Handlers
======================================

What:  Handles the /employees resource: CRUD, role assignment, search, details.
How:   Each handler extracts path/query/body input, makes one service call,
       and returns the service result. Status codes for failures come from
       the global exception handlers in main.py.

Route order:
    /employees/search is declared before /employees/{employee_id} so that
    "search" is never parsed as an employee id.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ems.database import get_db_session
from ems.exceptions import NotFoundError
from ems.schemas.common import ErrorResponse, MessageResponse
from ems.schemas.employee import (
    EmployeeCreate,
    EmployeeDetailsResponse,
    EmployeeResponse,
    EmployeeUpdate,
    RoleAssignment,
)
from ems.services.employee_service import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["Employees"])

NOT_FOUND = {404: {"description": "Employee not found", "model": ErrorResponse}}
SERVER_ERROR = {500: {"description": "Store error", "model": ErrorResponse}}


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing required fields", "model": ErrorResponse},
        **SERVER_ERROR,
    },
    summary="Create a new employee",
)
async def create_employee(
    payload: EmployeeCreate,
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeResponse:
    """
    Create an employee from name, role and status (all required, non-empty).

    The id is assigned by the store and is never reused, even after deletes.
    """
    return await employee_service.create_employee(db, payload)


@router.get(
    "/search",
    response_model=List[EmployeeResponse],
    responses={
        404: {"description": "No employee name matches", "model": ErrorResponse},
        **SERVER_ERROR,
    },
    summary="Search employees by name",
)
async def search_employees(
    name: str = Query(
        default="",
        description="Case-sensitive substring of the employee name. Empty matches everyone.",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[EmployeeResponse]:
    """
    Case-sensitive substring search on employee names.

    An empty result is answered with 404 at this layer; the service itself
    returns an empty list.
    """
    logger.info("Search query: %r", name)
    employees = await employee_service.search_by_name(db, name)
    if not employees:
        raise NotFoundError(resource="employee", context={"query": name})
    return employees


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Retrieve employee by ID",
)
async def get_employee(
    employee_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeResponse:
    return await employee_service.get_employee(db, employee_id)


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Update employee by ID",
    description=(
        "Full replace of name, role and status. Omitted fields, or all of them "
        "when the body is absent, are written as null."
    ),
)
async def update_employee(
    employee_id: int,
    payload: Optional[EmployeeUpdate] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeResponse:
    return await employee_service.update_employee(db, employee_id, payload or EmployeeUpdate())


@router.delete(
    "/{employee_id}",
    response_model=MessageResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Delete employee by ID",
)
async def delete_employee(
    employee_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await employee_service.delete_employee(db, employee_id)


@router.post(
    "/{employee_id}/assign-role",
    response_model=MessageResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Assign a role to an employee",
    description="Sets only the role field. The role is not checked against the roles table.",
)
async def assign_role(
    employee_id: int,
    payload: Optional[RoleAssignment] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    role = payload.role if payload else None
    return await employee_service.assign_role(db, employee_id, role)


@router.get(
    "/{employee_id}/details",
    response_model=EmployeeDetailsResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Retrieve detailed employee information by ID",
    description=(
        "Employee record joined with the roles table. roleName is null when the "
        "employee's role does not exist as a role record."
    ),
)
async def get_employee_details(
    employee_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeDetailsResponse:
    return await employee_service.get_details(db, employee_id)
