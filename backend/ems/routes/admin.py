"""
EMS Backend — Admin Route Handlers
===================================

What:  Dashboard counters, role management and status updates under /admin.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ems.database import get_db_session
from ems.schemas.common import ErrorResponse, MessageResponse
from ems.schemas.employee import StatusUpdate
from ems.schemas.role import (
    RoleCreate,
    RoleResponse,
    TotalEmployeesResponse,
    TotalRolesResponse,
)
from ems.services.admin_service import admin_service
from ems.services.employee_service import employee_service
from ems.services.role_service import role_service

router = APIRouter(prefix="/admin", tags=["Admin"])

SERVER_ERROR = {500: {"description": "Store error", "model": ErrorResponse}}


@router.get(
    "/total-employees",
    response_model=TotalEmployeesResponse,
    responses=SERVER_ERROR,
    summary="Get total number of employees",
)
async def total_employees(db: AsyncSession = Depends(get_db_session)) -> TotalEmployeesResponse:
    return await admin_service.total_employees(db)


@router.get(
    "/total-roles",
    response_model=TotalRolesResponse,
    responses=SERVER_ERROR,
    summary="Get total number of roles",
)
async def total_roles(db: AsyncSession = Depends(get_db_session)) -> TotalRolesResponse:
    return await admin_service.total_roles(db)


@router.post(
    "/create-role",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing role name", "model": ErrorResponse},
        500: {"description": "Store error, including a duplicate role name", "model": ErrorResponse},
    },
    summary="Create a new role",
)
async def create_role(
    payload: RoleCreate,
    db: AsyncSession = Depends(get_db_session),
) -> RoleResponse:
    return await role_service.create_role(db, payload)


@router.delete(
    "/delete-role/{name}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Role not found", "model": ErrorResponse},
        **SERVER_ERROR,
    },
    summary="Delete a role by name",
    description="Employees whose role names the deleted role are left unchanged.",
)
async def delete_role(
    name: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await role_service.delete_role(db, name)


@router.put(
    "/update-status/{employee_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Employee not found", "model": ErrorResponse},
        **SERVER_ERROR,
    },
    summary="Update employee status by ID",
)
async def update_status(
    employee_id: int,
    payload: Optional[StatusUpdate] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    new_status = payload.status if payload else None
    return await employee_service.update_status(db, employee_id, new_status)
