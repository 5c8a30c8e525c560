"""
EMS Backend — Employee Service
===============================

What:  Business logic for the employee record operations.
Why:   Keeps HTTP concerns in the routers; this layer decides what counts as
       missing input, what counts as not-found, and what counts as failure.
How:   Each method issues exactly one statement through the given session
       and translates the outcome:
         - absent row / zero rows affected  → NotFoundError
         - missing required input          → ValidationError
         - SQLAlchemyError from the engine  → DatabaseError (fixed message)
Who:   Called by the employee and admin routers.

Search semantics:
    Name search is a case-sensitive substring match (SQLite instr()), not
    LIKE, which would be case-insensitive for ASCII. An empty query matches
    every employee. No match is an empty list here; the router decides
    whether an empty list is a 404.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ems.exceptions import DatabaseError, NotFoundError, ValidationError
from ems.models.employee import Employee
from ems.models.role import Role
from ems.schemas.common import MessageResponse
from ems.schemas.employee import (
    EmployeeCreate,
    EmployeeDetailsResponse,
    EmployeeResponse,
    EmployeeUpdate,
)

logger = logging.getLogger(__name__)

REQUIRED_EMPLOYEE_FIELDS = ("name", "role", "status")


def _missing_fields(payload, fields: Iterable[str]) -> List[str]:
    """Names of the fields that are absent or empty on the payload."""
    return [field for field in fields if not getattr(payload, field, None)]


class EmployeeService:
    """
    Business logic layer for employee operations.

    Stateless: every method receives the request's session, so one instance
    is shared by all requests.
    """

    async def create_employee(
        self, db: AsyncSession, payload: EmployeeCreate
    ) -> EmployeeResponse:
        """
        Insert a new employee and return it with its store-assigned id.

        The id comes from SQLite AUTOINCREMENT: strictly greater than any id
        issued before, even ids of deleted rows.

        Raises:
            ValidationError: name, role or status missing or empty (→ 400)
            DatabaseError: the insert failed (→ 500)
        """
        missing = _missing_fields(payload, REQUIRED_EMPLOYEE_FIELDS)
        if missing:
            raise ValidationError(
                message="Missing required fields.",
                context={"fields": missing},
            )

        employee = Employee(name=payload.name, role=payload.role, status=payload.status)
        try:
            db.add(employee)
            await db.flush()  # Assigns the id
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error creating employee: %s", str(e))
            raise DatabaseError(
                message="Failed to create employee.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Employee %s created", employee.id)
        return EmployeeResponse.model_validate(employee)

    async def get_employee(self, db: AsyncSession, employee_id: int) -> EmployeeResponse:
        """
        Retrieve a single employee by id.

        Raises:
            NotFoundError: no row with this id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Employee)
                .where(Employee.id == employee_id)
                .execution_options(populate_existing=True)
            )
            employee = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message="Failed to retrieve employee.",
                context={"employee_id": employee_id},
            )

        if employee is None:
            raise NotFoundError(resource="employee", resource_id=str(employee_id))

        return EmployeeResponse.model_validate(employee)

    async def update_employee(
        self, db: AsyncSession, employee_id: int, payload: EmployeeUpdate
    ) -> EmployeeResponse:
        """
        Full replace of name, role and status.

        Every field is written; a field the caller left out becomes null.
        There is no partial-update variant.

        Raises:
            NotFoundError: zero rows affected (→ 404)
            DatabaseError: the update failed (→ 500)
        """
        rowcount = await self._update_fields(
            db,
            employee_id,
            {"name": payload.name, "role": payload.role, "status": payload.status},
            failure_message="Failed to update employee.",
        )
        if rowcount == 0:
            raise NotFoundError(resource="employee", resource_id=str(employee_id))

        logger.info("Employee %s updated", employee_id)
        return EmployeeResponse(
            id=employee_id,
            name=payload.name,
            role=payload.role,
            status=payload.status,
        )

    async def delete_employee(self, db: AsyncSession, employee_id: int) -> MessageResponse:
        """
        Remove an employee row.

        Raises:
            NotFoundError: zero rows affected (→ 404)
            DatabaseError: the delete failed (→ 500)
        """
        try:
            result = await db.execute(
                delete(Employee).where(Employee.id == employee_id)
            )
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message="Failed to delete employee.",
                context={"employee_id": employee_id},
            )

        if result.rowcount == 0:
            raise NotFoundError(resource="employee", resource_id=str(employee_id))

        logger.info("Employee %s deleted", employee_id)
        return MessageResponse(message="Employee deleted successfully.")

    async def assign_role(
        self, db: AsyncSession, employee_id: int, role: Optional[str]
    ) -> MessageResponse:
        """
        Set only the role of the given employee.

        The role is free text: it is not checked against the roles table.
        """
        rowcount = await self._update_fields(
            db,
            employee_id,
            {"role": role},
            failure_message="Failed to assign role.",
        )
        if rowcount == 0:
            raise NotFoundError(resource="employee", resource_id=str(employee_id))

        logger.info("Role '%s' assigned to employee %s", role, employee_id)
        return MessageResponse(message="Role assigned successfully.")

    async def update_status(
        self, db: AsyncSession, employee_id: int, status: Optional[str]
    ) -> MessageResponse:
        """Set only the status of the given employee."""
        rowcount = await self._update_fields(
            db,
            employee_id,
            {"status": status},
            failure_message="Failed to update employee status.",
        )
        if rowcount == 0:
            raise NotFoundError(resource="employee", resource_id=str(employee_id))

        logger.info("Employee %s status set to '%s'", employee_id, status)
        return MessageResponse(message="Employee status updated successfully.")

    async def search_by_name(self, db: AsyncSession, query: str) -> List[EmployeeResponse]:
        """
        Employees whose name contains `query` (case-sensitive), ordered by id.

        Returns an empty list when nothing matches. The empty query returns
        every employee, including ones whose name was nulled by an update.
        """
        statement = (
            select(Employee)
            .order_by(Employee.id)
            .execution_options(populate_existing=True)
        )
        if query:
            statement = statement.where(func.instr(Employee.name, query) > 0)

        try:
            result = await db.execute(statement)
            employees = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error searching employees for %r: %s", query, str(e))
            raise DatabaseError(
                message="Failed to search employees.",
                context={"query": query},
            )

        logger.debug("Search %r matched %d employees", query, len(employees))
        return [EmployeeResponse.model_validate(employee) for employee in employees]

    async def get_details(self, db: AsyncSession, employee_id: int) -> EmployeeDetailsResponse:
        """
        Employee joined with roles on name (LEFT OUTER JOIN).

        roleName is null when the employee's role names no existing role.
        Only a missing employee is a NotFoundError.
        """
        statement = (
            select(Employee, Role.name.label("role_name"))
            .outerjoin(Role, Employee.role == Role.name)
            .where(Employee.id == employee_id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await db.execute(statement)
            row = result.first()
        except SQLAlchemyError as e:
            logger.error("Database error fetching details for employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message="Failed to retrieve employee details.",
                context={"employee_id": employee_id},
            )

        if row is None:
            raise NotFoundError(resource="employee", resource_id=str(employee_id))

        employee, role_name = row
        return EmployeeDetailsResponse(
            id=employee.id,
            name=employee.name,
            role=employee.role,
            status=employee.status,
            role_name=role_name,
        )

    async def _update_fields(
        self,
        db: AsyncSession,
        employee_id: int,
        values: dict,
        failure_message: str,
    ) -> int:
        """Run one UPDATE ... WHERE id = :id and return the affected row count."""
        try:
            result = await db.execute(
                update(Employee)
                .where(Employee.id == employee_id)
                .values(**values)
            )
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message=failure_message,
                context={"employee_id": employee_id, "fields": sorted(values)},
            )
        return result.rowcount


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; the session is passed into every call
employee_service = EmployeeService()
