"""
EMS Backend — Admin Service
============================

What:  Aggregate counters for the admin dashboard endpoints.
How:   One COUNT(*) per call; role counting is delegated to RoleService.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ems.exceptions import DatabaseError
from ems.models.employee import Employee
from ems.schemas.role import TotalEmployeesResponse, TotalRolesResponse
from ems.services.role_service import role_service

logger = logging.getLogger(__name__)


class AdminService:

    async def total_employees(self, db: AsyncSession) -> TotalEmployeesResponse:
        """Total number of employee rows (→ {"totalEmployees": n})."""
        try:
            result = await db.execute(select(func.count()).select_from(Employee))
            total = result.scalar_one()
        except SQLAlchemyError as e:
            logger.error("Database error counting employees: %s", str(e))
            raise DatabaseError(message="Failed to retrieve total employees.")
        return TotalEmployeesResponse(total_employees=total)

    async def total_roles(self, db: AsyncSession) -> TotalRolesResponse:
        """Total number of role rows (→ {"totalRoles": n})."""
        total = await role_service.count_roles(db)
        return TotalRolesResponse(total_roles=total)


admin_service = AdminService()
