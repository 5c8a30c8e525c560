"""
EMS Backend — Role Service
===========================

What:  Create, delete and count role records.
Who:   Called by the admin router.

Roles are independent of employees. Deleting a role never touches the
employees table, so an employee can keep naming a role that no longer exists.
A duplicate role name is a primary-key collision in the store and surfaces
as DatabaseError (HTTP 500), not as a validation failure.
"""

import logging

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ems.exceptions import DatabaseError, NotFoundError, ValidationError
from ems.models.role import Role
from ems.schemas.common import MessageResponse
from ems.schemas.role import RoleCreate, RoleResponse

logger = logging.getLogger(__name__)


class RoleService:
    """Service for role records."""

    async def create_role(self, db: AsyncSession, payload: RoleCreate) -> RoleResponse:
        """
        Insert a role.

        Raises:
            ValidationError: name missing or empty (→ 400)
            DatabaseError: insert failed, including a duplicate name (→ 500)
        """
        if not payload.name:
            raise ValidationError(message="Missing role name.", field="name")

        try:
            await db.execute(insert(Role).values(name=payload.name))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error creating role '%s': %s", payload.name, str(e))
            raise DatabaseError(
                message="Failed to create role.",
                context={"role": payload.name, "error_type": type(e).__name__},
            )

        logger.info("Role '%s' created", payload.name)
        return RoleResponse(name=payload.name)

    async def delete_role(self, db: AsyncSession, name: str) -> MessageResponse:
        """
        Remove a role by name. Employees naming it are left as they are.

        Raises:
            NotFoundError: zero rows affected (→ 404)
            DatabaseError: the delete failed (→ 500)
        """
        try:
            result = await db.execute(delete(Role).where(Role.name == name))
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting role '%s': %s", name, str(e))
            raise DatabaseError(message="Failed to delete role.", context={"role": name})

        if result.rowcount == 0:
            raise NotFoundError(resource="role", resource_id=name)

        logger.info("Role '%s' deleted", name)
        return MessageResponse(message="Role deleted successfully.")

    async def count_roles(self, db: AsyncSession) -> int:
        """Total number of role rows."""
        try:
            result = await db.execute(select(func.count()).select_from(Role))
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error("Database error counting roles: %s", str(e))
            raise DatabaseError(message="Failed to retrieve total roles.")


role_service = RoleService()
