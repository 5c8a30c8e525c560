"""
EMS Backend — Role and Admin Schemas
=====================================

What:  Pydantic models for role management and the admin counters.
Why:   The admin endpoints answer with camelCase keys (totalEmployees,
       totalRoles); aliases keep the Python side snake_case.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RoleCreate(BaseModel):
    """Body of POST /admin/create-role."""
    name: Optional[str] = Field(default=None, description="Role name (primary key)")


class RoleResponse(BaseModel):
    """Returned by POST /admin/create-role with HTTP 201."""
    name: str = Field(description="Role name")

    model_config = ConfigDict(from_attributes=True)


class TotalEmployeesResponse(BaseModel):
    total_employees: int = Field(alias="totalEmployees", description="Number of employee rows")

    model_config = ConfigDict(populate_by_name=True)


class TotalRolesResponse(BaseModel):
    total_roles: int = Field(alias="totalRoles", description="Number of role rows")

    model_config = ConfigDict(populate_by_name=True)
