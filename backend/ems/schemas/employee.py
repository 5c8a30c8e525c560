"""
EMS Backend — Employee Request/Response Schemas
================================================

What:  Pydantic models defining the employee API contract.
Why:   Input parsing, response serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the Swagger documentation served at /api-docs.

Design Decision:
    Request fields are Optional on purpose. A missing or empty field is a
    business-rule failure (HTTP 400 "Missing required fields.") checked by
    the service layer, not a schema failure. Update is a full replace, so an
    omitted field there is written as null.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class EmployeeCreate(BaseModel):
    """Body of POST /employees. All three fields are required by the service."""
    name: Optional[str] = Field(default=None, description="Employee name")
    role: Optional[str] = Field(default=None, description="Role name (free text)")
    status: Optional[str] = Field(default=None, description="Status (free text)")


class EmployeeUpdate(BaseModel):
    """
    Body of PUT /employees/{id}.

    Full replace: every field is written, omitted ones as null.
    """
    name: Optional[str] = Field(default=None, description="Employee name")
    role: Optional[str] = Field(default=None, description="Role name (free text)")
    status: Optional[str] = Field(default=None, description="Status (free text)")


class RoleAssignment(BaseModel):
    """Body of POST /employees/{id}/assign-role."""
    role: Optional[str] = Field(default=None, description="Role name to set on the employee")


class StatusUpdate(BaseModel):
    """Body of PUT /admin/update-status/{id}."""
    status: Optional[str] = Field(default=None, description="New status value")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class EmployeeResponse(BaseModel):
    """
    What:  One employee record.
    Who:   Returned by create, get, update and (as list items) search.
    """
    id: int = Field(description="Store-assigned employee id")
    name: Optional[str] = Field(default=None, description="Employee name")
    role: Optional[str] = Field(default=None, description="Role name (free text)")
    status: Optional[str] = Field(default=None, description="Status (free text)")

    model_config = ConfigDict(from_attributes=True)


class EmployeeDetailsResponse(EmployeeResponse):
    """
    What:  Employee record joined with the roles table.
    Who:   Returned by GET /employees/{id}/details.

    roleName is the matching roles.name, or null when the employee's role
    names no existing role (dangling reference). A null roleName is not an error.
    """
    role_name: Optional[str] = Field(
        default=None,
        alias="roleName",
        description="Matching role record name, null when the role does not exist",
    )

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
