"""
EMS Backend — Employee SQLAlchemy Model
========================================

What:  ORM model representing the `employees` table.
Why:   Maps Python objects to rows for type-safe database operations.
Who:   Used by EmployeeService and AdminService.

Table Design:
    - id: INTEGER PRIMARY KEY AUTOINCREMENT. The AUTOINCREMENT keyword makes
      SQLite track the highest id ever issued (sqlite_sequence), so ids are
      strictly increasing and never reused after a delete.
    - name / role / status: free text. Nullable because a full update that
      omits a field overwrites it with NULL.
    - role is a soft reference to roles.name: no FOREIGN KEY, no existence check.
"""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from ems.database import Base


class Employee(Base):
    """
    Represents one employee record.

    Lifecycle:
        1. Created by POST /employees (id assigned by the store)
        2. Mutated in place by update, assign-role and update-status
        3. Removed by DELETE /employees/{id}; its id is never handed out again
    """

    __tablename__ = "employees"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    role: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, name='{self.name}', role='{self.role}')>"
