"""
EMS Backend — Role SQLAlchemy Model
====================================

What:  ORM model representing the `roles` table.

The role name is the primary key, so creating the same name twice is a
primary-key collision raised by the engine (IntegrityError).
Roles are created and deleted independently of employees.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from ems.database import Base


class Role(Base):
    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(Text, primary_key=True)

    def __repr__(self) -> str:
        return f"<Role(name='{self.name}')>"
