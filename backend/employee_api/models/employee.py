"""
Employee API: Employee SQLAlchemy Model
=========================================

What:  ORM model representing the `employees` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Used by EmployeeService for CRUD operations.

Table Design:
    - UUID primary key, generated in Python so it is known right after flush
    - salary carries a CHECK (salary >= 0) as a last line behind validation
    - created_at / updated_at are maintained by the ORM (insert / update)
    - Index on created_at DESC serves the "newest first" listing
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Float, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from employee_api.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Employee(Base):
    """
    One employee's stored attributes.

    Lifecycle:
        1. Created by POST with validated, trimmed fields
        2. Partially updated by PUT (only supplied fields change)
        3. Hard-deleted by DELETE
    """

    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)
    position: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)

    salary: Mapped[float] = mapped_column(Float, nullable=False)

    date_of_joining: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_employees_salary_non_negative"),
        Index("idx_employees_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, name='{self.name}', position='{self.position}')>"
