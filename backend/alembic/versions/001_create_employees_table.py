"""Create employees table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

Creates the `employees` table backing employee_api.models.employee.Employee.
Rollback: downgrade() drops the table (all employee records are lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("position", sa.Text(), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("salary", sa.Float(), nullable=False),
        sa.Column(
            "date_of_joining",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.CheckConstraint("salary >= 0", name="ck_employees_salary_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_employees_created_at", "employees", [sa.text("created_at DESC")])


def downgrade() -> None:
    op.drop_index("idx_employees_created_at", table_name="employees")
    op.drop_table("employees")
