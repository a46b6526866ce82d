"""
Employee API: Employee Service (Business Logic)
=================================================

What:  CRUD operations on Employee records, independent of HTTP concerns.
How:   Receives an AsyncSession per call plus already-validated input
       (see services/validation.py) and returns EmployeeRead models.
Who:   Called by the route builder in routes/employees.py for both route
       families.

Error Handling Strategy:
    - Unknown id              → NotFoundError (404)
    - Malformed id            → InvalidIdentifierError (400), raised by
                                parse_employee_id before any query runs
    - SQLAlchemyError         → logged, wrapped in DatabaseError (500)

The service is stateless: each call gets its own session, and commit/rollback
belongs to the get_db_session dependency.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.exceptions import DatabaseError, NotFoundError
from employee_api.models.employee import Employee
from employee_api.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate

logger = logging.getLogger(__name__)


class EmployeeService:
    """
    Business logic layer for employee records.

    Responsibilities:
        - list_employees():  all records, newest first
        - get_employee():    single record with not-found handling
        - create_employee(): insert a validated record
        - update_employee(): partial update of the supplied fields only
        - delete_employee(): hard delete, returning the removed record
    """

    async def _fetch(self, db: AsyncSession, employee_id: UUID) -> Employee:
        result = await db.execute(select(Employee).where(Employee.id == employee_id))
        employee = result.scalar_one_or_none()
        if employee is None:
            raise NotFoundError(resource="Employee", resource_id=str(employee_id))
        return employee

    async def list_employees(self, db: AsyncSession) -> List[EmployeeRead]:
        """
        Return every employee ordered by created_at DESC.

        Query plan:
            SELECT * FROM employees ORDER BY created_at DESC
            → idx_employees_created_at
        """
        try:
            result = await db.execute(select(Employee).order_by(desc(Employee.created_at)))
            employees = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing employees: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve employees.",
                context={"original_error": str(e)},
            ) from e
        return [EmployeeRead.model_validate(employee) for employee in employees]

    async def get_employee(self, db: AsyncSession, employee_id: UUID) -> EmployeeRead:
        """
        Retrieve a single employee.

        Raises:
            NotFoundError: no employee with this id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            employee = await self._fetch(db, employee_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the employee.",
                context={"employee_id": str(employee_id), "original_error": str(e)},
            ) from e
        return EmployeeRead.model_validate(employee)

    async def create_employee(self, db: AsyncSession, data: EmployeeCreate) -> EmployeeRead:
        """
        Persist a new employee.

        `data` is already normalized. When date_of_joining was omitted the
        model default (creation time) applies.
        """
        values = data.model_dump(exclude_none=True)
        employee = Employee(**values)
        try:
            db.add(employee)
            await db.flush()
            await db.refresh(employee)
        except SQLAlchemyError as e:
            logger.error("Database error creating employee: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the employee.",
                context={"original_error": str(e)},
            ) from e

        logger.info("Employee created: %s (%s)", employee.id, employee.name)
        return EmployeeRead.model_validate(employee)

    async def update_employee(
        self,
        db: AsyncSession,
        employee_id: UUID,
        changes: EmployeeUpdate,
    ) -> EmployeeRead:
        """
        Apply a partial update and return the updated record.

        Only the fields present in `changes` are written; everything else on
        the stored row stays as it was.

        Raises:
            NotFoundError: no employee with this id (→ 404)
            DatabaseError: query or flush failed (→ 500)
        """
        fields = changes.changes()
        try:
            employee = await self._fetch(db, employee_id)
            for name, value in fields.items():
                setattr(employee, name, value)
            if fields:
                await db.flush()
                await db.refresh(employee)
        except SQLAlchemyError as e:
            logger.error("Database error updating employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message="Could not update the employee.",
                context={"employee_id": str(employee_id), "original_error": str(e)},
            ) from e

        logger.info("Employee updated: %s fields=%s", employee_id, sorted(fields))
        return EmployeeRead.model_validate(employee)

    async def delete_employee(self, db: AsyncSession, employee_id: UUID) -> EmployeeRead:
        """
        Hard-delete an employee and return the record as it was.

        Raises:
            NotFoundError: no employee with this id (→ 404)
            DatabaseError: query or flush failed (→ 500)
        """
        try:
            employee = await self._fetch(db, employee_id)
            snapshot = EmployeeRead.model_validate(employee)
            await db.delete(employee)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting employee %s: %s", employee_id, str(e))
            raise DatabaseError(
                message="Could not delete the employee.",
                context={"employee_id": str(employee_id), "original_error": str(e)},
            ) from e

        logger.info("Employee deleted: %s", employee_id)
        return snapshot


employee_service = EmployeeService()
