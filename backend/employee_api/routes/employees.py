"""
Employee API: Employee Route Handlers
=======================================

What:  CRUD endpoints for the Employee entity.
How:   build_employee_router() registers list/get/create/update/delete on a
       prefix and renders results through a ResponseShaper. Validation lives
       in services/validation.py and persistence in EmployeeService, so the
       handlers only glue request → validator → service → shaper.

Route Inventory (canonical family, envelope responses):
    GET    /api/employees          list, newest first
    GET    /api/employees/{id}     single record
    POST   /api/employees          create
    PUT    /api/employees/{id}     partial update
    DELETE /api/employees/{id}     hard delete

The compatibility family is assembled from the same builder in
routes/employeelist.py.
"""

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.database import get_db_session
from employee_api.exceptions import ValidationError
from employee_api.responses import EnvelopeShaper, ResponseShaper
from employee_api.services.employee_service import employee_service
from employee_api.services.validation import (
    parse_employee_id,
    validate_employee_changes,
    validate_new_employee,
)

logger = logging.getLogger(__name__)


async def json_object_body(request: Request) -> Dict[str, Any]:
    """
    Decode the request body as a JSON object.

    An empty body is treated as {} (so PUT with no body is a no-op update and
    POST reports the missing fields); anything that is not a JSON object is a
    400.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        raise ValidationError(message="Request body must be valid JSON") from None
    if not isinstance(payload, dict):
        raise ValidationError(message="Request body must be a JSON object")
    return payload


def build_employee_router(prefix: str, shaper: ResponseShaper, tag: str) -> APIRouter:
    """
    Create an APIRouter exposing the employee CRUD operations under `prefix`.

    Both route families call this with a different shaper; validation,
    identifier parsing and error mapping are identical for both.
    """
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("", summary="List employees (newest first)")
    async def list_employees(db: AsyncSession = Depends(get_db_session)) -> JSONResponse:
        employees = await employee_service.list_employees(db)
        return shaper.listing(employees)

    @router.get("/{employee_id}", summary="Get a single employee")
    async def get_employee(
        employee_id: str,
        db: AsyncSession = Depends(get_db_session),
    ) -> JSONResponse:
        employee = await employee_service.get_employee(db, parse_employee_id(employee_id))
        return shaper.record(employee)

    @router.post("", status_code=201, summary="Create an employee")
    async def create_employee(
        payload: Dict[str, Any] = Depends(json_object_body),
        db: AsyncSession = Depends(get_db_session),
    ) -> JSONResponse:
        data = validate_new_employee(payload)
        employee = await employee_service.create_employee(db, data)
        return shaper.created(employee)

    @router.put("/{employee_id}", summary="Update an employee (partial)")
    async def update_employee(
        employee_id: str,
        payload: Dict[str, Any] = Depends(json_object_body),
        db: AsyncSession = Depends(get_db_session),
    ) -> JSONResponse:
        changes = validate_employee_changes(payload)
        employee = await employee_service.update_employee(
            db, parse_employee_id(employee_id), changes
        )
        return shaper.updated(employee)

    @router.delete("/{employee_id}", summary="Delete an employee")
    async def delete_employee(
        employee_id: str,
        db: AsyncSession = Depends(get_db_session),
    ) -> JSONResponse:
        employee = await employee_service.delete_employee(db, parse_employee_id(employee_id))
        return shaper.deleted(employee)

    return router


router = build_employee_router("/api/employees", EnvelopeShaper(), "Employees")
