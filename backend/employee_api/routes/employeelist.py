"""
Employee API: Frontend-Compatibility Routes
=============================================

The pre-built frontend talks to /api/employeelist and expects bare records
and arrays instead of the {success, data} envelope. Same operations, same
validation, same status codes as /api/employees; only the body shape differs.

Extra route for this family:
    PUT /api/employeelist     update with the id carried in the body
                              as "_id" (or "id")
"""

import logging
from typing import Any, Dict

from fastapi import Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from employee_api.database import get_db_session
from employee_api.exceptions import ValidationError
from employee_api.responses import BareShaper
from employee_api.routes.employees import build_employee_router, json_object_body
from employee_api.services.employee_service import employee_service
from employee_api.services.validation import parse_employee_id, validate_employee_changes

logger = logging.getLogger(__name__)

shaper = BareShaper()
router = build_employee_router("/api/employeelist", shaper, "Employee list (compat)")


@router.put("", summary="Update an employee, id in body")
async def update_employee_from_body(
    payload: Dict[str, Any] = Depends(json_object_body),
    db: AsyncSession = Depends(get_db_session),
) -> JSONResponse:
    raw_id = payload.get("_id") or payload.get("id")
    if not raw_id:
        raise ValidationError(message="Missing employee id in request body", field="_id")

    changes = validate_employee_changes(payload)
    employee = await employee_service.update_employee(db, parse_employee_id(raw_id), changes)
    logger.debug("Body-id update applied for %s", raw_id)
    return shaper.updated(employee)
