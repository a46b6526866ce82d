"""
Employee API: Response Shaping
================================

Two response conventions coexist:

    EnvelopeShaper  /api/employees      {"success": true, "data": ..., "message"?, "count"?}
    BareShaper      /api/employeelist   the record or array itself

Both route families are built by the same route builder; the shaper is the
only thing that differs between them. Error responses are produced by the
global exception handlers and use the envelope for both families.
"""

from typing import Any, Dict, List, Optional

from fastapi.responses import JSONResponse

from employee_api.schemas.employee import EmployeeRead

CREATED_MESSAGE = "Employee created successfully"
UPDATED_MESSAGE = "Employee updated successfully"
DELETED_MESSAGE = "Employee deleted successfully"


class ResponseShaper:
    """Strategy turning service results into HTTP responses."""

    def listing(self, employees: List[EmployeeRead]) -> JSONResponse:
        raise NotImplementedError

    def record(
        self,
        employee: EmployeeRead,
        message: Optional[str] = None,
        status_code: int = 200,
    ) -> JSONResponse:
        raise NotImplementedError

    def created(self, employee: EmployeeRead) -> JSONResponse:
        return self.record(employee, message=CREATED_MESSAGE, status_code=201)

    def updated(self, employee: EmployeeRead) -> JSONResponse:
        return self.record(employee, message=UPDATED_MESSAGE)

    def deleted(self, employee: EmployeeRead) -> JSONResponse:
        return self.record(employee, message=DELETED_MESSAGE)


class EnvelopeShaper(ResponseShaper):
    """Canonical routes: wrap payloads as {success, data, message?}."""

    def listing(self, employees: List[EmployeeRead]) -> JSONResponse:
        return JSONResponse(
            status_code=200,
            content={
                "success": True,
                "count": len(employees),
                "data": [e.to_json() for e in employees],
            },
        )

    def record(
        self,
        employee: EmployeeRead,
        message: Optional[str] = None,
        status_code: int = 200,
    ) -> JSONResponse:
        content: Dict[str, Any] = {"success": True}
        if message:
            content["message"] = message
        content["data"] = employee.to_json()
        return JSONResponse(status_code=status_code, content=content)


class BareShaper(ResponseShaper):
    """Frontend-compatibility routes: return the record or array directly."""

    def listing(self, employees: List[EmployeeRead]) -> JSONResponse:
        return JSONResponse(status_code=200, content=[e.to_json() for e in employees])

    def record(
        self,
        employee: EmployeeRead,
        message: Optional[str] = None,
        status_code: int = 200,
    ) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=employee.to_json())


def error_body(message: str, **extra: Any) -> Dict[str, Any]:
    """Error envelope shared by every exception handler."""
    body: Dict[str, Any] = {"success": False, "message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return body
