"""
Employee API: Employee Field Validation & Normalization
=========================================================

What:  The single set of rules applied to request bodies by both route
       families (/api/employees and /api/employeelist).
How:   Plain functions that take the decoded JSON body, raise ValidationError
       (400) on the first failing rule group, and otherwise return a
       normalized Pydantic model (text trimmed, salary coerced to float,
       dateOfJoining parsed to an aware datetime).

Rule order for creation:
    1. Presence: name / position / location / salary must be supplied
    2. Salary: finite number >= 0 (numeric strings accepted)
    3. Text: coerced to str and trimmed; must not be empty afterwards
    4. dateOfJoining: optional ISO 8601 string or epoch milliseconds

Updates apply the same per-field rules to whichever fields are present.
"""

import math
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from employee_api.exceptions import InvalidIdentifierError, ValidationError
from employee_api.schemas.employee import EmployeeCreate, EmployeeUpdate

TEXT_FIELDS = ("name", "position", "location")

MISSING_FIELDS_MESSAGE = "Please provide all required fields: name, position, location, salary"
INVALID_SALARY_MESSAGE = "Salary must be a valid positive number"
INVALID_DATE_MESSAGE = "Date of joining must be a valid date"

REQUIRED_MESSAGES = {
    "name": "Employee name is required",
    "position": "Employee position is required",
    "location": "Employee location is required",
    "salary": "Employee salary is required",
}


class _Invalid(Exception):
    """Internal signal from a field coercer; carries the field message."""


def _coerce_text(field: str, value: Any) -> str:
    # bool is an int subclass; reject it before the numeric branch
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise _Invalid(f"Employee {field} must be text")
    cleaned = str(value).strip()
    if not cleaned:
        raise _Invalid(REQUIRED_MESSAGES[field])
    return cleaned


def coerce_salary(value: Any) -> float:
    """
    Convert a salary from the request body to a non-negative float.

    Accepts JSON numbers and numeric strings ("1500", " 2e3 ").
    Rejects booleans, blank or non-numeric strings, NaN/Infinity and
    negative values.
    """
    if isinstance(value, bool):
        raise _Invalid(INVALID_SALARY_MESSAGE)
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise _Invalid(INVALID_SALARY_MESSAGE) from None
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            raise _Invalid(INVALID_SALARY_MESSAGE) from None
    else:
        raise _Invalid(INVALID_SALARY_MESSAGE)

    if not math.isfinite(number) or number < 0:
        raise _Invalid(INVALID_SALARY_MESSAGE)
    return number


def parse_date_of_joining(value: Any) -> datetime:
    """
    Parse dateOfJoining into a timezone-aware datetime.

    Accepted: "2024-01-15", "2024-01-15T09:30:00", "2024-01-15T09:30:00Z",
    offsets like "+05:30", and epoch milliseconds (what JavaScript Date
    serializes to via getTime()). Naive values are taken as UTC.
    """
    if isinstance(value, bool):
        raise _Invalid(INVALID_DATE_MESSAGE)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise _Invalid(INVALID_DATE_MESSAGE) from None
    if not isinstance(value, str) or not value.strip():
        raise _Invalid(INVALID_DATE_MESSAGE)

    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise _Invalid(INVALID_DATE_MESSAGE) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _is_missing(payload: Mapping[str, Any], field: str) -> bool:
    value = payload.get(field)
    if field == "salary":
        return value is None
    return value is None or value == ""


def validate_new_employee(payload: Mapping[str, Any]) -> EmployeeCreate:
    """
    Validate and normalize the body of a create request.

    Raises:
        ValidationError: a required field is absent, salary is not a finite
            non-negative number, a text field is blank after trimming, or
            dateOfJoining cannot be parsed.
    """
    missing = [f for f in (*TEXT_FIELDS, "salary") if _is_missing(payload, f)]
    if missing:
        raise ValidationError(
            message=MISSING_FIELDS_MESSAGE,
            errors=[REQUIRED_MESSAGES[f] for f in missing],
            context={"missing": missing},
        )

    try:
        salary = coerce_salary(payload["salary"])
    except _Invalid as e:
        raise ValidationError(message=str(e), field="salary") from None

    cleaned: Dict[str, Any] = {"salary": salary}
    errors: List[str] = []
    for field in TEXT_FIELDS:
        try:
            cleaned[field] = _coerce_text(field, payload[field])
        except _Invalid as e:
            errors.append(str(e))

    date_value = payload.get("dateOfJoining")
    if date_value is not None and date_value != "":
        try:
            cleaned["date_of_joining"] = parse_date_of_joining(date_value)
        except _Invalid as e:
            errors.append(str(e))

    if errors:
        raise ValidationError(message="Validation Error", errors=errors)
    return EmployeeCreate(**cleaned)


def validate_employee_changes(payload: Mapping[str, Any]) -> EmployeeUpdate:
    """
    Validate and normalize the body of an update request.

    Every field is optional. Keys that are not employee fields (`_id`, `id`,
    `createdAt`, ...) are ignored. A field that is present must satisfy the
    same rule it has on creation; null is never a valid value.
    """
    if "salary" in payload:
        try:
            salary = coerce_salary(payload["salary"])
        except _Invalid as e:
            raise ValidationError(message=str(e), field="salary") from None
        cleaned: Dict[str, Any] = {"salary": salary}
    else:
        cleaned = {}

    errors: List[str] = []
    for field in TEXT_FIELDS:
        if field not in payload:
            continue
        try:
            cleaned[field] = _coerce_text(field, payload[field])
        except _Invalid as e:
            errors.append(str(e))

    if "dateOfJoining" in payload:
        try:
            cleaned["date_of_joining"] = parse_date_of_joining(payload["dateOfJoining"])
        except _Invalid as e:
            errors.append(str(e))

    if errors:
        raise ValidationError(message="Validation Error", errors=errors)
    return EmployeeUpdate(**cleaned)


def parse_employee_id(raw: Any) -> uuid.UUID:
    """
    Turn a path or body identifier into a UUID.

    Raises:
        InvalidIdentifierError: not a string, or not a UUID in hyphenated or
            32-hex-digit form.
    """
    if not isinstance(raw, str):
        raise InvalidIdentifierError(raw)
    try:
        return uuid.UUID(raw.strip())
    except ValueError:
        raise InvalidIdentifierError(raw) from None
