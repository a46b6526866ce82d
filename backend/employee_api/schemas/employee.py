"""
Employee API: Pydantic Schemas
================================

What:  Pydantic models for validated input and serialized output.
How:   EmployeeCreate / EmployeeUpdate are produced by the validation module
       (services/validation.py) after the field rules have run; EmployeeRead
       turns an ORM row into the JSON shape the frontend reads.

Wire format (EmployeeRead, by_alias=True):
    {
        "_id": "0b7c...",
        "name": "Ann",
        "position": "Eng",
        "location": "NY",
        "salary": 1000.0,
        "dateOfJoining": "2024-01-15T00:00:00Z",
        "createdAt": "...",
        "updatedAt": "..."
    }
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class EmployeeCreate(BaseModel):
    """Normalized fields for a new record (text trimmed, salary numeric)."""
    name: str
    position: str
    location: str
    salary: float = Field(ge=0)
    date_of_joining: Optional[datetime] = None


class EmployeeUpdate(BaseModel):
    """
    Normalized partial update.

    Only the fields the client actually sent are "set"; use changes() to get
    exactly those, so untouched columns keep their stored values.
    """
    name: Optional[str] = None
    position: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[float] = Field(default=None, ge=0)
    date_of_joining: Optional[datetime] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class EmployeeRead(BaseModel):
    """Full representation of a stored employee."""
    id: uuid.UUID = Field(alias="_id", description="Unique employee identifier")
    name: str
    position: str
    location: str
    salary: float
    date_of_joining: datetime
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class HealthResponse(BaseModel):
    """Payload of GET /api/health."""
    success: bool = True
    message: str = "Employee Management API is running"
    timestamp: datetime
    version: str
    database: str = Field(description="connected | disconnected")
    uptime_seconds: float
