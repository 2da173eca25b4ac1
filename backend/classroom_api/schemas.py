"""Pydantic response schemas used by the API.

Schemas keep the API output shape stable. Python attributes stay
snake_case while the JSON keys are camelCase (`departmentId`,
`createdAt`, `totalPages`).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class DepartmentOut(CamelModel):
    """A department embedded in a subject listing row."""
    id: int
    code: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class SubjectOut(CamelModel):
    """A subject with its owning department, or `None` if the join found none."""
    id: int
    department_id: int
    name: str
    code: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    department: Optional[DepartmentOut] = None


class PaginationOut(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class SubjectListOut(CamelModel):
    """Response body of `GET /api/v1/subjects`."""
    data: List[SubjectOut]
    pagination: PaginationOut


class ErrorOut(BaseModel):
    error: str
