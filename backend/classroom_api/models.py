"""SQLModel data models.

This module defines the `departments` and `subjects` tables. A department
owns zero or more subjects; deleting a department that still has subjects
is rejected by the database (`ON DELETE RESTRICT`).
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field, Relationship, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Department(SQLModel, table=True):
    """An organizational unit owning subjects.

    Fields:
    - `code`: short unique identifier, e.g. `CS`
    - `name`: display name, used by the listing's department filter
    """
    __tablename__ = "departments"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(max_length=50, unique=True, nullable=False)
    name: str = Field(max_length=255, nullable=False)
    description: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_column_kwargs={"onupdate": _utcnow},
    )
    subjects: List["Subject"] = Relationship(back_populates="department")


class Subject(SQLModel, table=True):
    """A course belonging to exactly one `Department`."""
    __tablename__ = "subjects"

    id: Optional[int] = Field(default=None, primary_key=True)
    department_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("departments.id", ondelete="RESTRICT"),
            nullable=False,
        )
    )
    name: str = Field(max_length=255, nullable=False)
    code: str = Field(max_length=50, unique=True, nullable=False)
    description: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False, index=True)
    updated_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_column_kwargs={"onupdate": _utcnow},
    )
    department: Optional[Department] = Relationship(back_populates="subjects")
