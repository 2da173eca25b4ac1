"""Business logic services used by HTTP controllers.

Services coordinate repositories and shape their results into the
response schemas. They do not catch database errors: the HTTP layer
decides how failures are reported.
"""

import logging
import math
from typing import Optional

from sqlmodel import Session

from . import models, repositories
from .schemas import DepartmentOut, PaginationOut, SubjectListOut, SubjectOut
from .utils.pagination import ListingParams

logger = logging.getLogger("classroom_api.services")


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for `total` rows; 0 when there are no rows."""
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def subject_to_out(subject: models.Subject, department: Optional[models.Department]) -> SubjectOut:
    """Build a `SubjectOut`; `department` is `None` when the join found no row."""
    dept_out = DepartmentOut.model_validate(department) if department is not None else None
    return SubjectOut(
        id=subject.id,
        department_id=subject.department_id,
        name=subject.name,
        code=subject.code,
        description=subject.description,
        created_at=subject.created_at,
        updated_at=subject.updated_at,
        department=dept_out,
    )


class SubjectService:
    """Paginated, filterable subject listing."""
    def __init__(self, session: Session):
        self.subject_repo = repositories.SubjectRepository(session)

    def list_subjects(self, params: ListingParams) -> SubjectListOut:
        """Count the matching subjects, then fetch the requested page.

        The two reads are not wrapped in a transaction; under concurrent
        writers `total` and `data` may reflect slightly different snapshots.
        """
        total = int(self.subject_repo.count(params) or 0)
        rows = self.subject_repo.list_page(params)
        logger.debug(
            "subjects page=%s limit=%s total=%s returned=%s",
            params.page, params.limit, total, len(rows),
        )
        return SubjectListOut(
            data=[subject_to_out(s, d) for s, d in rows],
            pagination=PaginationOut(
                page=params.page,
                limit=params.limit,
                total=total,
                total_pages=total_pages(total, params.limit),
            ),
        )
