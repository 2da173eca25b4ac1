"""Repository classes encapsulating database operations.

Each repository is small and focused on a single aggregate (departments,
subjects). Repositories return SQLModel objects and perform
commits/refreshes where appropriate.
"""

from typing import List, Optional, Tuple

from sqlalchemy import and_, func, or_
from sqlmodel import Session, col, select

from . import models
from .utils.pagination import ListingParams


class DepartmentRepository:
    """CRUD operations for `Department` objects."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, department: models.Department) -> models.Department:
        """Persist a new department and return the managed instance."""
        self.session.add(department)
        self.session.commit()
        self.session.refresh(department)
        return department

    def get_by_code(self, code: str) -> Optional[models.Department]:
        stmt = select(models.Department).where(models.Department.code == code)
        return self.session.exec(stmt).first()


class SubjectRepository:
    """Listing queries over `Subject` joined with its `Department`.

    Both the count and the page query are built from the same filter set,
    so `count()` always describes the rows `list_page()` paginates over.
    """
    def __init__(self, session: Session):
        self.session = session

    def create(self, subject: models.Subject) -> models.Subject:
        """Persist a new subject and return the managed instance."""
        self.session.add(subject)
        self.session.commit()
        self.session.refresh(subject)
        return subject

    def get_by_code(self, code: str) -> Optional[models.Subject]:
        stmt = select(models.Subject).where(models.Subject.code == code)
        return self.session.exec(stmt).first()

    @staticmethod
    def filter_conditions(params: ListingParams) -> list:
        """Return the active filter predicates for `params` (may be empty)."""
        conditions = []
        if params.search:
            pattern = f"%{params.search}%"
            conditions.append(or_(
                col(models.Subject.name).ilike(pattern),
                col(models.Subject.code).ilike(pattern),
            ))
        if params.department:
            conditions.append(col(models.Department.name).ilike(f"%{params.department}%"))
        return conditions

    def _filtered(self, stmt, params: ListingParams):
        stmt = stmt.outerjoin(
            models.Department,
            col(models.Subject.department_id) == col(models.Department.id),
        )
        conditions = self.filter_conditions(params)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        return stmt

    def count(self, params: ListingParams) -> int:
        """Return the number of subjects matching the filters of `params`."""
        stmt = self._filtered(select(func.count()).select_from(models.Subject), params)
        total = self.session.exec(stmt).one()
        return int(total or 0)

    def list_page(self, params: ListingParams) -> List[Tuple[models.Subject, Optional[models.Department]]]:
        """Return one page of `(subject, department)` rows, newest first.

        The department is `None` when the join found no matching row.
        """
        stmt = (
            self._filtered(select(models.Subject, models.Department), params)
            .order_by(col(models.Subject.created_at).desc(), col(models.Subject.id).desc())
            .limit(params.limit)
            .offset(params.offset)
        )
        rows = []
        for subject, department in self.session.exec(stmt).all():
            if department is None or department.id is None:
                department = None
            rows.append((subject, department))
        return rows
