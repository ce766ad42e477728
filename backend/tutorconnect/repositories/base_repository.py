# backend/tutorconnect/repositories/base_repository.py
"""
Generic data access shared by every repository.

Repositories flush so that defaults and ids are populated, but never
commit: the service that owns the transaction does. SQLAlchemy errors
surface as RepositoryException.
"""

from contextlib import contextmanager
import logging
from typing import Any, Generic, Iterator, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    CRUD helpers over one model class.

    Ids are monotonic ULIDs, so ordering by id gives insertion order.
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    @contextmanager
    def _wrap_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.logger.error(f"{self.model.__name__} {action} failed: {str(e)}")
            raise RepositoryException(f"Failed to {action} {self.model.__name__}: {str(e)}") from e

    def get_by_id(self, id: str) -> Optional[T]:
        with self._wrap_errors("load"):
            return self.db.get(self.model, id)

    def get_all(self) -> List[T]:
        with self._wrap_errors("list"):
            return self._build_query().order_by(self.model.id).all()

    def create(self, **kwargs: Any) -> T:
        """Add and flush a new row. A constraint violation rolls the session back."""
        entity = self.model(**kwargs)
        try:
            self.db.add(entity)
            self.db.flush()
        except IntegrityError as exc:
            self.logger.error(
                "Constraint violated creating %s: %s", self.model.__name__, exc.orig
            )
            self.db.rollback()
            raise RepositoryException(f"Integrity constraint violated: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            self.logger.error(f"Creating {self.model.__name__} failed: {str(exc)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to create {self.model.__name__}: {str(exc)}") from exc
        return entity

    def flush(self) -> None:
        with self._wrap_errors("flush"):
            self.db.flush()

    def update(self, id: str, **kwargs: Any) -> Optional[T]:
        """Set the given columns on one row; unknown keys are ignored."""
        entity = self.get_by_id(id)
        if entity is None:
            return None
        for key, value in kwargs.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        self.flush()
        return entity

    def exists(self, **kwargs: Any) -> bool:
        return self.find_one_by(**kwargs) is not None

    def count(self, **kwargs: Any) -> int:
        with self._wrap_errors("count"):
            return self._build_query().filter_by(**kwargs).count()

    def find_by(self, **kwargs: Any) -> List[T]:
        """Rows matching every keyword exactly, oldest first."""
        with self._wrap_errors("query"):
            return self._build_query().filter_by(**kwargs).order_by(self.model.id).all()

    def find_one_by(self, **kwargs: Any) -> Optional[T]:
        with self._wrap_errors("query"):
            return self._build_query().filter_by(**kwargs).first()

    def _build_query(self) -> Query:
        return self.db.query(self.model)

    def _execute_query(self, query: Query) -> List[T]:
        with self._wrap_errors("query"):
            return query.all()
