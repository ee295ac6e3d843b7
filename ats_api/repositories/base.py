"""Shared query building for entity repositories.

A repository is constructed with the request's session and describes, per
entity, which query fields map to which columns. Filtering, sorting and
slicing are then generic.
"""

from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from ats_api.core.logging import get_logger
from ats_api.core.timing import timed
from ats_api.filters.compiler import apply_predicate
from ats_api.filters.params import Predicate
from ats_api.models import candidate, client, offer, user  # noqa: F401
from ats_api.models.enums import Order

logger = get_logger(__name__)

ModelT = TypeVar("ModelT")


class SqlRepository(Generic[ModelT]):
    model: ClassVar[type]
    # query field -> column; columns of another entity need a matching join
    filter_columns: ClassVar[Mapping[str, Any]] = {}
    filter_joins: ClassVar[Mapping[str, Any]] = {}
    sort_columns: ClassVar[Mapping[str, Any]] = {}

    def __init__(self, db: Session):
        self.db = db

    def list_options(self) -> tuple:
        """Loader options for list responses."""
        return ()

    def detail_options(self) -> tuple:
        """Loader options for single-resource responses."""
        return self.list_options()

    def _filtered_query(self, predicates: Mapping[str, Predicate]) -> Query:
        query = self.db.query(self.model)
        for field, predicate in predicates.items():
            column = self.filter_columns.get(field)
            if column is None:
                raise KeyError(f"{self.model.__name__} cannot be filtered on '{field}'")
            join = self.filter_joins.get(field)
            if join is not None:
                query = query.outerjoin(join)
            query = query.filter(apply_predicate(column, predicate))
        return query

    def count(self, predicates: Mapping[str, Predicate]) -> int:
        with timed(f"count {self.model.__tablename__}"):
            query = self._filtered_query(predicates)
            return query.with_entities(func.count(self.model.id)).scalar() or 0

    def find(
        self,
        predicates: Mapping[str, Predicate],
        order: Mapping[str, Order] | None = None,
        *,
        skip: int = 0,
        take: int | None = None,
    ) -> list[ModelT]:
        query = self._filtered_query(predicates).options(*self.list_options())

        for field, direction in (order or {}).items():
            column = self.sort_columns[field]
            query = query.order_by(column.desc() if direction is Order.DESC else column.asc())
        # Stable pages when sort values tie
        query = query.order_by(self.model.id.asc())

        query = query.offset(skip)
        if take is not None:
            query = query.limit(take)

        with timed(f"list {self.model.__tablename__}"):
            return query.all()

    def get_by_slug(self, slug: str) -> ModelT | None:
        return (
            self.db.query(self.model)
            .options(*self.detail_options())
            .filter(self.model.slug == slug)
            .first()
        )

    def add(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        logger.info(f"Created {self.model.__name__} {entity.id}")
        return entity

    def count_created_per_day(self) -> list[Any]:
        """Rows of ``(day, count)``: how many entities were created each day, oldest first."""
        day = func.date(self.model.created_date)
        with timed(f"acquisition {self.model.__tablename__}"):
            return (
                self.db.query(day.label("day"), func.count(self.model.id).label("count"))
                .group_by(day)
                .order_by(day)
                .all()
            )
