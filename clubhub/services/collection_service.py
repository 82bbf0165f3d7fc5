"""
Generic CRUD service shared by every resource collection.

Each collection is a SQLModel table parameterised by a label (used in
messages), the string columns searched by free text and the fields that may
never be blanked by an update.
"""

from typing import Any, Generic, Iterable, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func, or_, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from clubhub.core.errors import NotFoundError, StoreError, ValidationError
from clubhub.core.logging import get_logger
from clubhub.models.base import is_valid_id, utcnow

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


def ensure_valid_id(value: Any, label: str = "id") -> str:
    """Raise ``ValidationError`` unless ``value`` is a well-formed identifier."""
    if not is_valid_id(value):
        raise ValidationError(f"Invalid {label}")
    return value


class CollectionService(Generic[ModelT]):
    """
    List/get/create/update/delete for one collection.

    Routes build one instance per request around the request's session.
    """

    def __init__(
        self,
        session: Session,
        model: Type[ModelT],
        label: str,
        search_fields: Sequence[str] = (),
        required_fields: Sequence[str] = (),
    ):
        self.session = session
        self.model = model
        self.label = label
        self.search_fields = tuple(search_fields)
        self.required_fields = tuple(required_fields)

    def _column(self, name: str) -> Any:
        return getattr(self.model, name)

    def _clears(self, name: str, value: Any) -> bool:
        if value is None:
            column = self.model.__table__.columns.get(name)
            return name in self.required_fields or (column is not None and not column.nullable)
        return name in self.required_fields and isinstance(value, str) and not value.strip()

    def _apply_filters(self, query: Any, filters: Optional[Mapping[str, Any]], search: Optional[str]) -> Any:
        for field, value in (filters or {}).items():
            if value is None or value == "":
                continue
            if isinstance(value, (list, tuple, set)):
                query = query.where(self._column(field).in_(list(value)))
            else:
                query = query.where(self._column(field) == value)

        if search and self.search_fields:
            pattern = f"%{search.strip()}%"
            query = query.where(or_(*(self._column(name).ilike(pattern) for name in self.search_fields)))
        return query

    def list(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        search: Optional[str] = None,
        order_by: Optional[Iterable[Any]] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        conditions: Iterable[Any] = (),
    ) -> Tuple[List[ModelT], int]:
        """
        List documents matching equality ``filters`` and free-text ``search``.

        Args:
            filters: Column name to required value; ``None``/empty values are ignored
            search: Case-insensitive substring matched against ``search_fields``
            order_by: SQL ordering clauses; defaults to ``created_at`` descending
            limit: Maximum rows to return
            offset: Rows to skip
            conditions: Extra SQL expressions ANDed into the query

        Returns:
            Tuple of (rows, total matching count before pagination)
        """
        query = self._apply_filters(select(self.model), filters, search)
        count_query = self._apply_filters(select(func.count()).select_from(self.model), filters, search)
        for condition in conditions:
            query = query.where(condition)
            count_query = count_query.where(condition)

        if order_by is None:
            order_by = [self._column("created_at").desc()]
        query = query.order_by(*order_by)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        try:
            rows = list(self.session.exec(query))
            total = self.session.exec(count_query).one()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {self.label}: {e}")
            raise StoreError()
        return rows, int(total)

    def get(self, item_id: Any) -> Optional[ModelT]:
        ensure_valid_id(item_id, f"{self.label} ID")
        return self.session.get(self.model, item_id)

    def get_or_404(self, item_id: Any) -> ModelT:
        """
        Fetch by id.

        Raises:
            ValidationError: Malformed id (400)
            NotFoundError: No matching document (404)
        """
        item = self.get(item_id)
        if item is None:
            raise NotFoundError(f"{self.label.capitalize()} not found")
        return item

    def _commit(self, item: Optional[ModelT] = None) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.error(f"Constraint violation writing {self.label}: {e.orig}")
            raise StoreError()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to write {self.label}: {e}")
            raise StoreError()
        if item is not None:
            self.session.refresh(item)

    def create(self, data: Mapping[str, Any]) -> ModelT:
        """Insert a document with server-assigned id and timestamps."""
        missing = [name for name in self.required_fields if data.get(name) in (None, "")]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        item = self.model(**dict(data))
        self.session.add(item)
        self._commit(item)
        logger.info(f"Created {self.label} {getattr(item, 'id', '')}")
        return item

    def update(self, item_id: Any, changes: Mapping[str, Any]) -> ModelT:
        """
        Apply only the keys present in ``changes`` and stamp ``updated_at``.

        Required fields may not be cleared to ``None`` or blank text, and
        non-nullable columns may not be set to ``None``.
        """
        item = self.get_or_404(item_id)
        blanked = [name for name, value in changes.items() if self._clears(name, value)]
        if blanked:
            raise ValidationError(f"Missing required fields: {', '.join(blanked)}")

        for field, value in changes.items():
            setattr(item, field, value)
        if hasattr(item, "updated_at"):
            item.updated_at = utcnow()
        self.session.add(item)
        self._commit(item)
        logger.info(f"Updated {self.label} {item_id}")
        return item

    def delete(self, item_id: Any) -> None:
        """Delete by id. Callers that own files read the file path first."""
        item = self.get_or_404(item_id)
        self.session.delete(item)
        self._commit()
        logger.info(f"Deleted {self.label} {item_id}")

    def increment(self, item_id: Any, field: str = "download_count") -> None:
        """
        Atomically add one to a counter column.

        A single ``UPDATE ... SET n = n + 1`` so concurrent increments are not lost.
        """
        ensure_valid_id(item_id, f"{self.label} ID")
        column = self._column(field)
        statement = update(self.model).where(self._column("id") == item_id).values({field: column + 1})
        try:
            result = self.session.connection().execute(statement)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to increment {self.label}.{field}: {e}")
            raise StoreError()
        if result.rowcount == 0:
            raise NotFoundError(f"{self.label.capitalize()} not found")

    def count(self, *conditions: Any) -> int:
        query = select(func.count()).select_from(self.model)
        for condition in conditions:
            query = query.where(condition)
        return int(self.session.exec(query).one())
