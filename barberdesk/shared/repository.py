"""Generic repository - CRUD over one mapped table"""

import logging
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import translate_db_error

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    """
    Database operations for a single entity type.

    Every failure is rolled back and re-raised as DataAccessError. After each
    successful write the ``on_change`` hook runs once, which is where callers
    invalidate anything derived from the table.
    """

    model: type[ModelT]

    def __init__(
        self,
        db: Session,
        model: Optional[type[ModelT]] = None,
        on_change: Optional[Callable[[], Any]] = None,
    ):
        self.db = db
        if model is not None:
            self.model = model
        self.on_change = on_change

    def _fail(self, exc: SQLAlchemyError, action: str):
        self.db.rollback()
        error = translate_db_error(exc)
        logger.error(
            f"❌ {action} on {self.model.__tablename__} failed [{error.code}]: {exc.__class__.__name__}"
        )
        raise error from exc

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def query(self, *criteria, order_by: Iterable = (), options: Iterable = ()):
        query = self.db.query(self.model)
        if options:
            query = query.options(*options)
        if criteria:
            query = query.filter(*criteria)
        if order_by:
            query = query.order_by(*order_by)
        return query

    def find(self, *criteria, order_by: Iterable = (), options: Iterable = ()) -> list[ModelT]:
        """Fetch all rows matching the criteria"""
        try:
            return self.query(*criteria, order_by=order_by, options=options).all()
        except SQLAlchemyError as e:
            self._fail(e, "select")

    def get(self, record_id: str) -> Optional[ModelT]:
        """Fetch a single row by primary key"""
        try:
            return self.db.get(self.model, record_id)
        except SQLAlchemyError as e:
            self._fail(e, "get")

    def count(self, *criteria) -> int:
        try:
            query = self.db.query(func.count()).select_from(self.model)
            if criteria:
                query = query.filter(*criteria)
            return query.scalar() or 0
        except SQLAlchemyError as e:
            self._fail(e, "count")

    def create(self, **values) -> ModelT:
        """Insert one row"""
        return self.create_many([values])[0]

    def create_many(self, rows: list[dict]) -> list[ModelT]:
        """Insert several rows in one transaction"""
        instances = [self.model(**values) for values in rows]
        try:
            self.db.add_all(instances)
            self.db.commit()
            for instance in instances:
                self.db.refresh(instance)
        except SQLAlchemyError as e:
            self._fail(e, "insert")
        self._changed()
        return instances

    def update(self, instance: ModelT, **updates) -> ModelT:
        """Apply the given fields to an existing row"""
        for key, value in updates.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
        try:
            self.db.commit()
            self.db.refresh(instance)
        except SQLAlchemyError as e:
            self._fail(e, "update")
        self._changed()
        return instance

    def delete(self, instance: ModelT) -> None:
        try:
            self.db.delete(instance)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(e, "delete")
        self._changed()

    def update_by_id(self, record_id: str, **updates) -> Optional[ModelT]:
        """Update a row by primary key; None when it does not exist"""
        instance = self.get(record_id)
        if instance is None:
            return None
        return self.update(instance, **updates)

    def delete_by_id(self, record_id: str) -> bool:
        """Delete a row by primary key; False when it does not exist"""
        instance = self.get(record_id)
        if instance is None:
            return False
        self.delete(instance)
        return True
