from __future__ import annotations

import logging
from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from . import integrity
from .util import load_by_id


logger = logging.getLogger(__name__)

NewT = TypeVar("NewT", bound=SQLModel)
ItemT = TypeVar("ItemT", bound=SQLModel)


class CRUDController(Generic[NewT, ItemT]):
    """Create, read, update and delete rows of one entity over a leased session.

    Store failures never leave this class: they are logged and reported as
    ``False`` for mutations and ``None`` for reads. Returned items are
    detached from the session.
    """

    model: Type[ItemT]
    label: str = "item"

    def insert(self, session: Session, new_item: NewT) -> Optional[ItemT]:
        """Insert ``new_item`` and return the stored row with its id, or None."""
        try:
            missing = integrity.missing_parents(session, self.model, new_item)
            if missing:
                for column, parent_id in missing:
                    logger.error("Could not insert %s: no row for %s %s", self.label, column, parent_id)
                return None

            item = self.model(**new_item.model_dump(exclude={"id"}))
            session.add(item)
            session.commit()
            session.refresh(item)
            session.expunge(item)
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Could not insert %s: %s", self.label, exc)
            return None
        return item

    def create(self, session: Session, new_item: NewT) -> bool:
        return self.insert(session, new_item) is not None

    def read(self, session: Session, item_id: int) -> Optional[ItemT]:
        try:
            item = load_by_id(session, self.model, item_id)
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Could not read %s with id %s: %s", self.label, item_id, exc)
            return None
        if item is None:
            logger.info("Could not find %s with id %s", self.label, item_id)
            return None
        session.expunge(item)
        return item

    def update(self, session: Session, item_id: int, item: ItemT) -> bool:
        """Replace every field but the id of row ``item_id`` with those of ``item``.

        References are not checked again here, only on insert.
        """
        try:
            row = load_by_id(session, self.model, item_id)
            if row is None:
                logger.error("Could not update %s with id %s: no such row", self.label, item_id)
                return False
            self._apply(row, item)
            session.add(row)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Could not update %s with id %s: %s", self.label, item_id, exc)
            return False
        return True

    def delete(self, session: Session, item_id: int) -> bool:
        """Delete dependents first, then the row itself.

        The result reflects only the row deletion; a failed cascade step is
        logged and the row deletion is still attempted.
        """
        if not integrity.cascade_delete(session, self.model, item_id):
            logger.error("Could not remove all dependents of %s with id %s", self.label, item_id)

        try:
            row = load_by_id(session, self.model, item_id)
            if row is None:
                logger.error("Could not delete %s with id %s: no such row", self.label, item_id)
                return False
            session.delete(row)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Could not delete %s with id %s: %s", self.label, item_id, exc)
            return False
        return True

    def exists(self, session: Session, item_id: int) -> bool:
        return self.read(session, item_id) is not None

    def _apply(self, row: ItemT, item: SQLModel) -> None:
        for field, value in item.model_dump(exclude={"id"}).items():
            setattr(row, field, value)
