from __future__ import annotations

import logging
from typing import Optional, Type, TypeVar

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


def load_by_id(session: Session, model: Type[ModelT], item_id: int) -> Optional[ModelT]:
    """Return the row with ``item_id`` or None. Store errors propagate."""
    rows = session.exec(select(model).where(model.id == item_id)).all()
    if not rows:
        return None
    if len(rows) > 1:
        logger.error(
            "Found %d rows in %s with id %s, using the first",
            len(rows), model.__tablename__, item_id,
        )
    return rows[0]


def bulk_delete(session: Session, model: Type[SQLModel], column: str, value: int) -> bool:
    """Delete every row of ``model`` whose ``column`` equals ``value``.

    Matching zero rows is not an error.
    """
    try:
        session.exec(delete(model).where(getattr(model, column) == value))
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Could not delete from %s where %s = %s: %s", model.__tablename__, column, value, exc)
        return False
    return True
