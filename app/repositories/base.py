# app/repositories/base.py
"""
Shared persistence helpers for the aggregate repositories.
"""
import logging
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import StorageFailureError

log = logging.getLogger("campaigns.database")

T = TypeVar("T")


class SQLAlchemyRepository(Generic[T]):
    """
    Minimal repository over one mapped class.

    ``save`` and ``delete`` commit immediately; a rejected write rolls the
    session back and surfaces as StorageFailureError.
    """

    model: Type[T]

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, entity_id: int) -> Optional[T]:
        return self.db.get(self.model, entity_id)

    def find_all(self) -> List[T]:
        return self.db.query(self.model).order_by(self.model.id).all()

    def save(self, entity: T) -> T:
        self.db.add(entity)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            log.error(f"❌ Integrity violation saving {self.model.__name__}: {e.orig}")
            raise StorageFailureError(f"Data integrity violation: {e.orig}") from e
        self.db.refresh(entity)
        return entity

    def delete(self, entity: T) -> None:
        self.db.delete(entity)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            log.error(f"❌ Integrity violation deleting {self.model.__name__}: {e.orig}")
            raise StorageFailureError(f"Data integrity violation: {e.orig}") from e
