# app/repositories/stable_repository.py
from typing import List, Optional

from app.models.stable import Stable
from app.repositories.base import SQLAlchemyRepository


class StableRepository(SQLAlchemyRepository[Stable]):
    model = Stable

    def find_by_owner(self, owner_username: str) -> List[Stable]:
        return self.db.query(Stable).filter(
            Stable.owner_username == owner_username
        ).order_by(Stable.id).all()

    def find_by_name_and_owner(self, name: str, owner_username: str) -> Optional[Stable]:
        """Lookup used to keep stable names unique per owner"""
        return self.db.query(Stable).filter(
            Stable.owner_username == owner_username,
            Stable.name == name
        ).first()
