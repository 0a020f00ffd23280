# app/services/stable_service.py
"""
Stable service - creation and owner-scoped reads of stables.
"""
import logging
from typing import List

from app.core.authorization import ensure_allowed
from app.core.config import DEFAULT_STABLE_LOCATION
from app.core.exceptions import DuplicateResourceError, NotFoundError
from app.models.stable import Stable, StableStatus
from app.repositories.stable_repository import StableRepository
from app.schemas.stable import StableCreate

log = logging.getLogger("campaigns.stables")


class StableService:
    """Service for stable operations"""

    def __init__(self, repository: StableRepository):
        self.repository = repository

    def create(self, data: StableCreate, owner_username: str) -> Stable:
        """
        Create a stable owned by ``owner_username``.

        Blank or missing location falls back to the default location and a
        missing status to OPERATIVE. Capacity is validated by the request schema.

        Raises:
            DuplicateResourceError: If the owner already has a stable with this name
        """
        if self.repository.find_by_name_and_owner(data.name, owner_username):
            raise DuplicateResourceError("Stable with the same name already exists for this user")

        location = data.location
        if location is None or not location.strip():
            location = DEFAULT_STABLE_LOCATION

        stable = Stable(
            name=data.name,
            description=data.description,
            owner_username=owner_username,
            location=location,
            capacity=data.capacity,
            status=data.status or StableStatus.OPERATIVE
        )
        saved = self.repository.save(stable)

        log.info(f"🏠 Stable created: id={saved.id} name='{saved.name}' owner={owner_username}")
        return saved

    def list_visible(self, username: str, is_admin: bool) -> List[Stable]:
        """Admins see every stable; other callers only their own"""
        if is_admin:
            return self.repository.find_all()
        return self.repository.find_by_owner(username)

    def require(self, stable_id: int) -> Stable:
        """Load a stable without any ownership check"""
        stable = self.repository.find_by_id(stable_id)
        if not stable:
            raise NotFoundError(f"Stable not found with id: {stable_id}")
        return stable

    def get_by_id(self, stable_id: int, username: str, is_admin: bool) -> Stable:
        stable = self.require(stable_id)
        ensure_allowed(username, is_admin, stable.owner_username, f"Access denied to stable with id: {stable_id}")
        return stable
