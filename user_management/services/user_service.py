"""User Service — orchestrates the pure user core around the persistence gateway.

Invariants:
    - Validation (create_user / apply_update) runs BEFORE any gateway write
    - Ids <= 0 are reported as not found without touching the store
    - Every public method returns response projections computed with the service clock
    - Gateway failures (StoreError) propagate unchanged: no retries here

Design Decisions:
    - Repository, max age and clock injected via constructor (no module-level singletons)
      so tests substitute an in-memory fake and a fixed date
    - Impureim sandwich: await gateway -> pure core -> await gateway
"""

import logging
from datetime import date
from typing import Callable

from user_management.core.calculate_age import utc_today
from user_management.core.domain_types import MAX_AGE_YEARS, UserId
from user_management.core.errors import ResourceNotFoundError
from user_management.core.pagination import normalize_page, paginate
from user_management.core.repository_protocols import UserRepository
from user_management.core.user_aggregate import (
    User, apply_update, create_user, to_response,
)

logger = logging.getLogger(__name__)


class UserService:
    """CRUD operations on users."""

    def __init__(
        self,
        repository: UserRepository,
        *,
        max_age_years: int = MAX_AGE_YEARS,
        clock: Callable[[], date] | None = None,
    ):
        self.repository = repository
        self.max_age_years = max_age_years
        self.clock = clock or utc_today

    async def create_user(self, name: object, date_of_birth: object) -> dict:
        today = self.clock()
        user = create_user(
            name, date_of_birth, today=today, max_age=self.max_age_years,
        )
        saved = await self.repository.insert(user.name, user.date_of_birth)
        logger.info("User created", extra={"user_id": saved.id})
        return to_response(saved, today)

    async def get_user(self, user_id: int) -> dict:
        user = await self._get_existing(user_id)
        return to_response(user, self.clock())

    async def update_user(
        self, user_id: int, name: str | None, date_of_birth: str | None,
    ) -> dict:
        existing = await self._get_existing(user_id)
        today = self.clock()
        merged = apply_update(
            existing, name, date_of_birth,
            today=today, max_age=self.max_age_years,
        )
        saved = await self.repository.update(
            existing.id, merged.name, merged.date_of_birth,
        )
        if saved is None:
            # Deleted between the read and the write
            raise ResourceNotFoundError("User", str(user_id))
        logger.info("User updated", extra={"user_id": saved.id})
        return to_response(saved, today)

    async def delete_user(self, user_id: int) -> None:
        if user_id <= 0 or not await self.repository.delete(UserId(user_id)):
            raise ResourceNotFoundError("User", str(user_id))
        logger.info("User deleted", extra={"user_id": user_id})

    async def list_users(self, page: int | None, limit: int | None) -> dict:
        request = normalize_page(page, limit)
        users = await self.repository.list_page(request.limit, request.offset)
        total = await self.repository.count()
        today = self.clock()
        result = paginate(users, request.page, request.limit, total)
        return result.to_response(lambda user: to_response(user, today))

    async def list_all_users(self) -> list[dict]:
        users = await self.repository.list_all()
        today = self.clock()
        return [to_response(user, today) for user in users]

    async def _get_existing(self, user_id: int) -> User:
        user = None
        if user_id > 0:
            user = await self.repository.find_by_id(UserId(user_id))
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        return user
