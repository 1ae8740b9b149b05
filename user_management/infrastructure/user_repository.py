"""User Repository — SQLAlchemy implementation of the UserRepository protocol.

Invariants:
    - Every write commits before returning; every failure rolls back first
    - SQLAlchemyError never escapes: it is re-raised as StoreError with the operation name
    - Absent rows are reported as None (find/update) or False (delete)
    - list_page/list_all order by id so pages are stable

Design Decisions:
    - Repository owns the commit: one request = one short transaction per write
    - ORM rows converted to frozen domain Users at the boundary (core never sees ORM objects)
"""

import logging
from contextlib import asynccontextmanager
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from user_management.core.domain_types import UserId
from user_management.core.errors import StoreError
from user_management.core.user_aggregate import User
from user_management.models.user import User as UserModel

logger = logging.getLogger(__name__)


class SqlAlchemyUserRepository:
    """User persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, name: str, date_of_birth: date) -> User:
        async with self._store_errors("insert"):
            row = UserModel(name=name, dob=date_of_birth)
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
            return _to_domain(row)

    async def find_by_id(self, user_id: UserId) -> User | None:
        async with self._store_errors("find"):
            row = await self.db.get(UserModel, user_id)
            return _to_domain(row) if row else None

    async def update(
        self, user_id: UserId, name: str, date_of_birth: date,
    ) -> User | None:
        async with self._store_errors("update"):
            row = await self.db.get(UserModel, user_id)
            if row is None:
                return None
            row.name = name
            row.dob = date_of_birth
            await self.db.commit()
            await self.db.refresh(row)
            return _to_domain(row)

    async def delete(self, user_id: UserId) -> bool:
        async with self._store_errors("delete"):
            row = await self.db.get(UserModel, user_id)
            if row is None:
                return False
            await self.db.delete(row)
            await self.db.commit()
            return True

    async def list_page(self, limit: int, offset: int) -> list[User]:
        async with self._store_errors("list"):
            result = await self.db.execute(
                select(UserModel).order_by(UserModel.id).limit(limit).offset(offset),
            )
            return [_to_domain(row) for row in result.scalars().all()]

    async def list_all(self) -> list[User]:
        async with self._store_errors("list"):
            result = await self.db.execute(select(UserModel).order_by(UserModel.id))
            return [_to_domain(row) for row in result.scalars().all()]

    async def count(self) -> int:
        async with self._store_errors("count"):
            result = await self.db.execute(
                select(func.count()).select_from(UserModel),
            )
            return result.scalar_one()

    @asynccontextmanager
    async def _store_errors(self, operation: str):
        try:
            yield
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"User {operation} violated a constraint: {e}")
            raise StoreError("Integrity constraint violated", operation)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"User {operation} failed: {e}")
            raise StoreError("Database operation failed", operation)


def _to_domain(row: UserModel) -> User:
    return User(
        id=UserId(row.id),
        name=row.name,
        date_of_birth=row.dob,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
