"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Absence is reported as None/False, never as an exception; store failures raise StoreError

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO; the service awaits them around pure core calls
"""

from datetime import date
from typing import Protocol

from user_management.core.domain_types import UserId
from user_management.core.user_aggregate import User


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def insert(self, name: str, date_of_birth: date) -> User: ...
    async def find_by_id(self, user_id: UserId) -> User | None: ...
    async def update(
        self, user_id: UserId, name: str, date_of_birth: date,
    ) -> User | None: ...
    async def delete(self, user_id: UserId) -> bool: ...
    async def list_page(self, limit: int, offset: int) -> list[User]: ...
    async def list_all(self) -> list[User]: ...
    async def count(self) -> int: ...
