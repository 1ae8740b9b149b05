"""User Routes — HTTP surface for user CRUD and paginated listing.

Invariants:
    - UserService is built per request from the request's DB session (get_user_service)
    - Non-integer, non-positive or above-BIGINT ids, malformed JSON and non-integer query values -> 400
    - Out-of-range page/limit are clamped by the pagination policy, never rejected
    - DELETE returns 204 with an empty body

Design Decisions:
    - Domain errors raised by the service reach the global handlers untouched
      (UserValidationError -> 400, ResourceNotFoundError -> 404, StoreError -> 500)
    - page_size accepted as an alias of limit for clients of the older API
    - /all registered before /{user_id} so the literal path wins
"""

import logging

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from user_management.core.domain_types import MAX_USER_ID
from user_management.infrastructure.database import get_db
from user_management.infrastructure.user_repository import SqlAlchemyUserRepository
from user_management.schemas.user import (
    PaginatedUsersResponse, UserCreate, UserResponse, UserUpdate,
)
from user_management.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


def get_user_service(
    request: Request, db: AsyncSession = Depends(get_db),
) -> UserService:
    """FastAPI dependency: UserService over the request's DB session.

    Domain limits come from the Settings the app was built with (create_app).
    """
    settings = request.app.state.settings
    return UserService(
        SqlAlchemyUserRepository(db), max_age_years=settings.max_age_years,
    )


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate, service: UserService = Depends(get_user_service),
):
    """Create a user from name and date of birth (YYYY-MM-DD)."""
    return await service.create_user(body.name, body.dob)


@router.get("", response_model=PaginatedUsersResponse)
async def list_users(
    page: int | None = Query(None),
    limit: int | None = Query(None),
    page_size: int | None = Query(None),
    service: UserService = Depends(get_user_service),
):
    """List users, one page at a time."""
    return await service.list_users(
        page, limit if limit is not None else page_size,
    )


@router.get("/all", response_model=list[UserResponse])
async def list_all_users(service: UserService = Depends(get_user_service)):
    """List every user without pagination."""
    return await service.list_all_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int = Path(gt=0, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    """Get one user with age computed now."""
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    body: UserUpdate,
    user_id: int = Path(gt=0, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    """Update a user; omitted or empty fields keep their stored values."""
    return await service.update_user(user_id, body.name, body.dob)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int = Path(gt=0, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    """Delete a user permanently."""
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
