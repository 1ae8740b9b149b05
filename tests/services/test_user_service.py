"""User Service — orchestration over an in-memory gateway with a fixed clock.

Invariants:
    - Validation failures never reach the gateway (no writes recorded)
    - Missing users raise ResourceNotFoundError for get/update/delete
    - Ages computed with the injected clock
"""

from datetime import date

import pytest

from user_management.core.errors import (
    ResourceNotFoundError, StoreError, UserValidationError,
)
from user_management.services.user_service import UserService


@pytest.fixture
def service(fake_repository, fixed_today):
    return UserService(fake_repository, clock=lambda: fixed_today)


async def test_create_returns_projection_with_age(service):
    created = await service.create_user("Alice", "1990-05-10")
    assert created == {"id": 1, "name": "Alice", "dob": "1990-05-10", "age": 34}


async def test_age_depends_on_clock_not_storage(fake_repository):
    """Same stored row, different days, different ages — no write in between."""
    writer = UserService(fake_repository, clock=lambda: date(2024, 5, 9))
    created = await writer.create_user("Alice", "1990-05-10")
    assert created["age"] == 33

    reader = UserService(fake_repository, clock=lambda: date(2024, 5, 10))
    assert (await reader.get_user(created["id"]))["age"] == 34
    assert fake_repository.writes == ["insert"]


async def test_create_invalid_does_not_write(service, fake_repository):
    with pytest.raises(UserValidationError) as exc_info:
        await service.create_user("x" * 101, "2999-01-01")
    assert [v.field for v in exc_info.value.violations] == ["name", "dob"]
    assert fake_repository.writes == []


async def test_get_missing_user_raises_not_found(service):
    with pytest.raises(ResourceNotFoundError):
        await service.get_user(99)


@pytest.mark.parametrize("user_id", [0, -1])
async def test_non_positive_ids_are_not_found(service, fake_repository, user_id):
    with pytest.raises(ResourceNotFoundError):
        await service.get_user(user_id)
    with pytest.raises(ResourceNotFoundError):
        await service.delete_user(user_id)
    assert fake_repository.writes == []


async def test_lenient_update_with_empty_fields_keeps_record(service, fake_repository):
    created = await service.create_user("A" * 2, "1990-01-01")
    updated = await service.update_user(created["id"], "", "")
    assert updated == created
    stored = fake_repository.rows[created["id"]]
    assert (stored.name, stored.date_of_birth) == ("AA", date(1990, 1, 1))


async def test_update_single_field(service):
    created = await service.create_user("Alice", "1990-05-10")
    updated = await service.update_user(created["id"], None, "1991-05-10")
    assert updated["name"] == "Alice"
    assert updated["dob"] == "1991-05-10"
    assert updated["age"] == 33


async def test_invalid_update_does_not_write(service, fake_repository):
    created = await service.create_user("Alice", "1990-05-10")
    with pytest.raises(UserValidationError):
        await service.update_user(created["id"], "B", None)
    assert fake_repository.writes == ["insert"]
    assert fake_repository.rows[created["id"]].name == "Alice"


async def test_update_missing_user_raises_not_found(service, fake_repository):
    with pytest.raises(ResourceNotFoundError):
        await service.update_user(5, "Alice", "1990-05-10")
    assert fake_repository.writes == []


async def test_update_of_concurrently_deleted_user_raises_not_found(
    service, fake_repository,
):
    created = await service.create_user("Alice", "1990-05-10")
    original_update = fake_repository.update

    async def update_after_delete(user_id, name, date_of_birth):
        fake_repository.rows.pop(user_id)
        return await original_update(user_id, name, date_of_birth)

    fake_repository.update = update_after_delete
    with pytest.raises(ResourceNotFoundError):
        await service.update_user(created["id"], "Alicia", None)


async def test_delete_then_get_is_not_found(service):
    created = await service.create_user("Alice", "1990-05-10")
    await service.delete_user(created["id"])
    with pytest.raises(ResourceNotFoundError):
        await service.get_user(created["id"])
    with pytest.raises(ResourceNotFoundError):
        await service.delete_user(created["id"])


async def test_list_users_paginates_and_counts(service):
    for i in range(25):
        await service.create_user(f"User {i:02d}", "2000-01-01")

    page = await service.list_users(3, 10)
    assert page["page"] == 3
    assert page["limit"] == 10
    assert page["total"] == 25
    assert page["total_pages"] == 3
    assert [u["name"] for u in page["data"]] == [f"User {i:02d}" for i in range(20, 25)]


async def test_list_users_clamps_inputs(service):
    await service.create_user("Alice", "1990-05-10")
    page = await service.list_users(0, 500)
    assert (page["page"], page["limit"]) == (1, 100)


async def test_list_users_empty_store(service):
    page = await service.list_users(None, None)
    assert page == {"data": [], "page": 1, "limit": 10, "total": 0, "total_pages": 0}


async def test_list_all_users(service):
    await service.create_user("Alice", "1990-05-10")
    await service.create_user("Bob", "1985-01-01")
    assert [u["name"] for u in await service.list_all_users()] == ["Alice", "Bob"]


async def test_store_errors_propagate(service, fake_repository):
    async def failing_count():
        raise StoreError("Connection or operational error", "count")

    fake_repository.count = failing_count
    with pytest.raises(StoreError):
        await service.list_users(1, 10)


async def test_max_age_is_injected(fake_repository, fixed_today):
    strict = UserService(fake_repository, max_age_years=30, clock=lambda: fixed_today)
    with pytest.raises(UserValidationError):
        await strict.create_user("Alice", "1990-05-10")
