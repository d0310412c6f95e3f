import asyncio

import pytest

from users_api.core.errors import DuplicateKeyError, InactiveSubjectError
from users_api.model.users import (
    CreateUserRequest,
    UpdateUserDetailsRequest,
    UpdateUserStatusRequest,
    UserStatus,
)


def payload(username="alice"):
    return CreateUserRequest(username=username, first_name="Alice", last_name="Liddell")


async def deactivate(service, username="alice"):
    await service.update_user_status(username, UpdateUserStatusRequest(status=UserStatus.INACTIVE))


@pytest.mark.asyncio
async def test_create_then_get_returns_equal_independent_record(service):
    created = await service.create(payload())

    found = await service.get_by_username("alice")
    assert found == created

    found.first_name = "Mutated"
    assert (await service.get_by_username("alice")).first_name == "Alice"


@pytest.mark.asyncio
async def test_create_duplicate_raises(service):
    await service.create(payload())

    with pytest.raises(DuplicateKeyError):
        await service.create(payload())


@pytest.mark.asyncio
async def test_count_passes_through(service):
    assert await service.count() == 0

    await service.create(payload())

    assert await service.count() == 1


@pytest.mark.asyncio
async def test_get_all_passes_through(service):
    for name in ("a", "b", "c", "d", "e"):
        await service.create(payload(name))

    page = await service.get_all(2, 3)

    assert [u.username for u in page.list] == ["d", "e"]
    assert page.page_count == 2


# update_user_details

@pytest.mark.asyncio
async def test_update_details_missing_user(service):
    assert await service.update_user_details("nobody", UpdateUserDetailsRequest(first_name="X")) is None


@pytest.mark.asyncio
async def test_update_details_skips_unset_fields(service):
    created = await service.create(payload())

    user = await service.update_user_details("alice", UpdateUserDetailsRequest(last_name="Pleasance"))

    assert user.first_name == "Alice"
    assert user.last_name == "Pleasance"
    assert user.creation_time == created.creation_time
    assert user.last_update_time >= created.last_update_time


@pytest.mark.asyncio
async def test_update_details_rejected_for_inactive_user(service):
    await service.create(payload())
    await deactivate(service)

    with pytest.raises(InactiveSubjectError):
        await service.update_user_details("alice", UpdateUserDetailsRequest(first_name="Al"))

    assert (await service.get_by_username("alice")).first_name == "Alice"


# update_user_status

@pytest.mark.asyncio
async def test_update_status_missing_user(service):
    assert await service.update_user_status("nobody", UpdateUserStatusRequest(status=UserStatus.INACTIVE)) is None


@pytest.mark.asyncio
async def test_status_can_be_reactivated(service):
    await service.create(payload())
    await deactivate(service)

    user = await service.update_user_status("alice", UpdateUserStatusRequest(status=UserStatus.ACTIVE))

    assert user.status == UserStatus.ACTIVE
    updated = await service.update_user_details("alice", UpdateUserDetailsRequest(first_name="Al"))
    assert updated.first_name == "Al"


@pytest.mark.asyncio
async def test_inactive_user_can_still_be_read_and_removed(service):
    await service.create(payload())
    await deactivate(service)

    assert (await service.get_by_username("alice")).status == UserStatus.INACTIVE
    assert await service.remove("alice") is True
    assert await service.remove("alice") is False


# increase_logins_counter

@pytest.mark.asyncio
async def test_increase_logins_missing_user(service):
    assert await service.increase_logins_counter("nobody") is None


@pytest.mark.asyncio
async def test_login_counter_scenario(service):
    user = await service.create(payload())
    assert user.logins_counter == 0
    assert user.status == UserStatus.ACTIVE

    await service.increase_logins_counter("alice")
    user = await service.increase_logins_counter("alice")
    assert user.logins_counter == 2

    await deactivate(service)
    with pytest.raises(InactiveSubjectError):
        await service.increase_logins_counter("alice")

    assert (await service.get_by_username("alice")).logins_counter == 2


@pytest.mark.asyncio
async def test_concurrent_logins_are_all_counted(service):
    await service.create(payload())

    await asyncio.gather(*(service.increase_logins_counter("alice") for _ in range(20)))

    assert (await service.get_by_username("alice")).logins_counter == 20
