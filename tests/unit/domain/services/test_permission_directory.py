"""Unit tests for the permission directory."""

import pytest

from deliverybase.core.errors import NotFoundError, PermissionDeniedError
from deliverybase.domain.entities import (
    DEFAULT_ROLE_GRANTS,
    ROLE_ADMIN,
    ROLE_DELIVERY,
    ROLE_USER,
    Actions,
)
from deliverybase.domain.services import PermissionDirectory, RoleService
from deliverybase.infrastructure.persistence.repositories import RoleRepository


@pytest.mark.asyncio
async def test_grants_follow_seeded_roles(db_session, make_user):
    customer = await make_user(ROLE_USER)
    courier = await make_user(ROLE_DELIVERY)
    directory = PermissionDirectory(db_session)

    customer_grants = await directory.get_grants(customer.id)
    courier_grants = await directory.get_grants(courier.id)

    assert customer_grants.role_name == ROLE_USER
    assert customer_grants.actions == frozenset(DEFAULT_ROLE_GRANTS[ROLE_USER])
    assert courier_grants.actions == frozenset(DEFAULT_ROLE_GRANTS[ROLE_DELIVERY])


@pytest.mark.asyncio
async def test_has_permission(db_session, make_user):
    customer = await make_user(ROLE_USER)
    directory = PermissionDirectory(db_session)

    assert await directory.has_permission(customer.id, Actions.CREATE_ORDER) is True
    assert await directory.has_permission(customer.id, Actions.CHANGE_ORDER_STATUS) is False


@pytest.mark.asyncio
async def test_require_raises_permission_denied(db_session, make_user):
    customer = await make_user(ROLE_USER)

    with pytest.raises(PermissionDeniedError) as exc_info:
        await PermissionDirectory(db_session).require(customer.id, Actions.GET_USERS)

    assert exc_info.value.action == Actions.GET_USERS
    assert exc_info.value.message == "User does not have permission"


@pytest.mark.asyncio
async def test_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        await PermissionDirectory(db_session).get_grants(9999)


@pytest.mark.asyncio
async def test_grant_removal_applies_to_next_check(db_session, make_user):
    """Editing a role changes the very next permission check."""
    customer = await make_user(ROLE_USER)
    directory = PermissionDirectory(db_session)
    assert await directory.has_permission(customer.id, Actions.CREATE_ORDER)

    role = await RoleRepository(db_session).get_by_name(ROLE_USER)
    remaining = [name for name in DEFAULT_ROLE_GRANTS[ROLE_USER] if name != Actions.CREATE_ORDER]
    await RoleService(db_session).edit_role(
        role_id=role.id,
        name=role.name,
        name_descriptive=role.name_descriptive,
        description=role.description,
        action_names=remaining,
    )
    await db_session.commit()

    assert await directory.has_permission(customer.id, Actions.CREATE_ORDER) is False
    assert await directory.has_permission(customer.id, Actions.CREATE_ADDRESS) is True


@pytest.mark.asyncio
async def test_admin_holds_every_action(db_session, make_user):
    admin = await make_user(ROLE_ADMIN)

    grants = await PermissionDirectory(db_session).get_grants(admin.id)

    assert grants.action_names() == sorted(DEFAULT_ROLE_GRANTS[ROLE_ADMIN])
