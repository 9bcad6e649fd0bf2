"""Unit tests for RoleService."""

import pytest
from sqlalchemy import select

from deliverybase.core.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from deliverybase.domain.entities import (
    DEFAULT_ACTIONS,
    DEFAULT_ROLE_GRANTS,
    ROLE_ADMIN,
    ROLE_DELIVERY,
    ROLE_USER,
    Actions,
)
from deliverybase.domain.services import RoleService
from deliverybase.infrastructure.persistence.models import UserModel
from deliverybase.infrastructure.persistence.repositories import (
    RoleActionRepository,
    RoleRepository,
)


@pytest.fixture
def role_service(db_session) -> RoleService:
    return RoleService(db_session)


async def _create_dispatcher_role(role_service, db_session):
    role = await role_service.create_role(
        name="ROLE_DISPATCHER",
        name_descriptive="Dispatcher",
        description="Assigns orders",
        action_names=[Actions.GET_ORDERS, Actions.ASSIGN_DELIVERY],
    )
    await db_session.commit()
    return role


class TestCreateRole:

    @pytest.mark.asyncio
    async def test_create_role_with_grants(self, role_service, db_session):
        role = await _create_dispatcher_role(role_service, db_session)

        _, actions = await role_service.get_role_actions(role.id)

        assert role.active is True
        assert set(actions) == {Actions.GET_ORDERS, Actions.ASSIGN_DELIVERY}

    @pytest.mark.asyncio
    async def test_duplicate_name(self, role_service, db_session):
        await _create_dispatcher_role(role_service, db_session)

        with pytest.raises(ConflictError):
            await role_service.create_role(
                name="ROLE_DISPATCHER",
                name_descriptive="Other label",
                description=None,
                action_names=[Actions.GET_ORDERS],
            )

    @pytest.mark.asyncio
    async def test_duplicate_label(self, role_service, db_session):
        await _create_dispatcher_role(role_service, db_session)

        with pytest.raises(ConflictError):
            await role_service.create_role(
                name="ROLE_OTHER",
                name_descriptive="Dispatcher",
                description=None,
                action_names=[Actions.GET_ORDERS],
            )

    @pytest.mark.asyncio
    async def test_unknown_action(self, role_service):
        with pytest.raises(BadRequestError, match="NOT_AN_ACTION"):
            await role_service.create_role(
                name="ROLE_X",
                name_descriptive="X",
                description=None,
                action_names=[Actions.GET_ORDERS, "NOT_AN_ACTION"],
            )

    @pytest.mark.asyncio
    async def test_duplicated_action_names(self, role_service):
        """Every requested name must resolve to its own action."""
        with pytest.raises(BadRequestError):
            await role_service.create_role(
                name="ROLE_X",
                name_descriptive="X",
                description=None,
                action_names=[Actions.GET_ORDERS, Actions.GET_ORDERS],
            )


class TestEditRole:

    @pytest.mark.asyncio
    async def test_edit_replaces_grant_set(self, role_service, db_session):
        role = await _create_dispatcher_role(role_service, db_session)

        await role_service.edit_role(
            role_id=role.id,
            name="ROLE_DISPATCHER",
            name_descriptive="Dispatcher",
            description="Only lists orders",
            action_names=[Actions.GET_ORDERS, Actions.GET_DELIVERIES],
        )
        await db_session.commit()

        names = await RoleActionRepository(db_session).get_action_names(role.id)
        assert set(names) == {Actions.GET_ORDERS, Actions.GET_DELIVERIES}
        assert role.description == "Only lists orders"

    @pytest.mark.asyncio
    async def test_failed_edit_leaves_grants_after_rollback(self, role_service, db_session):
        role = await _create_dispatcher_role(role_service, db_session)
        role_id = role.id

        with pytest.raises(BadRequestError):
            await role_service.edit_role(
                role_id=role_id,
                name="ROLE_DISPATCHER",
                name_descriptive="Dispatcher",
                description=None,
                action_names=["NOT_AN_ACTION"],
            )
        await db_session.rollback()

        names = await RoleActionRepository(db_session).get_action_names(role_id)
        assert set(names) == {Actions.GET_ORDERS, Actions.ASSIGN_DELIVERY}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role_name", [ROLE_ADMIN, ROLE_USER, ROLE_DELIVERY])
    async def test_foundational_role_cannot_be_renamed(self, role_service, db_session, role_name):
        role = await RoleRepository(db_session).get_by_name(role_name)

        with pytest.raises(ForbiddenError):
            await role_service.edit_role(
                role_id=role.id,
                name="ROLE_RENAMED",
                name_descriptive=role.name_descriptive,
                description=None,
                action_names=list(DEFAULT_ROLE_GRANTS[role_name]),
            )

    @pytest.mark.asyncio
    async def test_name_taken_by_other_role(self, role_service, db_session):
        role = await _create_dispatcher_role(role_service, db_session)

        with pytest.raises(ConflictError):
            await role_service.edit_role(
                role_id=role.id,
                name=ROLE_USER,
                name_descriptive="Dispatcher",
                description=None,
                action_names=[Actions.GET_ORDERS],
            )

    @pytest.mark.asyncio
    async def test_missing_role(self, role_service):
        with pytest.raises(NotFoundError):
            await role_service.edit_role(9999, "ROLE_X", "X", None, [Actions.GET_ORDERS])


class TestDeleteAndActivate:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role_name", [ROLE_ADMIN, ROLE_USER])
    async def test_protected_role_cannot_be_deleted(self, role_service, db_session, role_name):
        role = await RoleRepository(db_session).get_by_name(role_name)

        with pytest.raises(ForbiddenError):
            await role_service.delete_role(role.id)

        assert role.active is True

    @pytest.mark.asyncio
    async def test_delete_moves_users_to_default_role(self, role_service, db_session, make_user):
        role = await _create_dispatcher_role(role_service, db_session)
        user = await make_user("ROLE_DISPATCHER")

        deleted = await role_service.delete_role(role.id)
        await db_session.commit()

        user_role = await RoleRepository(db_session).get_by_name(ROLE_USER)
        role_id = (
            await db_session.execute(select(UserModel.role_id).where(UserModel.id == user.id))
        ).scalar_one()
        assert deleted.active is False
        assert role_id == user_role.id

    @pytest.mark.asyncio
    async def test_activate_inactive_role(self, role_service, db_session):
        role = await _create_dispatcher_role(role_service, db_session)
        await role_service.delete_role(role.id)
        await db_session.commit()

        activated = await role_service.activate_role(role.id)

        assert activated.active is True

    @pytest.mark.asyncio
    async def test_activate_active_role(self, role_service, db_session):
        role = await RoleRepository(db_session).get_by_name(ROLE_DELIVERY)

        with pytest.raises(ForbiddenError):
            await role_service.activate_role(role.id)

    @pytest.mark.asyncio
    async def test_delivery_role_can_be_deleted(self, role_service, db_session):
        role = await RoleRepository(db_session).get_by_name(ROLE_DELIVERY)

        deleted = await role_service.delete_role(role.id)

        assert deleted.active is False


class TestListActions:

    @pytest.mark.asyncio
    async def test_first_page_ordered_by_id(self, role_service):
        actions, total, pages = await role_service.list_actions(page=1, limit=5)

        assert [action.name for action in actions] == [
            definition.name for definition in DEFAULT_ACTIONS[:5]
        ]
        assert total == len(DEFAULT_ACTIONS)
        assert pages == -(-len(DEFAULT_ACTIONS) // 5)

    @pytest.mark.asyncio
    async def test_filter_by_type(self, role_service):
        actions, total, pages = await role_service.list_actions(action_type="ROUTES")

        assert [action.name for action in actions] == [Actions.GENERATE_ROUTE]
        assert total == 1
        assert pages == 1

    @pytest.mark.asyncio
    async def test_page_past_the_end(self, role_service):
        actions, total, _ = await role_service.list_actions(page=100, limit=5)

        assert actions == []
        assert total == len(DEFAULT_ACTIONS)
