"""Unit tests for role grants and the seeded catalogue."""

import pytest

from deliverybase.domain.entities import (
    DEFAULT_ACTIONS,
    DEFAULT_ROLE_GRANTS,
    DEFAULT_ROLES,
    ROLE_ADMIN,
    ROLE_DELIVERY,
    ROLE_USER,
    Actions,
    RoleGrants,
)


def test_allows_checks_membership():
    grants = RoleGrants(role_name=ROLE_USER, actions=frozenset({Actions.CREATE_ORDER}))

    assert grants.allows(Actions.CREATE_ORDER)
    assert not grants.allows(Actions.GET_ORDERS)


def test_action_names_sorted():
    grants = RoleGrants(
        role_name=ROLE_USER,
        actions=frozenset({Actions.GET_ADDRESS, Actions.CREATE_ORDER}),
    )

    assert grants.action_names() == [Actions.CREATE_ORDER, Actions.GET_ADDRESS]


def test_role_name_required():
    with pytest.raises(ValueError):
        RoleGrants(role_name="")


def test_catalogue_names_are_unique():
    names = [action.name for action in DEFAULT_ACTIONS]

    assert len(names) == len(set(names))


def test_admin_is_granted_everything():
    assert set(DEFAULT_ROLE_GRANTS[ROLE_ADMIN]) == {action.name for action in DEFAULT_ACTIONS}


def test_default_grants_reference_catalogue():
    catalogue = {action.name for action in DEFAULT_ACTIONS}

    for role_name, grants in DEFAULT_ROLE_GRANTS.items():
        assert set(grants) <= catalogue, role_name


def test_customer_cannot_change_order_status():
    assert Actions.CHANGE_ORDER_STATUS not in DEFAULT_ROLE_GRANTS[ROLE_USER]
    assert Actions.CHANGE_ORDER_STATUS in DEFAULT_ROLE_GRANTS[ROLE_DELIVERY]


def test_every_default_role_has_grants():
    assert {name for name, _, _ in DEFAULT_ROLES} == set(DEFAULT_ROLE_GRANTS)


def test_roles_compare_by_action_names():
    first = RoleGrants(role_name="ROLE_A", actions=frozenset({Actions.GET_ORDERS}))
    second = RoleGrants(role_name="ROLE_B", actions=frozenset({Actions.GET_ORDERS}))

    assert first == second
    assert first != RoleGrants(role_name="ROLE_A", actions=frozenset({Actions.GET_USERS}))
