"""seed_action_catalogue

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18 10:05:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from deliverybase.domain.entities import DEFAULT_ACTIONS, DEFAULT_ROLE_GRANTS, DEFAULT_ROLES

# revision identifiers, used by Alembic.
revision: str = '0002'
down_revision: str | Sequence[str] | None = '0001'
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Seed the action catalogue and the default roles with their grants."""
    actions_table = sa.table(
        'actions',
        sa.column('id', sa.Integer),
        sa.column('name', sa.String),
        sa.column('description', sa.String),
        sa.column('type', sa.String),
    )
    roles_table = sa.table(
        'roles',
        sa.column('id', sa.Integer),
        sa.column('name', sa.String),
        sa.column('name_descriptive', sa.String),
        sa.column('description', sa.String),
        sa.column('active', sa.Boolean),
    )
    role_actions_table = sa.table(
        'role_actions',
        sa.column('role_id', sa.Integer),
        sa.column('action_id', sa.Integer),
    )

    action_ids = {definition.name: index for index, definition in enumerate(DEFAULT_ACTIONS, start=1)}
    op.bulk_insert(actions_table, [
        {
            'id': action_ids[definition.name],
            'name': definition.name,
            'description': definition.description,
            'type': definition.type,
        }
        for definition in DEFAULT_ACTIONS
    ])

    role_ids = {name: index for index, (name, _, _) in enumerate(DEFAULT_ROLES, start=1)}
    op.bulk_insert(roles_table, [
        {
            'id': role_ids[name],
            'name': name,
            'name_descriptive': name_descriptive,
            'description': description,
            'active': True,
        }
        for name, name_descriptive, description in DEFAULT_ROLES
    ])

    op.bulk_insert(role_actions_table, [
        {'role_id': role_ids[role_name], 'action_id': action_ids[action_name]}
        for role_name, grants in DEFAULT_ROLE_GRANTS.items()
        for action_name in grants
    ])


def downgrade() -> None:
    """Remove the seeded catalogue."""
    op.execute("DELETE FROM role_actions")
    op.execute("DELETE FROM roles")
    op.execute("DELETE FROM actions")
