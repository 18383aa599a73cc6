"""Create devices table for push notifications

Revision ID: create_devices_table
Revises:
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_devices_table'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'devices',
        sa.Column('user', sa.String(), nullable=False),
        sa.Column('token', sa.String(), nullable=False),
        sa.Column('mail', sa.String(), nullable=False, server_default=''),
        sa.Column('password', sa.String(), nullable=False, server_default=''),
        sa.Column('device_type', sa.String(), nullable=False, server_default=''),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('user', 'token')
    )
    op.create_index('ix_devices_user_active', 'devices', ['user', 'active'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_devices_user_active', table_name='devices')
    op.drop_table('devices')
