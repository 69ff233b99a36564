"""create subscribers table

Revision ID: 0001_create_subscribers
Revises:
Create Date: 2025-11-03 10:12:41.508214

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_create_subscribers'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'subscribers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('phone_e164', sa.String(length=20), nullable=True),
        sa.Column('opted_out', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_subscribers_id', 'subscribers', ['id'])
    op.create_index('ix_subscribers_phone_e164', 'subscribers', ['phone_e164'])
    op.create_index(
        'uq_subscribers_active_email',
        'subscribers',
        ['email'],
        unique=True,
        sqlite_where=sa.text('is_active = 1 AND email IS NOT NULL'),
        postgresql_where=sa.text('is_active AND email IS NOT NULL'),
    )
    op.create_index(
        'uq_subscribers_active_phone',
        'subscribers',
        ['phone_e164'],
        unique=True,
        sqlite_where=sa.text('is_active = 1 AND phone_e164 IS NOT NULL'),
        postgresql_where=sa.text('is_active AND phone_e164 IS NOT NULL'),
    )


def downgrade() -> None:
    op.drop_index('uq_subscribers_active_phone', table_name='subscribers')
    op.drop_index('uq_subscribers_active_email', table_name='subscribers')
    op.drop_index('ix_subscribers_phone_e164', table_name='subscribers')
    op.drop_index('ix_subscribers_id', table_name='subscribers')
    op.drop_table('subscribers')
