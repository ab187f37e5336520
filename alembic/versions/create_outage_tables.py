"""create users, user_profile, outages and subscriptions

Initial schema: accounts with a separate profile row, the scraped outages
table and simulated notification subscriptions.

Revision ID: create_outage_tables
Revises:
Create Date: 2025-01-12 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'create_outage_tables'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'user_profile',
        sa.Column('id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('address', sa.String(length=300), server_default='', nullable=False),
        sa.Column('city', sa.String(length=120), server_default='', nullable=False),
        sa.Column('district', sa.String(length=120), server_default='', nullable=False),
        sa.Column('notifications', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('email_notifications', sa.Boolean(), server_default='false', nullable=False),
    )
    op.create_index('ix_user_profile_district', 'user_profile', ['district'])

    op.create_table(
        'outages',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('source', sa.String(length=120), nullable=True),
        sa.Column('affected_area', sa.String(length=500), nullable=True),
        sa.Column('address', sa.String(length=300), nullable=True),
        sa.Column('district', sa.String(length=120), nullable=True),
        sa.Column('service_type', sa.String(length=20), nullable=True),
        sa.Column('category', sa.String(length=40), nullable=True),
        sa.Column('description', sa.String(length=4000), nullable=True),
        sa.Column('severity', sa.String(length=10), nullable=True),
        sa.Column('start_time', sa.String(length=40), nullable=True),
        sa.Column('end_time', sa.String(length=40), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_outages_district', 'outages', ['district'])
    op.create_index('ix_outages_service_type', 'outages', ['service_type'])
    op.create_index('ix_outages_category', 'outages', ['category'])
    op.create_index('ix_outages_created_at', 'outages', ['created_at'])

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('active', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('payment_method', sa.String(length=20), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(length=3), server_default='BGN', nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_subscriptions_user_id', 'subscriptions', ['user_id'])
    op.create_index('ix_subscriptions_expires_at', 'subscriptions', ['expires_at'])
    op.create_index(
        'uq_subscriptions_active_user', 'subscriptions', ['user_id'], unique=True,
        postgresql_where=sa.text('active'), sqlite_where=sa.text('active'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('subscriptions')
    op.drop_table('outages')
    op.drop_table('user_profile')
    op.drop_table('users')
