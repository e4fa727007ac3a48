"""create subscriptions, subscription tokens and users

Revision ID: 3f1b2c9d4e7a
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '3f1b2c9d4e7a'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column(
            'subscribed_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('(CURRENT_TIMESTAMP)'),
            nullable=False,
        ),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.CheckConstraint(
            "status IN ('pending_confirmation', 'confirmed')",
            name=op.f('ck_subscriptions_status_valid'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_subscriptions')),
        sa.UniqueConstraint('email', name='uq_subscriptions_email'),
    )
    op.create_table(
        'subscription_tokens',
        sa.Column('subscription_token', sa.String(length=25), nullable=False),
        sa.Column('subscriber_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(
            ['subscriber_id'],
            ['subscriptions.id'],
            name=op.f('fk_subscription_tokens_subscriber_id_subscriptions'),
        ),
        sa.PrimaryKeyConstraint('subscription_token', name=op.f('pk_subscription_tokens')),
    )
    with op.batch_alter_table('subscription_tokens', schema=None) as batch_op:
        batch_op.create_index(
            batch_op.f('ix_subscription_tokens_subscriber_id'), ['subscriber_id'], unique=False
        )
    op.create_table(
        'users',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(length=150), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('user_id', name=op.f('pk_users')),
        sa.UniqueConstraint('username', name='uq_users_username'),
    )


def downgrade():
    op.drop_table('users')
    with op.batch_alter_table('subscription_tokens', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_subscription_tokens_subscriber_id'))
    op.drop_table('subscription_tokens')
    op.drop_table('subscriptions')
