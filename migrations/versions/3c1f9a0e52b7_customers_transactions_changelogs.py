"""Customers, payment transactions and audit changelogs

Revision ID: 3c1f9a0e52b7
Revises:
Create Date: 2026-10-19 10:12:41.208113
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3c1f9a0e52b7'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'customers',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=False),
        sa.Column('monthly_plan_amount', sa.Float(), nullable=False),
        sa.Column('total_due', sa.Float(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('due_day', sa.Integer(), nullable=False),
        sa.Column('photo', sa.Text(), nullable=True),
        sa.Column('last_billed_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'transactions',
        sa.Column('seq', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('customer_id', sa.String(length=32), nullable=False),
        sa.Column('collector_id', sa.String(length=64), nullable=False),
        sa.Column('collector_name', sa.String(), nullable=False),
        sa.Column('collector_role', sa.String(length=16), nullable=False),
        sa.Column('amount_paid', sa.Float(), nullable=False),
        sa.Column('payment_type', sa.String(length=8), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('remaining_due_after', sa.Float(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('idempotency_key', sa.String(length=128), nullable=True),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ),
        sa.PrimaryKeyConstraint('seq'),
        sa.UniqueConstraint('idempotency_key')
    )
    with op.batch_alter_table('transactions', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_transactions_id'), ['id'], unique=True)
        batch_op.create_index(batch_op.f('ix_transactions_customer_id'), ['customer_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_transactions_date'), ['date'], unique=False)

    op.create_table(
        'changelogs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('entity_type', sa.String(length=50), nullable=False),
        sa.Column('entity_id', sa.String(length=64), nullable=False),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('changed_by', sa.String(length=64), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=True),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('changelogs', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_changelogs_timestamp'), ['timestamp'], unique=False)


def downgrade():
    with op.batch_alter_table('changelogs', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_changelogs_timestamp'))
    op.drop_table('changelogs')

    with op.batch_alter_table('transactions', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_transactions_date'))
        batch_op.drop_index(batch_op.f('ix_transactions_customer_id'))
        batch_op.drop_index(batch_op.f('ix_transactions_id'))
    op.drop_table('transactions')

    op.drop_table('customers')
