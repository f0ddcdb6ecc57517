"""Create catalog tables

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-19 10:12:04.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade():
    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('name', 'type', name='uq_events_name_type'),
    )
    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('name', 'type', name='uq_properties_name_type'),
    )
    op.create_table(
        'tracking_plans',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'tracking_plan_events',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'tracking_plan_id',
            sa.Integer(),
            sa.ForeignKey('tracking_plans.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id'), nullable=False),
        sa.Column('additional_properties', sa.Boolean(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
    )
    op.create_index('ix_tracking_plan_events_tracking_plan_id', 'tracking_plan_events', ['tracking_plan_id'])
    op.create_index('ix_tracking_plan_events_event_id', 'tracking_plan_events', ['event_id'])
    op.create_table(
        'tracking_plan_event_properties',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'tracking_plan_event_id',
            sa.Integer(),
            sa.ForeignKey('tracking_plan_events.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.id'), nullable=False),
        sa.Column('required', sa.Boolean(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
    )
    op.create_index(
        'ix_tracking_plan_event_properties_tracking_plan_event_id',
        'tracking_plan_event_properties',
        ['tracking_plan_event_id'],
    )
    op.create_index(
        'ix_tracking_plan_event_properties_property_id',
        'tracking_plan_event_properties',
        ['property_id'],
    )


def downgrade():
    op.drop_table('tracking_plan_event_properties')
    op.drop_table('tracking_plan_events')
    op.drop_table('tracking_plans')
    op.drop_table('properties')
    op.drop_table('events')
