"""Create metro network and crowd report tables

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Stations table
    op.create_table(
        'metro_stations',
        sa.Column('station_id', sa.String(100), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('lines', sa.String(500), nullable=True),
        sa.Column('entry_count', sa.Integer(), nullable=True),
    )
    op.create_index('ix_metro_stations_name', 'metro_stations', ['name'])

    # Edges table (station ids are not foreign keys)
    op.create_table(
        'metro_edges',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('from_station_id', sa.String(100), nullable=False),
        sa.Column('to_station_id', sa.String(100), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('line', sa.String(50), nullable=True),
    )
    op.create_index('ix_metro_edges_from_station_id', 'metro_edges', ['from_station_id'])
    op.create_index('ix_metro_edges_to_station_id', 'metro_edges', ['to_station_id'])

    # Crowd reports table
    op.create_table(
        'crowd_reports',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('station_id', sa.String(100), nullable=False),
        sa.Column('level', sa.String(20), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=False, server_default=''),
        sa.Column('user_id', sa.String(100), nullable=False),
        sa.Column('photo', sa.String(500), nullable=True),
        sa.Column('likes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_crowd_reports_station_created', 'crowd_reports', ['station_id', 'created_at'])
    op.create_index('ix_crowd_reports_created', 'crowd_reports', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_crowd_reports_created', table_name='crowd_reports')
    op.drop_index('ix_crowd_reports_station_created', table_name='crowd_reports')
    op.drop_table('crowd_reports')

    op.drop_index('ix_metro_edges_to_station_id', table_name='metro_edges')
    op.drop_index('ix_metro_edges_from_station_id', table_name='metro_edges')
    op.drop_table('metro_edges')

    op.drop_index('ix_metro_stations_name', table_name='metro_stations')
    op.drop_table('metro_stations')
