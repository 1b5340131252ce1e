"""Initial migration: POI aggregate tables

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.sql import func

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None

POI_STATUS = sa.Enum('ONLINE', 'OFFLINE', 'MAINTENANCE', name='poi_status')
DAY_OF_WEEK = sa.Enum(
    'MONDAY', 'TUESDAY', 'WEDNESDAY', 'THURSDAY', 'FRIDAY', 'SATURDAY', 'SUNDAY',
    name='day_of_week',
)


def upgrade():
    # Create pois table (aggregate root)
    op.create_table(
        'pois',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('status', POI_STATUS, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=func.now(), nullable=False),
    )

    # Create addresses table: at most one per POI
    op.create_table(
        'addresses',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('poi_id', sa.String(length=36), sa.ForeignKey('pois.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('zip_code', sa.String(length=20), nullable=False),
        sa.Column('city', sa.String(length=255), nullable=False),
        sa.Column('street', sa.String(length=255), nullable=False),
        sa.Column('house_number', sa.String(length=20), nullable=False),
    )

    # Create opening_hours table
    op.create_table(
        'opening_hours',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('poi_id', sa.String(length=36), sa.ForeignKey('pois.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', DAY_OF_WEEK, nullable=False),
        sa.Column('open_time', sa.String(length=5), nullable=False, comment="HH:MM, 24h"),
        sa.Column('close_time', sa.String(length=5), nullable=False, comment="HH:MM, 24h"),
        sa.Column('is_closed', sa.Boolean(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, comment="Order of the entry in the submitted schedule"),
    )
    op.create_index('ix_opening_hours_poi_id', 'opening_hours', ['poi_id'])

    # Create pumps -> fuel_products -> prices
    op.create_table(
        'pumps',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('poi_id', sa.String(length=36), sa.ForeignKey('pois.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
    )
    op.create_index('ix_pumps_poi_id', 'pumps', ['poi_id'])

    op.create_table(
        'fuel_products',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('pump_id', sa.String(length=36), sa.ForeignKey('pumps.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
    )
    op.create_index('ix_fuel_products_pump_id', 'fuel_products', ['pump_id'])

    op.create_table(
        'prices',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('fuel_product_id', sa.String(length=36), sa.ForeignKey('fuel_products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False, comment="ISO-4217 currency code"),
    )
    op.create_index('ix_prices_fuel_product_id', 'prices', ['fuel_product_id'])


def downgrade():
    op.drop_index('ix_prices_fuel_product_id', table_name='prices')
    op.drop_table('prices')
    op.drop_index('ix_fuel_products_pump_id', table_name='fuel_products')
    op.drop_table('fuel_products')
    op.drop_index('ix_pumps_poi_id', table_name='pumps')
    op.drop_table('pumps')
    op.drop_index('ix_opening_hours_poi_id', table_name='opening_hours')
    op.drop_table('opening_hours')
    op.drop_table('addresses')
    op.drop_table('pois')
    DAY_OF_WEEK.drop(op.get_bind(), checkfirst=True)
    POI_STATUS.drop(op.get_bind(), checkfirst=True)
