"""Create countries and markets tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'countries',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('iso_code', sa.String(8), nullable=False),
        sa.Column('name', sa.String(128), nullable=False),
        sa.Column('deleted', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_countries_iso_code'), 'countries', ['iso_code'], unique=False)
    op.create_index(op.f('ix_countries_deleted'), 'countries', ['deleted'], unique=False)
    op.create_index(
        'uq_countries_iso_code_active', 'countries', ['iso_code'],
        unique=True, postgresql_where=sa.text('NOT deleted'),
    )
    op.create_index(
        'uq_countries_name_active', 'countries', ['name'],
        unique=True, postgresql_where=sa.text('NOT deleted'),
    )

    op.create_table(
        'markets',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('market_code', sa.String(32), nullable=False),
        sa.Column('name', sa.String(128), nullable=False),
        sa.Column('country_iso_codes', sa.JSON(), nullable=False),
        sa.Column('deleted', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_markets_market_code'), 'markets', ['market_code'], unique=False)
    op.create_index(op.f('ix_markets_deleted'), 'markets', ['deleted'], unique=False)
    op.create_index(
        'uq_markets_market_code_active', 'markets', ['market_code'],
        unique=True, postgresql_where=sa.text('NOT deleted'),
    )
    op.create_index(
        'uq_markets_name_active', 'markets', ['name'],
        unique=True, postgresql_where=sa.text('NOT deleted'),
    )


def downgrade() -> None:
    op.drop_index('uq_markets_name_active', table_name='markets')
    op.drop_index('uq_markets_market_code_active', table_name='markets')
    op.drop_index(op.f('ix_markets_deleted'), table_name='markets')
    op.drop_index(op.f('ix_markets_market_code'), table_name='markets')
    op.drop_table('markets')
    op.drop_index('uq_countries_name_active', table_name='countries')
    op.drop_index('uq_countries_iso_code_active', table_name='countries')
    op.drop_index(op.f('ix_countries_deleted'), table_name='countries')
    op.drop_index(op.f('ix_countries_iso_code'), table_name='countries')
    op.drop_table('countries')
