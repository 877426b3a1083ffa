"""Initial catalog schema

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'admins',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=True),
        sa.Column('token_hash', sa.String(length=64), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_admins_email'), 'admins', ['email'], unique=True)

    op.create_table(
        'genres',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'films',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('original_title', sa.String(length=500), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('director', sa.String(length=255), nullable=True),
        sa.Column('genre', sa.String(length=500), nullable=True),
        sa.Column('trailer_url', sa.String(length=1000), nullable=True),
        sa.Column('video_url', sa.String(length=1000), nullable=True),
        sa.Column('isvip', sa.Boolean(), nullable=False),
        sa.Column('published', sa.Boolean(), nullable=False),
        sa.Column('poster', sa.String(length=1000), nullable=True),
        sa.Column('backdrop', sa.String(length=1000), nullable=True),
        sa.Column('cast', sa.JSON(), nullable=False),
        sa.Column('homepage_categories', sa.JSON(), nullable=False),
        sa.Column('tmdb_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title', 'year', name='uq_film_title_year'),
    )
    op.create_index(op.f('ix_films_tmdb_id'), 'films', ['tmdb_id'], unique=False)
    op.create_index('ix_films_published_created', 'films', ['published', 'created_at'], unique=False)

    op.create_table(
        'admin_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('admin_id', sa.Integer(), nullable=False),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('details', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['admin_id'], ['admins.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_admin_logs_admin_id'), 'admin_logs', ['admin_id'], unique=False)
    op.create_index(op.f('ix_admin_logs_action'), 'admin_logs', ['action'], unique=False)

    op.create_table(
        'series',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('genre', sa.String(length=500), nullable=True),
        sa.Column('isvip', sa.Boolean(), nullable=False),
        sa.Column('poster', sa.String(length=1000), nullable=True),
        sa.Column('backdrop', sa.String(length=1000), nullable=True),
        sa.Column('start_year', sa.Integer(), nullable=True),
        sa.Column('end_year', sa.Integer(), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_series_title'), 'series', ['title'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_series_title'), table_name='series')
    op.drop_table('series')
    op.drop_index(op.f('ix_admin_logs_action'), table_name='admin_logs')
    op.drop_index(op.f('ix_admin_logs_admin_id'), table_name='admin_logs')
    op.drop_table('admin_logs')
    op.drop_index('ix_films_published_created', table_name='films')
    op.drop_index(op.f('ix_films_tmdb_id'), table_name='films')
    op.drop_table('films')
    op.drop_table('genres')
    op.drop_index(op.f('ix_admins_email'), table_name='admins')
    op.drop_table('admins')
