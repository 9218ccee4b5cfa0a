"""Create companies, votes, company_ratings and company_comments

Revision ID: 0001_rankings
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '0001_rankings'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create companies table
    op.create_table(
        'companies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('logo_url', sa.String(length=500), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('tags', postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('founded_year', sa.Integer(), nullable=True),
        sa.Column('hq_location', sa.String(length=255), nullable=True),
        sa.Column('employee_range', sa.String(length=50), nullable=True),
        sa.Column('funding_stage', sa.String(length=50), nullable=True),
        sa.Column('elo_rating', sa.Integer(), nullable=False, server_default='1500'),
        sa.Column('total_votes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('wins', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('losses', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_companies_id'), 'companies', ['id'])
    op.create_index(op.f('ix_companies_slug'), 'companies', ['slug'], unique=True)
    op.create_index(op.f('ix_companies_category'), 'companies', ['category'])
    op.create_index('idx_companies_leaderboard', 'companies', ['elo_rating', 'total_votes'])
    op.create_index(
        'idx_companies_category_leaderboard', 'companies', ['category', 'elo_rating', 'total_votes']
    )

    # Create votes table
    op.create_table(
        'votes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('winner_id', sa.Integer(), nullable=False),
        sa.Column('loser_id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.String(length=255), nullable=True),
        sa.Column('user_id', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('winner_id <> loser_id', name='ck_votes_distinct_companies'),
        sa.ForeignKeyConstraint(['winner_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['loser_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_votes_id'), 'votes', ['id'])
    op.create_index('idx_votes_user', 'votes', ['user_id'])
    op.create_index('idx_votes_winner', 'votes', ['winner_id'])
    op.create_index('idx_votes_loser', 'votes', ['loser_id'])

    # Create company_ratings table
    op.create_table(
        'company_ratings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('criterion', sa.String(length=50), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('score >= 1 AND score <= 5', name='ck_company_ratings_score'),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_company_ratings_id'), 'company_ratings', ['id'])
    op.create_index(
        'idx_company_ratings_company_criterion', 'company_ratings', ['company_id', 'criterion']
    )

    # Create company_comments table
    op.create_table(
        'company_comments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_current_employee', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('session_id', sa.String(length=255), nullable=True),
        sa.Column('upvotes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_company_comments_id'), 'company_comments', ['id'])
    op.create_index(
        'idx_company_comments_company_upvotes', 'company_comments', ['company_id', 'upvotes']
    )


def downgrade() -> None:
    op.drop_index('idx_company_comments_company_upvotes', table_name='company_comments')
    op.drop_index(op.f('ix_company_comments_id'), table_name='company_comments')
    op.drop_table('company_comments')

    op.drop_index('idx_company_ratings_company_criterion', table_name='company_ratings')
    op.drop_index(op.f('ix_company_ratings_id'), table_name='company_ratings')
    op.drop_table('company_ratings')

    op.drop_index('idx_votes_loser', table_name='votes')
    op.drop_index('idx_votes_winner', table_name='votes')
    op.drop_index('idx_votes_user', table_name='votes')
    op.drop_index(op.f('ix_votes_id'), table_name='votes')
    op.drop_table('votes')

    op.drop_index('idx_companies_category_leaderboard', table_name='companies')
    op.drop_index('idx_companies_leaderboard', table_name='companies')
    op.drop_index(op.f('ix_companies_category'), table_name='companies')
    op.drop_index(op.f('ix_companies_slug'), table_name='companies')
    op.drop_index(op.f('ix_companies_id'), table_name='companies')
    op.drop_table('companies')
