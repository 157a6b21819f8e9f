"""initial schema: users and reviews

Revision ID: 3f9c1d2e4b5a
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1d2e4b5a'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users and reviews tables."""
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('github_token_encrypted', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_table('reviews',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('identifier', sa.String(length=300), nullable=False),
        sa.Column('author', sa.String(length=100), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('additions', sa.Integer(), nullable=False),
        sa.Column('deletions', sa.Integer(), nullable=False),
        sa.Column('files_changed', sa.Integer(), nullable=False),
        sa.Column('repository', sa.String(length=200), nullable=False),
        sa.Column('pr_number', sa.Integer(), nullable=False),
        sa.Column('pr_url', sa.String(length=500), nullable=False),
        sa.Column('opened_at', sa.DateTime(), nullable=False),
        sa.Column('lines_changed', sa.Integer(), nullable=False),
        sa.Column('priority', sa.Enum('LOW', 'MEDIUM', 'HIGH', name='priority'), nullable=False),
        sa.Column('status', sa.Enum('OPEN', 'CLOSED', 'MERGED', name='reviewstatus'), nullable=False),
        sa.Column('last_status_notified', sa.Enum('OPEN', 'CLOSED', 'MERGED', name='reviewstatus'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('identifier', 'user_id', name='uq_review_identifier_user')
    )
    op.create_index('ix_reviews_user_repository', 'reviews', ['user_id', 'repository'])


def downgrade() -> None:
    """Drop reviews and users tables."""
    op.drop_index('ix_reviews_user_repository', table_name='reviews')
    op.drop_table('reviews')
    op.drop_table('users')
    sa.Enum(name='reviewstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='priority').drop(op.get_bind(), checkfirst=True)
