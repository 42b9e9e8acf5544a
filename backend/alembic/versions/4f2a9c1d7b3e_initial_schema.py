"""initial_schema

Revision ID: 4f2a9c1d7b3e
Revises:
Create Date: 2026-10-16 10:12:41.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f2a9c1d7b3e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all application tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('provider_id', sa.String(255), nullable=False, unique=True),
        sa.Column('email', sa.String(255), nullable=False, server_default=''),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('avatar_url', sa.Text, nullable=True),
        sa.Column('is_admin', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('last_login_at', sa.DateTime, nullable=True),
    )

    op.create_table(
        'auth_sessions',
        sa.Column('token', sa.String(64), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('expires_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, server_default=''),
        sa.Column('phone', sa.String(50), nullable=False, server_default=''),
        sa.Column('age', sa.Integer, nullable=True),
        sa.Column('education', sa.String(255), nullable=False, server_default=''),
        sa.Column('expertise', sa.String(255), nullable=False, server_default=''),
        sa.Column('resume_link', sa.Text, nullable=False, server_default=''),
        sa.Column('interviewer_opinion', sa.Text, nullable=False, server_default=''),
        sa.Column('skills', sa.JSON, nullable=False),
        sa.Column('bio', sa.Text, nullable=False, server_default=''),
        sa.Column('image_url', sa.Text, nullable=False, server_default=''),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'comments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('profile_id', sa.String(36), sa.ForeignKey('profiles.id'), nullable=False, index=True),
        sa.Column('author_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('author_name', sa.String(255), nullable=False),
        sa.Column('author_avatar', sa.Text, nullable=True),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'touch_points',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('profile_id', sa.String(36), sa.ForeignKey('profiles.id'), nullable=False, index=True),
        sa.Column('author_id', sa.String(36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('author_name', sa.String(255), nullable=False),
        sa.Column('author_avatar', sa.Text, nullable=True),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )


def downgrade() -> None:
    """Drop all application tables."""
    op.drop_table('touch_points')
    op.drop_table('comments')
    op.drop_table('profiles')
    op.drop_table('auth_sessions')
    op.drop_table('users')
