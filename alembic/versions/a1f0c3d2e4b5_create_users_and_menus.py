"""create_users_and_menus

Revision ID: a1f0c3d2e4b5
Revises:
Create Date: 2026-10-19 10:00:00.000000

사용자 및 메뉴 테이블 생성: users, menus.
Create the users and menus tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1f0c3d2e4b5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users — 관리 콘솔 사용자 (email is the unique login identifier)
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('email', sa.String(100), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('status', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('user_type', sa.Integer(), server_default='2', nullable=False),
        sa.Column('remark', sa.Text(), nullable=True),
        sa.Column('login_ip', sa.String(45), nullable=True),
        sa.Column('login_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )

    # menus — 관리 콘솔 메뉴 (parent = 0 for top-level entries)
    op.create_table(
        'menus',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('key', sa.String(150), nullable=False),
        sa.Column('url', sa.String(500), nullable=False),
        sa.Column('feature', sa.String(10), nullable=False),
        sa.Column('status', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('parent', sa.Integer(), server_default='0', nullable=False),
        sa.Column('weight', sa.Integer(), nullable=True),
        sa.Column('remark', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('name', name='uq_menus_name'),
        sa.UniqueConstraint('key', name='uq_menus_key'),
    )
    op.create_index('ix_menus_parent', 'menus', ['parent'])


def downgrade() -> None:
    op.drop_index('ix_menus_parent', table_name='menus')
    op.drop_table('menus')
    op.drop_table('users')
