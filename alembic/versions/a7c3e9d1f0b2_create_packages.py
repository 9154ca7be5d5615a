"""create_packages

Revision ID: a7c3e9d1f0b2
Revises:
Create Date: 2026-10-19 09:00:00.000000

택배(packages) 테이블 생성.
운송장 번호 고유 제약, 자동 증가 기본키.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "a7c3e9d1f0b2"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "packages",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("tracking_number", sa.String(50), nullable=False),
        sa.Column("carrier", sa.String(50), nullable=False),
        sa.Column("guest_name", sa.String(100), server_default="unnamed", nullable=False),
        sa.Column("room_number", sa.String(10), nullable=True),
        sa.Column("guest_phone", sa.String(20), nullable=True),
        sa.Column("status", sa.String(20), server_default="RECEIVED", nullable=False),
        sa.Column("received_by", sa.String(50), nullable=False),
        sa.Column("picked_up_by", sa.String(50), nullable=True),
        sa.Column("receive_time", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("pickup_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_index("ix_packages_tracking_number", "packages", ["tracking_number"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_packages_tracking_number")
    op.drop_table("packages")
