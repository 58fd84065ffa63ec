"""create books table

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "books",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("author", sa.Text(), nullable=False),
        sa.Column("isbn", sa.Text(), nullable=False),
        sa.Column("genre", sa.Text(), nullable=False, server_default=""),
        sa.Column("available_copies", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("image", sa.Text(), nullable=True, comment="base64 cover image"),
        sa.UniqueConstraint("title", name="books_title_key"),
        sa.CheckConstraint("available_copies >= 0", name="books_available_copies_nonneg"),
    )


def downgrade() -> None:
    op.drop_table("books")
