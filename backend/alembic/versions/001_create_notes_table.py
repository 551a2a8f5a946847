"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-16 00:00:00.000000+00:00

What:  Creates the `notes` table holding lecture notes.
Rollback: downgrade() drops the table (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "notes",
        sa.Column(
            "id",
            sa.Uuid(),
            nullable=False,
            comment="Unique identifier assigned on insert",
        ),
        sa.Column(
            "lecture_id",
            sa.String(255),
            nullable=False,
            comment="Identifier of the lecture this note belongs to",
        ),
        sa.Column(
            "user_id",
            sa.String(255),
            nullable=True,
            comment="Identifier of the note author, if supplied",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            comment="Note text",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Lecture-scoped listing in creation order
    op.create_index(
        "idx_notes_lecture_id_created_at",
        "notes",
        ["lecture_id", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("idx_notes_lecture_id_created_at", table_name="notes")
    op.drop_table("notes")
