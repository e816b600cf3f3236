"""Create presentations, songs and psalms tables

Revision ID: 001
Revises: None
Create Date: 2025-01-05 00:00:00.000000+00:00

What:  Initial schema. Column names match databases created by earlier
       deployments (camelCase in `presentations`), so an existing sqlite.db
       can be stamped at this revision with `alembic stamp 001`.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "presentations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("randomId", sa.Text(), nullable=False, unique=True),
        sa.Column("presentationName", sa.Text(), nullable=False),
        sa.Column("slideOrder", sa.Integer(), nullable=True),
        sa.Column("slideData", sa.Text(), nullable=False),
        sa.Column(
            "createdDateTime",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updatedDateTime",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sqlite_autoincrement=True,
    )
    op.create_index(
        "idx_presentations_name_created",
        "presentations",
        ["presentationName", "createdDateTime"],
    )

    op.create_table(
        "songs",
        sa.Column("song_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("song_name", sa.Text(), nullable=False),
        # JSON-encoded stanza content
        sa.Column("main_stanza", sa.JSON(), nullable=False),
        sa.Column("stanzas", sa.JSON(), nullable=False),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "psalms",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("chapter", sa.Integer(), nullable=False),
        sa.Column("verse", sa.Integer(), nullable=False),
        sa.Column("telugu", sa.Text(), nullable=False),
        sa.Column("english", sa.Text(), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index("idx_psalms_chapter_verse", "psalms", ["chapter", "verse"])


def downgrade() -> None:
    op.drop_index("idx_psalms_chapter_verse", table_name="psalms")
    op.drop_table("psalms")
    op.drop_table("songs")
    op.drop_index("idx_presentations_name_created", table_name="presentations")
    op.drop_table("presentations")
