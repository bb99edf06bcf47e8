"""create_records_table

Create the document-style records table backing the SQL record store.
Every record type (profiles, relationships, shared workouts, privacy
settings) lives in this one table keyed by (record_type, id).

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-19 09:12:44.205113

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "records",
        sa.Column("record_type", sa.String(length=64), nullable=False),
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column(
            "fields",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("record_type", "id"),
    )
    # Feed and graph queries filter on these fields
    op.create_index(
        "idx_records_workout_owner",
        "records",
        [sa.text("(fields ->> 'userId')")],
        unique=False,
        postgresql_where=sa.text("record_type = 'PublicWorkout'"),
    )
    op.create_index(
        "idx_records_relationship_follower",
        "records",
        [sa.text("(fields ->> 'followerId')")],
        unique=False,
        postgresql_where=sa.text("record_type = 'FriendRelationship'"),
    )
    op.create_index(
        "idx_records_relationship_following",
        "records",
        [sa.text("(fields ->> 'followingId')")],
        unique=False,
        postgresql_where=sa.text("record_type = 'FriendRelationship'"),
    )
    op.create_index(
        "idx_records_profile_username",
        "records",
        [sa.text("(fields ->> 'username')")],
        unique=False,
        postgresql_where=sa.text("record_type = 'UserProfile'"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_records_profile_username", table_name="records")
    op.drop_index("idx_records_relationship_following", table_name="records")
    op.drop_index("idx_records_relationship_follower", table_name="records")
    op.drop_index("idx_records_workout_owner", table_name="records")
    op.drop_table("records")
