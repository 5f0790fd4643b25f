"""initial_schema

Create the rating schema:
- Rateables (external entities known to the rating engine)
- Rating averages (cached average per rateable and cache column)
- Votes (one star score per rater, rateable and dimension)

Revision ID: 3c5e0f2a9b71
Revises:
Create Date: 2026-10-12 10:14:52.418203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c5e0f2a9b71"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "rateables",
        sa.Column("rateable_type", sa.String(255), primary_key=True),
        sa.Column("rateable_id", sa.String(255), primary_key=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )

    op.create_table(
        "rating_averages",
        sa.Column("rateable_type", sa.String(255), primary_key=True),
        sa.Column("rateable_id", sa.String(255), primary_key=True),
        sa.Column("cache_column", sa.String(255), primary_key=True),
        sa.Column("average", sa.Float, nullable=False, server_default="0"),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["rateable_type", "rateable_id"],
            ["rateables.rateable_type", "rateables.rateable_id"],
            ondelete="CASCADE",
        ),
    )

    op.create_table(
        "votes",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("rateable_type", sa.String(255), nullable=False),
        sa.Column("rateable_id", sa.String(255), nullable=False),
        sa.Column("rater_id", sa.String(255), nullable=False),
        # Empty string is the implicit dimension, so unique_vote covers it
        sa.Column("dimension", sa.String(255), nullable=False, server_default=""),
        sa.Column("score", sa.Integer, nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint("score >= 1", name="score_positive"),
        sa.UniqueConstraint(
            "rateable_type", "rateable_id", "rater_id", "dimension", name="unique_vote"
        ),
    )

    op.create_index("idx_votes_rater_id", "votes", ["rater_id"])
    op.create_index(
        "idx_votes_rateable", "votes", ["rateable_type", "rateable_id", "dimension"]
    )
    op.create_index("idx_votes_score", "votes", ["rateable_type", "dimension", "score"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_votes_score", table_name="votes")
    op.drop_index("idx_votes_rateable", table_name="votes")
    op.drop_index("idx_votes_rater_id", table_name="votes")
    op.drop_table("votes")
    op.drop_table("rating_averages")
    op.drop_table("rateables")
