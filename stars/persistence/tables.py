"""SQLAlchemy table definitions for ratings.

Votes reference rateables polymorphically by (rateable_type, rateable_id).
The implicit dimension is stored as an empty string so that the vote key
unique constraint also covers it.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# RATEABLES TABLE (external entities known to the rating engine)
# ============================================================================
rateables_table = Table(
    "rateables",
    metadata,
    Column("rateable_type", String(255), primary_key=True),
    Column("rateable_id", String(255), primary_key=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# RATING AVERAGES TABLE (one cached average per rateable and cache column)
# ============================================================================
rating_averages_table = Table(
    "rating_averages",
    metadata,
    Column("rateable_type", String(255), primary_key=True),
    Column("rateable_id", String(255), primary_key=True),
    Column("cache_column", String(255), primary_key=True),  # rating_average_<dim>
    Column("average", Float, nullable=False, server_default="0"),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    ForeignKeyConstraint(
        ["rateable_type", "rateable_id"],
        ["rateables.rateable_type", "rateables.rateable_id"],
        ondelete="CASCADE",
    ),
)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("rateable_type", String(255), nullable=False),
    Column("rateable_id", String(255), nullable=False),
    Column("rater_id", String(255), nullable=False),
    Column("dimension", String(255), nullable=False, server_default=""),
    Column("score", Integer, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("score >= 1", name="score_positive"),
    UniqueConstraint(
        "rateable_type", "rateable_id", "rater_id", "dimension", name="unique_vote"
    ),
)

Index("idx_votes_rater_id", votes_table.c.rater_id)
Index(
    "idx_votes_rateable",
    votes_table.c.rateable_type,
    votes_table.c.rateable_id,
    votes_table.c.dimension,
)
Index(
    "idx_votes_score",
    votes_table.c.rateable_type,
    votes_table.c.dimension,
    votes_table.c.score,
)
