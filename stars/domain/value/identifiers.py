"""Strongly typed identifiers for rating domain entities.

Rateables and raters live outside this package, so their identifiers are
opaque strings supplied by the caller. Votes are owned here and use UUIDs.
"""

from typing import NewType
from uuid import UUID

# Owned entity identifiers
VoteId = NewType("VoteId", UUID)

# External entity identifiers
RateableId = NewType("RateableId", str)
RaterId = NewType("RaterId", str)
