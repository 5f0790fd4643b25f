"""Unit tests for RateableType and rating value objects."""

import pytest
from pydantic import ValidationError

from stars.domain.model import Rateable, RateableType, Rater
from stars.domain.value import (
    RateableId,
    RateableRef,
    RaterId,
    RaterRef,
    VoteKey,
    normalize_dimension,
    underscore,
)


class TestCacheColumnName:
    """Tests for cache field naming per dimension."""

    def test_implicit_dimension_uses_base_name(self):
        """The implicit dimension should use the base column."""
        rateable_type = RateableType(name="car")

        assert rateable_type.cache_column_name() == "rating_average"

    def test_named_dimension_is_suffixed(self):
        """Named dimensions should be appended in snake_case."""
        rateable_type = RateableType(name="car", dimensions=frozenset({"topSpeed"}))

        assert rateable_type.cache_column_name("topSpeed") == "rating_average_top_speed"

    def test_custom_base_name(self):
        """A custom cache column should be used as the prefix."""
        rateable_type = RateableType(name="car", cache_column="stars")

        assert rateable_type.cache_column_name("price") == "stars_price"

    def test_blank_cache_column_disables_caching(self):
        """A blank cache column should mean no cache for any dimension."""
        rateable_type = RateableType(name="car", cache_column="  ")

        assert rateable_type.cache_column is None
        assert rateable_type.cache_column_name("price") is None
        assert not rateable_type.caching_average("price")


class TestValidation:
    """Tests for configuration validation."""

    def test_defaults(self):
        """Unset options should take the documented defaults."""
        rateable_type = RateableType(name="article")

        assert rateable_type.max_score == 5
        assert rateable_type.allow_update is True
        assert rateable_type.dimensions == frozenset()

    def test_max_score_must_be_positive(self):
        """A zero max score should be rejected."""
        with pytest.raises(ValidationError):
            RateableType(name="car", max_score=0)

    def test_dimension_names_must_be_identifiers(self):
        """Dimension names should be usable as column suffixes."""
        with pytest.raises(ValidationError, match="Invalid dimension name"):
            RateableType(name="car", dimensions=frozenset({"top speed"}))

    @pytest.mark.parametrize(
        "dimensions", [{"topSpeed", "top_speed"}, {"Speed", "speed"}]
    )
    def test_dimensions_sharing_a_cache_field_are_rejected(self, dimensions):
        """Dimensions mapping to the same cache field should not both be declared."""
        with pytest.raises(ValidationError, match="share cache field"):
            RateableType(name="car", dimensions=frozenset(dimensions))

    def test_accepts_only_declared_dimensions(self):
        """Only declared dimensions and the implicit one should be accepted."""
        rateable_type = RateableType(name="car", dimensions=frozenset({"speed"}))

        assert rateable_type.accepts_dimension(None)
        assert rateable_type.accepts_dimension("speed")
        assert not rateable_type.accepts_dimension("price")

    def test_is_immutable(self):
        """Registered configuration should not be mutable."""
        rateable_type = RateableType(name="car")

        with pytest.raises(ValidationError):
            rateable_type.max_score = 99


class TestValues:
    """Tests for dimension helpers and references."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, None), ("", None), ("   ", None), (" speed ", "speed")],
    )
    def test_normalize_dimension(self, raw, expected):
        """Blank names should collapse to the implicit dimension."""
        assert normalize_dimension(raw) == expected

    def test_underscore(self):
        """camelCase and dashes should become snake_case."""
        assert underscore("topSpeed") == "top_speed"
        assert underscore("fuel-economy") == "fuel_economy"
        assert underscore("price") == "price"

    def test_lock_names_separate_dimensions(self):
        """Keys differing only by dimension should lock separately."""
        speed = VoteKey("car", RateableId("c1"), RaterId("u1"), "speed")
        implicit = VoteKey("car", RateableId("c1"), RaterId("u1"), None)

        assert speed.lock_name() != implicit.lock_name()

    def test_rateable_ref_rejects_blank_ids(self):
        """Rateable references need a non-empty id."""
        with pytest.raises(ValidationError):
            RateableRef(rateable_type="car", rateable_id=RateableId(""))

    def test_rateable_refs_compare_by_value(self):
        """Equal references should be interchangeable in sets."""
        a = RateableRef(rateable_type="car", rateable_id=RateableId("c1"))
        b = RateableRef(rateable_type="car", rateable_id=RateableId("c1"))

        assert a == b
        assert len({a, b}) == 1

    def test_references_satisfy_capabilities(self):
        """References should implement the rateable and rater protocols."""
        rateable = RateableRef(rateable_type="car", rateable_id=RateableId("c1"))
        rater = RaterRef(rater_id=RaterId("u1"))

        assert isinstance(rateable, Rateable)
        assert isinstance(rater, Rater)
        assert not isinstance(rater, Rateable)
