"""Tests for dimension filter parsing."""

import pytest

from rebirth.nodes.domain.dimensions import dimension_filter_hash, format_dimensions, parse_dimension_filter
from rebirth.shared.domain.exceptions import MalformedDimensionFilter
from rebirth.shared.utils.hasher import DIMENSIONLESS_HASH, dimensions_hash


class TestParseDimensionFilter:
    """Valid filters are canonicalized, anything else is rejected."""

    def test_lists_are_sorted(self):
        assert parse_dimension_filter('{"language": ["en", "de"]}') == {"language": ["de", "en"]}

    def test_scalar_value_becomes_list(self):
        assert parse_dimension_filter('{"language": "en"}') == {"language": ["en"]}

    def test_filter_hash_matches_node_hash(self):
        assert dimension_filter_hash('{"language": ["en"]}') == dimensions_hash({"language": ["en"]})

    @pytest.mark.parametrize("raw", ["{}", "[]"])
    def test_empty_combination_is_dimensionless(self, raw):
        assert dimension_filter_hash(raw) == DIMENSIONLESS_HASH

    @pytest.mark.parametrize(
        "raw",
        [
            "{language: en}",
            "",
            '["en"]',
            '"en"',
            '{"language": 5}',
            '{"language": ["en", 1]}',
        ],
    )
    def test_malformed_filters_are_rejected(self, raw):
        with pytest.raises(MalformedDimensionFilter):
            parse_dimension_filter(raw)


def test_format_dimensions():
    """One line per dimension, values joined."""
    assert format_dimensions({"language": ["en", "de"], "country": ["us"]}) == "country: us\nlanguage: de, en"
    assert format_dimensions({}) == "-"
