"""
Dimension filter parsing.

A dimension filter is a JSON object naming dimensions and their values, e.g.
``{"language": ["en_US", "en"]}``. Scalar values stand for a one-element list.
"""

import json
from typing import Dict, List

from rebirth.shared.domain.exceptions import MalformedDimensionFilter
from rebirth.shared.utils.hasher import canonical_dimensions, dimensions_hash


def parse_dimension_filter(raw: str) -> Dict[str, List[str]]:
    """
    Parse a serialized dimension combination.

    Raises:
        MalformedDimensionFilter: If the input is not a JSON object mapping
            dimension names to strings or lists of strings.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedDimensionFilter(
            f"Dimension filter is not valid JSON: {raw!r}", {"error": str(e)}
        ) from e

    if isinstance(data, list) and not data:
        # json encoding of an empty combination
        return {}
    if not isinstance(data, dict):
        raise MalformedDimensionFilter(
            f"Dimension filter must be a JSON object, got {type(data).__name__}", {"filter": raw}
        )

    dimensions: Dict[str, List[str]] = {}
    for name, values in data.items():
        if isinstance(values, str):
            values = [values]
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise MalformedDimensionFilter(
                f"Values of dimension {name!r} must be a string or a list of strings",
                {"filter": raw, "dimension": name},
            )
        dimensions[name] = values

    return canonical_dimensions(dimensions)


def dimension_filter_hash(raw: str) -> str:
    """Hash of the combination a dimension filter names."""
    return dimensions_hash(parse_dimension_filter(raw))


def format_dimensions(dimension_values: Dict[str, List[str]]) -> str:
    """One ``name: value, value`` line per dimension, for display."""
    if not dimension_values:
        return "-"
    return "\n".join(
        f"{name}: {', '.join(values)}" for name, values in canonical_dimensions(dimension_values).items()
    )
