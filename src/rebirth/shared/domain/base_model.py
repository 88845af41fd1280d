"""
Base domain model with camelCase JSON output.

Domain models are plain dataclasses; to_json() gives the representation used
by machine-readable CLI output (camelCase keys, Enum values, ISO dates).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict


def to_camel_case(snake_str: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        >>> to_camel_case("path_hash")
        'pathHash'
        >>> to_camel_case("dimensions_hash")
        'dimensionsHash'
    """
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, BaseDomainModel):
        return value.to_json()
    if isinstance(value, list):
        return [_json_value(item) for item in value]
    if isinstance(value, dict):
        # Mapping keys are data (dimension names, property keys), keep them as-is
        return {k: _json_value(v) for k, v in value.items()}
    return value


@dataclass
class BaseDomainModel:
    """
    Base class for domain models.

    Subclasses may list derived properties in ``json_extra`` to have them
    serialized next to the dataclass fields.
    """

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize to JSON-compatible dict with camelCase keys.

        Returns:
            Dictionary with camelCase keys, Enum values, dates as ISO strings
        """
        result: Dict[str, Any] = {}

        for field in fields(self):
            result[to_camel_case(field.name)] = _json_value(getattr(self, field.name))

        for name in getattr(self, "json_extra", ()):
            result[to_camel_case(name)] = _json_value(getattr(self, name))

        return result

    def __str__(self) -> str:
        """String representation for logging."""
        field_strs = [f"{field.name}={getattr(self, field.name)!r}" for field in fields(self)]
        return f"{self.__class__.__name__}({', '.join(field_strs)})"
