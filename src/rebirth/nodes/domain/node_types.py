"""
Node type taxonomy.

Only one question is ever asked of node types: is type X a (transitive)
subtype of Y. Definitions come from built-in defaults merged with an
optional YAML file:

    Acme.Site:Page:
      superTypes:
        Neos.Neos:Document: true
    Acme.Site:Teaser:
      superTypes: ['Neos.Neos:Content']

A supertype mapped to ``false`` is removed from the inherited list, even
when another supertype brings it in.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from rebirth.shared.domain.exceptions import ConfigurationError
from rebirth.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

DEFAULT_NODE_TYPES: Dict[str, Dict[str, Any]] = {
    "Neos.Neos:Node": {"abstract": True},
    "Neos.Neos:Document": {"abstract": True, "superTypes": ["Neos.Neos:Node"]},
    "Neos.Neos:Content": {"abstract": True, "superTypes": ["Neos.Neos:Node"]},
    "Neos.Neos:ContentCollection": {"superTypes": ["Neos.Neos:Node"]},
    "Neos.Neos:Page": {"superTypes": ["Neos.Neos:Document"]},
    "Neos.Neos:Shortcut": {"superTypes": ["Neos.Neos:Document"]},
    "Rebirth:RestoreContainer": {"superTypes": ["Neos.Neos:Document"]},
}


def _super_type_names(raw: Any, type_name: str) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, list):
        return [str(s) for s in raw]
    if isinstance(raw, dict):
        return [str(name) for name, enabled in raw.items() if enabled]
    raise ConfigurationError(
        f"superTypes of {type_name} must be a list or a mapping", {"node_type": type_name}
    )


def _removed_super_type_names(raw: Any) -> List[str]:
    if isinstance(raw, dict):
        return [str(name) for name, enabled in raw.items() if not enabled]
    return []


class NodeTypeManager:
    """
    Registry of node type names and their declared supertypes.

    Unknown type names are allowed everywhere; they are only ever of their
    own type.
    """

    def __init__(self, definitions: Mapping[str, Mapping[str, Any]] | None = None):
        self._super_types: Dict[str, List[str]] = {}
        self._abstract: Dict[str, bool] = {}
        self._removed: Dict[str, List[str]] = {}
        self.register_all(DEFAULT_NODE_TYPES if definitions is None else definitions)

    def register_all(self, definitions: Mapping[str, Mapping[str, Any]]) -> None:
        for name, definition in definitions.items():
            self.register(name, definition or {})

    def register(self, name: str, definition: Mapping[str, Any]) -> None:
        if not isinstance(definition, Mapping):
            raise ConfigurationError(f"Definition of node type {name} must be a mapping", {"node_type": name})
        self._super_types[name] = _super_type_names(definition.get("superTypes"), name)
        self._removed[name] = _removed_super_type_names(definition.get("superTypes"))
        self._abstract[name] = bool(definition.get("abstract", False))

    def has_node_type(self, name: str) -> bool:
        return name in self._super_types

    def is_abstract(self, name: str) -> bool:
        return self._abstract.get(name, False)

    def super_types_of(self, name: str) -> List[str]:
        """All transitive supertypes of a type, nearest first."""
        removed = self._removed.get(name, [])
        result: List[str] = []
        pending = list(self._super_types.get(name, []))
        while pending:
            current = pending.pop(0)
            if current in result or current == name or current in removed:
                continue
            result.append(current)
            pending.extend(self._super_types.get(current, []))
        return result

    def is_of_type(self, name: str, super_type: str) -> bool:
        """True if ``name`` is ``super_type`` or inherits from it."""
        return name == super_type or super_type in self.super_types_of(name)


def load_node_types(path: Path | None = None, include_defaults: bool = True) -> NodeTypeManager:
    """
    Build a NodeTypeManager from the built-in types and a YAML file.

    A missing file is not an error; the built-in types are used alone.

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    manager = NodeTypeManager(DEFAULT_NODE_TYPES if include_defaults else {})
    if path is None or not Path(path).exists():
        return manager

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}", {"path": str(path)}) from e

    if data is None:
        return manager
    if not isinstance(data, dict):
        raise ConfigurationError(f"Node type file {path} must contain a mapping", {"path": str(path)})

    manager.register_all(data)
    logger.debug("node_types_loaded", path=str(path), count=len(data))
    return manager
