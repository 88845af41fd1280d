"""
Node Domain Models.

Nodes are stored flat: a node knows its own path and the hash of its parent's
path, never a reference to the parent record itself. The same node
(identifier) can exist in several workspaces and dimension combinations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rebirth.shared.domain.base_model import BaseDomainModel
from rebirth.shared.utils.hasher import (
    DIMENSIONLESS_HASH,
    dimensions_hash,
    parent_path,
    path_hash,
    site_node_path,
)


@dataclass
class Workspace(BaseDomainModel):
    """A named layer of content, optionally falling back to a base workspace."""

    name: str
    base_workspace: str | None = None
    title: str = ""


@dataclass
class Node(BaseDomainModel):
    """
    A single node record in one workspace and one dimension combination.

    Hashes are computed from path and dimension values unless given, so
    records loaded from storage keep whatever hashes they were stored with.
    """

    identifier: str
    path: str
    workspace: str
    node_type: str
    dimension_values: dict[str, list[str]] = field(default_factory=dict)
    properties: dict[str, Any] = field(default_factory=dict)
    sorting_index: int = 0
    path_hash: str = ""
    parent_path_hash: str = ""
    dimensions_hash: str = ""

    json_extra = ("name", "label", "site")

    def __post_init__(self) -> None:
        if not self.path_hash:
            self.path_hash = path_hash(self.path)
        if not self.parent_path_hash:
            self.parent_path_hash = path_hash(parent_path(self.path))
        if not self.dimensions_hash:
            self.dimensions_hash = dimensions_hash(self.dimension_values)

    @property
    def name(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def parent_path(self) -> str:
        return parent_path(self.path)

    @property
    def label(self) -> str:
        title = self.properties.get("title")
        return str(title) if title else self.name

    @property
    def site_path(self) -> str | None:
        return site_node_path(self.path)

    @property
    def site(self) -> str:
        """Name of the site (root ancestor) the node belongs to."""
        site = self.site_path
        return site.rsplit("/", 1)[-1] if site else ""

    @property
    def is_dimensionless(self) -> bool:
        return self.dimensions_hash == DIMENSIONLESS_HASH

    def relocate(self, new_path: str) -> None:
        """Point this record at a new path, recomputing both path hashes."""
        self.path = new_path
        self.path_hash = path_hash(new_path)
        self.parent_path_hash = path_hash(parent_path(new_path))


@dataclass(frozen=True)
class VariantContext:
    """
    The view in which nodes are resolved: a workspace chain and one
    dimension combination.

    A record is visible if its workspace is in the chain and its dimensions
    hash is the context's own or the dimension-less one. When several records
    are visible for the same node, the nearest workspace wins, then the exact
    dimension match.
    """

    workspaces: tuple[str, ...]
    dimensions_hash: str = DIMENSIONLESS_HASH
    dimension_values: dict[str, list[str]] = field(default_factory=dict, compare=False)

    @property
    def workspace(self) -> str:
        return self.workspaces[0]

    @property
    def dimension_hashes(self) -> tuple[str, ...]:
        if self.dimensions_hash == DIMENSIONLESS_HASH:
            return (DIMENSIONLESS_HASH,)
        return (self.dimensions_hash, DIMENSIONLESS_HASH)

    def accepts(self, node: Node) -> bool:
        return node.workspace in self.workspaces and node.dimensions_hash in self.dimension_hashes

    def rank(self, node: Node) -> tuple[int, int]:
        """Sort key, lower is preferred."""
        return (
            self.workspaces.index(node.workspace),
            0 if node.dimensions_hash == self.dimensions_hash else 1,
        )

    def pick(self, candidates: list[Node]) -> Node | None:
        """The preferred visible record among candidates, if any."""
        visible = [n for n in candidates if self.accepts(n)]
        if not visible:
            return None
        return min(visible, key=self.rank)

    @classmethod
    def for_node(cls, node: Node, workspaces: list[str]) -> "VariantContext":
        return cls(
            workspaces=tuple(workspaces),
            dimensions_hash=node.dimensions_hash,
            dimension_values=dict(node.dimension_values),
        )
