"""
Repository interface for the content tree storage.

The orphan services only talk to the tree through this contract. Writes are
pending until persist() is called; discard() drops them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rebirth.nodes.domain.models import Node, VariantContext, Workspace


class ITreeStore(ABC):
    """
    Storage contract for a flat, hash-linked node tree.

    Read methods never see the ancestry of a node; parent links are only
    expressed through path hashes.
    """

    @abstractmethod
    def find_workspace_by_name(self, name: str) -> Workspace | None:
        """Get a workspace by its unique name."""
        ...

    @abstractmethod
    def list_workspaces(self) -> list[Workspace]:
        """Get all workspaces ordered by name."""
        ...

    @abstractmethod
    def query_nodes_by_workspace(self, name: str) -> list[Node]:
        """Get every node record stored in exactly this workspace."""
        ...

    @abstractmethod
    def find_node_by_identifier(self, identifier: str, context: VariantContext) -> Node | None:
        """Get the record of a node visible in the given context."""
        ...

    @abstractmethod
    def find_node_by_path(self, path: str, context: VariantContext) -> Node | None:
        """Get the record at a path visible in the given context."""
        ...

    @abstractmethod
    def get_child_nodes(
        self,
        parent: Node,
        context: VariantContext,
        type_filter: str | None = None,
        depth: int = 1,
    ) -> list[Node]:
        """Get descendants of ``parent`` up to ``depth`` levels, optionally of a (super)type."""
        ...

    @abstractmethod
    def create_node(self, parent: Node, name: str, node_type: str, context: VariantContext) -> Node:
        """Create a child of ``parent`` in the context's workspace and dimensions."""
        ...

    @abstractmethod
    def set_property(self, node: Node, key: str, value: Any) -> None:
        """Set a single property of a node."""
        ...

    @abstractmethod
    def move_into(self, node: Node, new_parent: Node) -> None:
        """Reparent ``node`` and its subtree below ``new_parent``; updates ``node``."""
        ...

    @abstractmethod
    def remove(self, node: Node) -> None:
        """Remove ``node`` and its subtree."""
        ...

    @abstractmethod
    def persist(self) -> None:
        """Make pending writes durable."""
        ...

    @abstractmethod
    def discard(self) -> None:
        """Drop pending writes."""
        ...

    def close(self) -> None:
        """Release the underlying connection, if any."""
        return None
