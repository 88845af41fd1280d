"""
Repair context.

Everything the orphan services need is passed explicitly in a RepairContext;
the services themselves hold no state between calls.
"""

from dataclasses import dataclass

from rebirth.nodes.domain.node_types import NodeTypeManager
from rebirth.shared.domain.exceptions import ConfigurationError
from rebirth.shared.domain.repository import ITreeStore
from rebirth.shared.infrastructure.config import Settings


@dataclass(frozen=True)
class RepairContext:
    """Collaborators and configured node type names for one run."""

    store: ITreeStore
    node_types: NodeTypeManager
    document_node_type: str = "Neos.Neos:Document"
    restore_target_node_type: str = "Rebirth:RestoreContainer"
    restore_container_title: str = "Restored documents"

    def __post_init__(self) -> None:
        if not self.node_types.has_node_type(self.restore_target_node_type):
            raise ConfigurationError(
                f"Restore target node type {self.restore_target_node_type} is not defined",
                {"node_type": self.restore_target_node_type},
            )
        if not self.node_types.is_of_type(self.restore_target_node_type, self.document_node_type):
            raise ConfigurationError(
                f"Restore target node type {self.restore_target_node_type} "
                f"must be a {self.document_node_type}",
                {"node_type": self.restore_target_node_type},
            )
        if self.node_types.is_abstract(self.restore_target_node_type):
            raise ConfigurationError(
                f"Restore target node type {self.restore_target_node_type} is abstract",
                {"node_type": self.restore_target_node_type},
            )

    @classmethod
    def from_settings(cls, store: ITreeStore, node_types: NodeTypeManager, settings: Settings) -> "RepairContext":
        return cls(
            store=store,
            node_types=node_types,
            document_node_type=settings.document_node_type,
            restore_target_node_type=settings.restore_target_node_type,
            restore_container_title=settings.restore_container_title,
        )

    def is_document(self, node_type: str) -> bool:
        return self.node_types.is_of_type(node_type, self.document_node_type)
