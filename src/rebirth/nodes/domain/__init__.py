"""
Node domain: tree records, workspaces, variant contexts and node types.
"""

from rebirth.nodes.domain.models import Node, VariantContext, Workspace
from rebirth.nodes.domain.node_types import NodeTypeManager, load_node_types

__all__ = [
    "Node",
    "NodeTypeManager",
    "VariantContext",
    "Workspace",
    "load_node_types",
]
