"""
Orphan Finder Application Service.

A node is orphaned when no record matching its parent path hash is visible
from its workspace: the parent may live in the node's own workspace or any
base workspace, in the node's own dimensions or dimension-less.

Only the parent lookup follows the workspace chain; the candidates are the
records stored in the requested workspace itself.
"""

from rebirth.nodes.domain.dimensions import dimension_filter_hash
from rebirth.nodes.domain.models import Node
from rebirth.orphans.application.context import RepairContext
from rebirth.shared.domain.exceptions import WorkspaceChainCycle, WorkspaceNotFound
from rebirth.shared.domain.repository import ITreeStore
from rebirth.shared.infrastructure.logging import get_logger
from rebirth.shared.utils.hasher import DIMENSIONLESS_HASH, ROOT_PATH

logger = get_logger(__name__)


def resolve_workspace_chain(store: ITreeStore, workspace_name: str) -> list[str]:
    """
    Names of ``workspace_name`` and all its base workspaces, nearest first.

    Raises:
        WorkspaceNotFound: If the workspace or one of its bases does not exist
        WorkspaceChainCycle: If a base workspace link leads back into the chain
    """
    chain: list[str] = []
    name: str | None = workspace_name
    while name is not None:
        if name in chain:
            raise WorkspaceChainCycle(
                f"Workspace chain of {workspace_name} loops back to {name}",
                {"workspace": workspace_name, "chain": chain},
            )
        workspace = store.find_workspace_by_name(name)
        if workspace is None:
            if not chain:
                raise WorkspaceNotFound(f"Workspace {name} not found", {"workspace": name})
            raise WorkspaceNotFound(
                f"Base workspace {name} of {chain[-1]} not found",
                {"workspace": name, "chain": chain},
            )
        chain.append(workspace.name)
        name = workspace.base_workspace
    return chain


class OrphanFinder:
    """
    Lists orphaned nodes of a workspace.

    Results are sorted by dimensions hash, then path, so repeated listings of
    unchanged data are identical.
    """

    def list_orphans(
        self,
        context: RepairContext,
        workspace_name: str,
        dimension_filter: str | None = None,
        type_filter: str | None = None,
    ) -> list[Node]:
        """
        Args:
            context: Store and node types to work with
            workspace_name: Workspace whose records are tested
            dimension_filter: JSON dimension combination; only records with
                exactly this combination are returned
            type_filter: Only records of this type or a subtype are returned,
                defaults to the document node type

        Raises:
            WorkspaceNotFound: If the workspace does not exist
            MalformedDimensionFilter: If the dimension filter cannot be parsed
        """
        store = context.store
        type_filter = type_filter or context.document_node_type
        # Parse before touching the store, a bad filter is an input error
        wanted_dimensions = dimension_filter_hash(dimension_filter) if dimension_filter is not None else None

        chain = resolve_workspace_chain(store, workspace_name)

        parents: set[tuple[str, str]] = set()
        candidates: list[Node] = []
        for name in chain:
            for node in store.query_nodes_by_workspace(name):
                parents.add((node.path_hash, node.dimensions_hash))
                if name == workspace_name and node.path != ROOT_PATH:
                    candidates.append(node)

        orphans = [node for node in candidates if not self._has_parent(node, parents)]
        total_orphans = len(orphans)

        if wanted_dimensions is not None:
            orphans = [n for n in orphans if n.dimensions_hash == wanted_dimensions]
        orphans = [n for n in orphans if context.node_types.is_of_type(n.node_type, type_filter)]
        orphans.sort(key=lambda n: (n.dimensions_hash, n.path))

        logger.info(
            "orphans_listed",
            workspace=workspace_name,
            chain=chain,
            candidates=len(candidates),
            orphans=total_orphans,
            matching=len(orphans),
            node_type=type_filter,
        )
        return orphans

    @staticmethod
    def _has_parent(node: Node, parents: set[tuple[str, str]]) -> bool:
        return (node.parent_path_hash, node.dimensions_hash) in parents or (
            node.parent_path_hash,
            DIMENSIONLESS_HASH,
        ) in parents
