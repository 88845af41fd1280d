"""
Orphan Repairer Application Service.

Moves an orphan (with its subtree) below a target document, or deletes it.
Each call is one unit of work: it persists on success and discards pending
writes on failure.
"""

from uuid import uuid4

from rebirth.nodes.domain.models import Node, VariantContext
from rebirth.orphans.application.context import RepairContext
from rebirth.orphans.application.orphan_finder import resolve_workspace_chain
from rebirth.shared.domain.exceptions import InvalidTargetType, PersistenceFailure, TargetNotFound
from rebirth.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def generate_node_name() -> str:
    """Random node name in the ``node-<13 hex>`` form used for generated nodes."""
    return f"node-{uuid4().hex[:13]}"


class OrphanRepairer:
    """Resolves restore targets and applies restore or delete to single nodes."""

    def variant_context(self, context: RepairContext, node: Node) -> VariantContext:
        """The workspace chain and dimensions ``node`` is seen through."""
        return VariantContext.for_node(node, resolve_workspace_chain(context.store, node.workspace))

    def resolve_target(
        self,
        context: RepairContext,
        node: Node,
        target_identifier: str | None = None,
        auto_create: bool = False,
    ) -> Node:
        """
        Find the node an orphan should be restored into.

        With an identifier, that node as seen from the orphan's variant
        context. Without, the restore container directly below the orphan's
        site node, created on demand when ``auto_create`` is set.

        Raises:
            TargetNotFound: If no target exists (and none may be created)
            InvalidTargetType: If the given target is not a document
        """
        variant = self.variant_context(context, node)

        if target_identifier is None:
            return self._resolve_target_in_site(context, node, variant, auto_create)

        target = context.store.find_node_by_identifier(target_identifier, variant)
        if target is None:
            raise TargetNotFound(
                f"The given target node is not found ({target_identifier})",
                {"target": target_identifier, "workspace": node.workspace},
            )
        if not context.is_document(target.node_type):
            raise InvalidTargetType(
                f"Target node must be of type {context.document_node_type} (current type: {target.node_type})",
                {"target": target_identifier, "node_type": target.node_type},
            )
        return target

    def _resolve_target_in_site(
        self, context: RepairContext, node: Node, variant: VariantContext, auto_create: bool
    ) -> Node:
        store = context.store
        site_path = node.site_path
        site_node = store.find_node_by_path(site_path, variant) if site_path else None
        if site_node is None:
            raise TargetNotFound(
                f"Missing site node for {node.label} ({node.identifier})",
                {"identifier": node.identifier, "site_path": site_path},
            )

        containers = store.get_child_nodes(site_node, variant, type_filter=context.restore_target_node_type, depth=1)
        if containers:
            return containers[0]

        if not auto_create:
            raise TargetNotFound(
                f"Missing restoration target node under {site_node.path} for {node.label} ({node.identifier})",
                {"identifier": node.identifier, "site": site_node.path},
            )

        # Dimension-less, so orphans of every dimension under this site share it
        shared = VariantContext(workspaces=variant.workspaces)
        try:
            container = store.create_node(
                site_node, generate_node_name(), context.restore_target_node_type, shared
            )
            store.set_property(container, "title", context.restore_container_title)
            store.persist()
        except PersistenceFailure:
            store.discard()
            raise

        logger.info(
            "restore_container_created",
            identifier=container.identifier,
            path=container.path,
            workspace=container.workspace,
            node_type=container.node_type,
        )
        return container

    def restore(self, context: RepairContext, node: Node, target: Node) -> None:
        """
        Move ``node`` and its subtree below ``target``.

        Raises:
            PersistenceFailure: If the store rejects the move; nothing is applied
        """
        store = context.store
        original_path = node.path
        try:
            store.move_into(node, target)
            store.persist()
        except PersistenceFailure:
            store.discard()
            if node.path != original_path:
                node.relocate(original_path)
            raise

    def delete(self, context: RepairContext, node: Node) -> None:
        """
        Remove ``node`` and its subtree permanently.

        Raises:
            PersistenceFailure: If the store rejects the removal
        """
        store = context.store
        try:
            store.remove(node)
            store.persist()
        except PersistenceFailure:
            store.discard()
            raise
