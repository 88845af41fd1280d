"""
SQLAlchemy implementation of the tree store.

One session per store; every write is flushed immediately so constraint
violations surface at the call that caused them, and becomes durable on
persist().
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Any, Iterable
from uuid import uuid4

from sqlalchemy import create_engine, delete, func, or_, select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rebirth.nodes.domain.models import Node, VariantContext, Workspace
from rebirth.nodes.domain.node_types import NodeTypeManager
from rebirth.nodes.infrastructure.schema import Base, NodeRecord, WorkspaceRecord
from rebirth.shared.domain.exceptions import PersistenceFailure
from rebirth.shared.domain.repository import ITreeStore
from rebirth.shared.infrastructure.logging import get_logger
from rebirth.shared.utils.hasher import is_descendant_path, join_path, parent_path, path_hash

logger = get_logger(__name__)


def _to_workspace(record: WorkspaceRecord) -> Workspace:
    return Workspace(name=record.name, base_workspace=record.base_workspace, title=record.title or "")


def _to_node(record: NodeRecord) -> Node:
    return Node(
        identifier=record.identifier,
        path=record.path,
        workspace=record.workspace,
        node_type=record.node_type,
        dimension_values=dict(record.dimension_values or {}),
        properties=dict(record.properties or {}),
        sorting_index=record.sorting_index or 0,
        path_hash=record.path_hash,
        parent_path_hash=record.parent_path_hash,
        dimensions_hash=record.dimensions_hash,
    )


class SqlTreeStore(ITreeStore):
    """Tree store backed by a relational database through SQLAlchemy."""

    def __init__(self, session: Session, node_types: NodeTypeManager):
        self._session = session
        self._node_types = node_types

    def create_schema(self) -> None:
        Base.metadata.create_all(self._session.get_bind())

    def close(self) -> None:
        engine = self._session.get_bind()
        self._session.close()
        engine.dispose()

    # ------------------------------------------------------------------
    # Workspaces
    # ------------------------------------------------------------------

    def find_workspace_by_name(self, name: str) -> Workspace | None:
        record = self._session.get(WorkspaceRecord, name)
        return _to_workspace(record) if record else None

    def list_workspaces(self) -> list[Workspace]:
        records = self._session.scalars(select(WorkspaceRecord).order_by(WorkspaceRecord.name))
        return [_to_workspace(r) for r in records]

    def add_workspace(self, name: str, base_workspace: str | None = None, title: str = "") -> Workspace:
        record = WorkspaceRecord(name=name, base_workspace=base_workspace, title=title)
        self._session.add(record)
        self._flush("workspace_conflict", workspace=name)
        return _to_workspace(record)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def query_nodes_by_workspace(self, name: str) -> list[Node]:
        stmt = (
            select(NodeRecord)
            .where(NodeRecord.workspace == name)
            .order_by(NodeRecord.dimensions_hash, NodeRecord.path)
        )
        return [_to_node(r) for r in self._session.scalars(stmt)]

    def find_node_by_identifier(self, identifier: str, context: VariantContext) -> Node | None:
        return self._pick(context, NodeRecord.identifier == identifier)

    def find_node_by_path(self, path: str, context: VariantContext) -> Node | None:
        return self._pick(context, NodeRecord.path_hash == path_hash(path))

    def get_child_nodes(
        self,
        parent: Node,
        context: VariantContext,
        type_filter: str | None = None,
        depth: int = 1,
    ) -> list[Node]:
        found: list[Node] = []
        level = [parent]
        for _ in range(max(depth, 0)):
            next_level: list[Node] = []
            for node in level:
                next_level.extend(self._children_of(node, context))
            found.extend(next_level)
            level = next_level

        if type_filter is None:
            return found
        return [n for n in found if self._node_types.is_of_type(n.node_type, type_filter)]

    def _children_of(self, parent: Node, context: VariantContext) -> list[Node]:
        children = self._visible(context, NodeRecord.parent_path_hash == path_hash(parent.path))
        return sorted(children, key=lambda n: (n.sorting_index, n.path))

    def _visible(self, context: VariantContext, *criteria: Any) -> list[Node]:
        """One record per node identifier, resolved through the context."""
        stmt = select(NodeRecord).where(
            *criteria,
            NodeRecord.workspace.in_(context.workspaces),
            NodeRecord.dimensions_hash.in_(context.dimension_hashes),
        )
        by_identifier: dict[str, list[Node]] = defaultdict(list)
        for record in self._session.scalars(stmt):
            by_identifier[record.identifier].append(_to_node(record))
        return [node for node in (context.pick(c) for c in by_identifier.values()) if node]

    def _pick(self, context: VariantContext, *criteria: Any) -> Node | None:
        candidates = self._visible(context, *criteria)
        if not candidates:
            return None
        return min(candidates, key=context.rank)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_node(
        self,
        path: str,
        node_type: str,
        workspace: str = "live",
        dimensions: dict[str, list[str]] | None = None,
        identifier: str | None = None,
        properties: dict[str, Any] | None = None,
        sorting_index: int = 0,
    ) -> Node:
        """Insert a node record as given, without checking that its parent exists."""
        node = Node(
            identifier=identifier or str(uuid4()),
            path=path,
            workspace=workspace,
            node_type=node_type,
            dimension_values=dict(dimensions or {}),
            properties=dict(properties or {}),
            sorting_index=sorting_index,
        )
        self._session.add(self._to_record(node))
        self._flush("path_collision", path=path, workspace=workspace)
        return node

    def create_node(self, parent: Node, name: str, node_type: str, context: VariantContext) -> Node:
        siblings = self._children_of(parent, context)
        sorting_index = max((s.sorting_index for s in siblings), default=0) + 100
        return self.add_node(
            join_path(parent.path, name),
            node_type,
            workspace=context.workspace,
            dimensions=context.dimension_values,
            sorting_index=sorting_index,
        )

    def set_property(self, node: Node, key: str, value: Any) -> None:
        record = self._record_for(node)
        properties = dict(record.properties or {})
        properties[key] = value
        # Reassign, JSON columns do not track in-place mutation
        record.properties = properties
        self._flush("property_write_failed", identifier=node.identifier)
        node.properties[key] = value

    def move_into(self, node: Node, new_parent: Node) -> None:
        # The stored path wins over a stale in-memory one
        old_path = self._record_for(node).path
        new_path = join_path(new_parent.path, node.name)
        if new_path == old_path:
            node.relocate(old_path)
            return
        if is_descendant_path(new_parent.path, old_path):
            raise PersistenceFailure(
                f"Cannot move {old_path} into its own subtree ({new_parent.path})",
                code="move_into_own_subtree",
                context={"identifier": node.identifier},
            )

        for record in self._subtree_records(node):
            moved = new_path + record.path[len(old_path):]
            record.path = moved
            record.path_hash = path_hash(moved)
            record.parent_path = parent_path(moved)
            record.parent_path_hash = path_hash(record.parent_path)
        self._flush("path_collision", identifier=node.identifier, path=new_path)
        node.relocate(new_path)

    def remove(self, node: Node) -> None:
        ids = [r.persistence_id for r in self._subtree_records(node)]
        if ids:
            self._session.execute(delete(NodeRecord).where(NodeRecord.persistence_id.in_(ids)))
        self._flush("remove_failed", identifier=node.identifier)

    def persist(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise PersistenceFailure(f"Commit rejected: {e}", code="commit_failed") from e

    def discard(self) -> None:
        self._session.rollback()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def count_nodes(self, workspace: str | None = None) -> int:
        stmt = select(func.count()).select_from(NodeRecord)
        if workspace is not None:
            stmt = stmt.where(NodeRecord.workspace == workspace)
        return self._session.scalar(stmt) or 0

    def _to_record(self, node: Node) -> NodeRecord:
        return NodeRecord(
            identifier=node.identifier,
            path=node.path,
            path_hash=node.path_hash,
            parent_path=node.parent_path,
            parent_path_hash=node.parent_path_hash,
            workspace=node.workspace,
            dimensions_hash=node.dimensions_hash,
            dimension_values=dict(node.dimension_values),
            node_type=node.node_type,
            properties=dict(node.properties),
            sorting_index=node.sorting_index,
        )

    def _record_for(self, node: Node) -> NodeRecord:
        record = self._session.scalars(
            select(NodeRecord).where(
                NodeRecord.identifier == node.identifier,
                NodeRecord.workspace == node.workspace,
                NodeRecord.dimensions_hash == node.dimensions_hash,
            )
        ).first()
        if record is None:
            raise PersistenceFailure(
                f"Node {node.identifier} is not stored in {node.workspace}",
                code="node_not_found",
                context={"identifier": node.identifier, "workspace": node.workspace},
            )
        return record

    def _subtree_records(self, node: Node) -> Iterable[NodeRecord]:
        """The node's own record and all records below its path, same workspace and dimensions."""
        root = self._record_for(node).path
        stmt = select(NodeRecord).where(
            NodeRecord.workspace == node.workspace,
            NodeRecord.dimensions_hash == node.dimensions_hash,
            or_(
                NodeRecord.path == root,
                NodeRecord.path.startswith(root.rstrip("/") + "/", autoescape=True),
            ),
        )
        return list(self._session.scalars(stmt))

    def _flush(self, code: str, **context: Any) -> None:
        try:
            self._session.flush()
        except IntegrityError as e:
            self._session.rollback()
            logger.warning("tree_store_write_rejected", code=code, error=str(e.orig), **context)
            raise PersistenceFailure(f"Write rejected ({code}): {e.orig}", code=code, context=context) from e
        except SQLAlchemyError as e:
            self._session.rollback()
            raise PersistenceFailure(f"Write failed ({code}): {e}", code=code, context=context) from e


def create_tree_store(database_url: str, node_types: NodeTypeManager, create_schema: bool = True) -> SqlTreeStore:
    """Open a store on ``database_url``, creating tables if asked to."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url)
    store = SqlTreeStore(Session(engine), node_types)
    if create_schema:
        store.create_schema()
    return store
