"""Relational schema of the content tree."""

from typing import Any, Optional

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class WorkspaceRecord(Base):
    __tablename__ = "workspaces"

    name: Mapped[str] = mapped_column(String(255), primary_key=True)
    base_workspace: Mapped[Optional[str]] = mapped_column(
        String(255), ForeignKey("workspaces.name"), nullable=True
    )
    title: Mapped[str] = mapped_column(String(255), default="")


class NodeRecord(Base):
    __tablename__ = "nodes"

    persistence_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    identifier: Mapped[str] = mapped_column(String(255), index=True)
    # Starts with '/', no trailing slash; the root node is '/'
    path: Mapped[str] = mapped_column(Text)
    path_hash: Mapped[str] = mapped_column(String(32), index=True)
    parent_path: Mapped[str] = mapped_column(Text)
    # md5 of parent_path, not a foreign key
    parent_path_hash: Mapped[str] = mapped_column(String(32))
    workspace: Mapped[str] = mapped_column(String(255), index=True)
    dimensions_hash: Mapped[str] = mapped_column(String(32))
    dimension_values: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    node_type: Mapped[str] = mapped_column(String(255))
    properties: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    sorting_index: Mapped[int] = mapped_column(Integer, default=0)

    __table_args__ = (
        UniqueConstraint("path_hash", "workspace", "dimensions_hash", name="uq_nodes_path_workspace_dimensions"),
        UniqueConstraint(
            "identifier", "workspace", "dimensions_hash", name="uq_nodes_identifier_workspace_dimensions"
        ),
        Index("ix_nodes_parent_lookup", "parent_path_hash", "workspace", "dimensions_hash"),
    )
