"""
Builds the RepairContext a command runs with.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from rebirth.nodes.domain.node_types import load_node_types
from rebirth.nodes.infrastructure.sql_tree_store import create_tree_store
from rebirth.orphans.application.context import RepairContext
from rebirth.shared.infrastructure.config import Settings, settings as default_settings


@contextmanager
def open_repair_context(database_url: str | None = None, settings: Settings | None = None) -> Iterator[RepairContext]:
    """
    Open the configured tree store and yield a context around it.

    Raises:
        ConfigurationError: If node types or node type settings are invalid
    """
    settings = settings or default_settings
    node_types = load_node_types(Path(settings.node_types_file))
    store = create_tree_store(database_url or settings.database_url, node_types)
    try:
        yield RepairContext.from_settings(store, node_types, settings)
    finally:
        store.close()
