"""Shared test fixtures for the Rebirth test suite."""

import pytest

from rebirth.nodes.domain.node_types import NodeTypeManager
from rebirth.nodes.infrastructure.sql_tree_store import SqlTreeStore, create_tree_store
from rebirth.orphans.application.context import RepairContext

PAGE = "Neos.Neos:Page"
CONTENT = "Neos.Neos:Content"
CONTAINER = "Rebirth:RestoreContainer"
UNSTRUCTURED = "unstructured"

EN = {"language": ["en"]}
DE = {"language": ["de"]}


def seed_site(store: SqlTreeStore, workspace: str = "live", site: str = "demo", dimensions=None) -> None:
    """Create root, sites root and one site node (dimension-less unless given)."""
    store.add_node("/", UNSTRUCTURED, workspace=workspace)
    store.add_node("/sites", UNSTRUCTURED, workspace=workspace)
    store.add_node(
        f"/sites/{site}",
        PAGE,
        workspace=workspace,
        dimensions=dimensions,
        identifier=f"site-{site}",
        properties={"title": site.title()},
    )


@pytest.fixture
def db_url(tmp_path):
    """SQLite database URL in a temporary directory."""
    return f"sqlite:///{tmp_path / 'tree.db'}"


@pytest.fixture
def node_types():
    """Built-in node types plus a content subtype."""
    manager = NodeTypeManager()
    manager.register("Neos.Neos:Text", {"superTypes": [CONTENT]})
    return manager


@pytest.fixture
def store(db_url, node_types):
    """Empty tree store with the schema created."""
    store = create_tree_store(db_url, node_types)
    yield store
    store.close()


@pytest.fixture
def context(store, node_types):
    """Repair context with default node type settings."""
    return RepairContext(store=store, node_types=node_types)


@pytest.fixture
def workspaces(store):
    """live <- user-admin."""
    store.add_workspace("live", title="Live")
    store.add_workspace("user-admin", base_workspace="live", title="Admin")
    store.persist()


@pytest.fixture
def demo_site(store, workspaces):
    """Site 'demo' in live with one page and one orphaned page with a child."""
    seed_site(store)
    store.add_node("/sites/demo/about", PAGE, identifier="about", properties={"title": "About"})
    store.add_node("/sites/demo/gone/lost", PAGE, identifier="lost", properties={"title": "Lost"})
    store.add_node("/sites/demo/gone/lost/child", PAGE, identifier="lost-child")
    store.persist()
