"""Tests for settings loading and the repair context built from them."""

import pytest
from pydantic import ValidationError

from rebirth.nodes.domain.node_types import NodeTypeManager
from rebirth.orphans.application.context import RepairContext
from rebirth.shared.domain.exceptions import ConfigurationError
from rebirth.shared.infrastructure.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("REBIRTH_RESTORE_TARGET_NODE_TYPE", raising=False)
        settings = Settings(_env_file=None)

        assert settings.document_node_type == "Neos.Neos:Document"
        assert settings.restore_target_node_type == "Rebirth:RestoreContainer"
        assert settings.is_development

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("REBIRTH_RESTORE_TARGET_NODE_TYPE", "Acme:Trash")
        monkeypatch.setenv("REBIRTH_DATABASE_URL", "sqlite:///other.db")

        settings = Settings(_env_file=None)

        assert settings.restore_target_node_type == "Acme:Trash"
        assert settings.database_url == "sqlite:///other.db"

    def test_empty_node_type_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, restore_target_node_type="  ")


class TestRepairContext:
    def test_from_settings(self, store):
        settings = Settings(_env_file=None, restore_container_title="Trash")

        context = RepairContext.from_settings(store, NodeTypeManager(), settings)

        assert context.restore_container_title == "Trash"
        assert context.is_document("Neos.Neos:Page")

    def test_unknown_restore_type_rejected(self, store):
        with pytest.raises(ConfigurationError):
            RepairContext(store=store, node_types=NodeTypeManager(), restore_target_node_type="Acme:Trash")

    def test_abstract_restore_type_rejected(self, store):
        with pytest.raises(ConfigurationError, match="abstract"):
            RepairContext(store=store, node_types=NodeTypeManager(), restore_target_node_type="Neos.Neos:Document")

    def test_restore_type_must_be_a_document(self, store):
        with pytest.raises(ConfigurationError):
            RepairContext(
                store=store, node_types=NodeTypeManager(), restore_target_node_type="Neos.Neos:ContentCollection"
            )
