"""Tests for the node type taxonomy and its YAML loader."""

import pytest

from rebirth.nodes.domain.node_types import NodeTypeManager, load_node_types
from rebirth.shared.domain.exceptions import ConfigurationError


class TestNodeTypeManager:
    """is_of_type follows declared supertypes transitively."""

    def test_builtin_page_is_a_document(self):
        manager = NodeTypeManager()
        assert manager.is_of_type("Neos.Neos:Page", "Neos.Neos:Document")
        assert manager.is_of_type("Neos.Neos:Page", "Neos.Neos:Node")
        assert not manager.is_of_type("Neos.Neos:Page", "Neos.Neos:Content")

    def test_type_is_of_its_own_type(self):
        manager = NodeTypeManager()
        assert manager.is_of_type("Acme:Unknown", "Acme:Unknown")
        assert not manager.is_of_type("Acme:Unknown", "Neos.Neos:Document")

    def test_transitive_supertypes(self):
        manager = NodeTypeManager()
        manager.register("Acme:Base", {"superTypes": ["Neos.Neos:Document"]})
        manager.register("Acme:Landing", {"superTypes": {"Acme:Base": True, "Acme:Mixin": False}})

        assert manager.super_types_of("Acme:Landing") == ["Acme:Base", "Neos.Neos:Document", "Neos.Neos:Node"]

    def test_disabled_supertype_is_removed_from_inherited_ones(self):
        manager = NodeTypeManager()
        manager.register("Acme:Mixin", {"superTypes": ["Neos.Neos:Content"]})
        manager.register("Acme:Base", {"superTypes": ["Neos.Neos:Document", "Acme:Mixin"]})
        manager.register("Acme:Landing", {"superTypes": {"Acme:Base": True, "Acme:Mixin": False}})

        assert manager.is_of_type("Acme:Base", "Acme:Mixin")
        assert not manager.is_of_type("Acme:Landing", "Acme:Mixin")
        assert not manager.is_of_type("Acme:Landing", "Neos.Neos:Content")
        assert manager.is_of_type("Acme:Landing", "Neos.Neos:Document")

    def test_abstract_flag(self):
        manager = NodeTypeManager()
        assert manager.is_abstract("Neos.Neos:Document")
        assert not manager.is_abstract("Neos.Neos:Page")
        assert not manager.is_abstract("Acme:Unknown")

    def test_supertype_cycle_terminates(self):
        manager = NodeTypeManager({"A": {"superTypes": ["B"]}, "B": {"superTypes": ["A"]}})
        assert manager.is_of_type("A", "B")
        assert not manager.is_of_type("A", "C")

    def test_invalid_supertypes_rejected(self):
        with pytest.raises(ConfigurationError):
            NodeTypeManager({"A": {"superTypes": 3}})


class TestLoadNodeTypes:
    """YAML definitions are merged over the built-in types."""

    def test_missing_file_uses_builtins(self, tmp_path):
        manager = load_node_types(tmp_path / "missing.yaml")
        assert manager.has_node_type("Rebirth:RestoreContainer")

    def test_file_types_are_added(self, tmp_path):
        path = tmp_path / "node_types.yaml"
        path.write_text(
            "Acme.Site:Page:\n"
            "  superTypes:\n"
            "    Neos.Neos:Document: true\n"
            "Acme.Site:Trash:\n"
            "  superTypes: ['Acme.Site:Page']\n"
        )

        manager = load_node_types(path)

        assert manager.is_of_type("Acme.Site:Trash", "Neos.Neos:Document")
        assert manager.has_node_type("Neos.Neos:Page")

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "node_types.yaml"
        path.write_text("invalid: yaml: content::\n  - broken")

        with pytest.raises(ConfigurationError):
            load_node_types(path)

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "node_types.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            load_node_types(path)
