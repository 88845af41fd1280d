"""
Orphan detection and repair services.

Exports:
    - RepairContext: Explicit collaborators and settings for one run
    - OrphanFinder: Lists orphaned nodes of a workspace
    - OrphanRepairer: Resolves targets, restores and deletes single nodes
    - RepairRunner: Prune or restore every orphan of a workspace
"""

from rebirth.orphans.application.context import RepairContext
from rebirth.orphans.application.orphan_finder import OrphanFinder, resolve_workspace_chain
from rebirth.orphans.application.orphan_repairer import OrphanRepairer
from rebirth.orphans.application.repair_runner import RepairRunner

__all__ = [
    "OrphanFinder",
    "OrphanRepairer",
    "RepairContext",
    "RepairRunner",
    "resolve_workspace_chain",
]
