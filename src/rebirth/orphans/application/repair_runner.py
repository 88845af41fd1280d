"""
Repair Runner Application Service.

Runs prune or restore over every orphan of a workspace. Listing errors abort
the run; errors while repairing a node are recorded for that node and the
run continues with the next one.
"""

from rebirth.nodes.domain.models import Node
from rebirth.orphans.application.context import RepairContext
from rebirth.orphans.application.orphan_finder import OrphanFinder
from rebirth.orphans.application.orphan_repairer import OrphanRepairer
from rebirth.orphans.domain.models import RepairAction, RepairOutcome, RepairReport, RepairResult
from rebirth.shared.domain.exceptions import RebirthError, RepairTargetError
from rebirth.shared.infrastructure.logging import get_logger, repair_run

logger = get_logger(__name__)


class RepairRunner:
    """
    Batch driver for orphan repairs.

    Nodes are processed one at a time in listing order; each is visited once.
    """

    def __init__(self, finder: OrphanFinder | None = None, repairer: OrphanRepairer | None = None):
        self.finder = finder or OrphanFinder()
        self.repairer = repairer or OrphanRepairer()

    def prune_all(
        self,
        context: RepairContext,
        workspace: str = "live",
        dimensions: str | None = None,
        node_type: str | None = None,
    ) -> RepairReport:
        """Delete every orphan (and its subtree) of the workspace."""
        orphans = self.finder.list_orphans(context, workspace, dimensions, node_type)
        report = RepairReport(action=RepairAction.PRUNE, workspace=workspace)

        with repair_run(report.action.value, workspace):
            for node in orphans:
                report.add(self._prune_one(context, node))

        return report

    def restore_all(
        self,
        context: RepairContext,
        workspace: str = "live",
        dimensions: str | None = None,
        node_type: str | None = None,
        target: str | None = None,
        auto_create_target: bool = False,
    ) -> RepairReport:
        """
        Move every orphan of the workspace below a restore target.

        Args:
            target: Identifier of the target document; when omitted the restore
                container of each orphan's site is used
            auto_create_target: Create a missing restore container
        """
        orphans = self.finder.list_orphans(context, workspace, dimensions, node_type)
        report = RepairReport(action=RepairAction.RESTORE, workspace=workspace)

        with repair_run(report.action.value, workspace):
            for node in orphans:
                report.add(self._restore_one(context, node, target, auto_create_target))

        return report

    def _prune_one(self, context: RepairContext, node: Node) -> RepairResult:
        original_path = node.path
        self._log_node("orphan_prune_started", node)

        try:
            self.repairer.delete(context, node)
        except RebirthError as e:
            return self._skipped(node, original_path, RepairOutcome.SKIPPED_ERROR, e)

        logger.info("orphan_pruned", identifier=node.identifier, path=original_path)
        return RepairResult(
            node=node,
            outcome=RepairOutcome.PRUNED,
            original_path=original_path,
            message="node removed",
        )

    def _restore_one(
        self, context: RepairContext, node: Node, target_identifier: str | None, auto_create: bool
    ) -> RepairResult:
        original_path = node.path
        self._log_node("orphan_restore_started", node)

        try:
            target = self.repairer.resolve_target(context, node, target_identifier, auto_create)
        except RepairTargetError as e:
            return self._skipped(node, original_path, RepairOutcome.SKIPPED_MISSING_TARGET, e)
        except RebirthError as e:
            return self._skipped(node, original_path, RepairOutcome.SKIPPED_ERROR, e)

        try:
            self.repairer.restore(context, node, target)
        except RebirthError as e:
            return self._skipped(node, original_path, RepairOutcome.SKIPPED_ERROR, e)

        logger.info(
            "orphan_restored",
            identifier=node.identifier,
            from_path=original_path,
            path=node.path,
            target=target.identifier,
        )
        return RepairResult(
            node=node,
            outcome=RepairOutcome.RESTORED,
            original_path=original_path,
            message=f"check your node at {node.path}",
            target_identifier=target.identifier,
        )

    @staticmethod
    def _log_node(event: str, node: Node) -> None:
        logger.info(
            event,
            identifier=node.identifier,
            label=node.label,
            node_type=node.node_type,
            path=node.path,
            workspace=node.workspace,
        )

    @staticmethod
    def _skipped(node: Node, original_path: str, outcome: RepairOutcome, error: RebirthError) -> RepairResult:
        logger.warning(
            "orphan_repair_skipped",
            identifier=node.identifier,
            path=original_path,
            outcome=outcome.value,
            error=str(error),
            error_type=type(error).__name__,
            code=getattr(error, "code", None),
        )
        return RepairResult(node=node, outcome=outcome, original_path=original_path, message=str(error))
