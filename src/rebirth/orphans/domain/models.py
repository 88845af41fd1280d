"""
Orphan Repair Domain Models.

Every orphan visited by a repair run ends in exactly one terminal outcome.
"""

from dataclasses import dataclass, field
from enum import Enum

from rebirth.nodes.domain.models import Node
from rebirth.shared.domain.base_model import BaseDomainModel


class RepairAction(str, Enum):
    PRUNE = "prune"
    RESTORE = "restore"


class RepairOutcome(str, Enum):
    """Terminal state of one orphan within a run."""

    PRUNED = "pruned"
    RESTORED = "restored"
    SKIPPED_MISSING_TARGET = "skipped_missing_target"
    SKIPPED_ERROR = "skipped_error"

    @property
    def is_success(self) -> bool:
        return self in (RepairOutcome.PRUNED, RepairOutcome.RESTORED)


@dataclass
class RepairResult(BaseDomainModel):
    node: Node
    outcome: RepairOutcome
    original_path: str
    message: str = ""
    target_identifier: str | None = None


@dataclass
class RepairReport(BaseDomainModel):
    """Ordered results of one prune or restore run."""

    action: RepairAction
    workspace: str
    results: list[RepairResult] = field(default_factory=list)

    def add(self, result: RepairResult) -> None:
        self.results.append(result)

    def count(self, outcome: RepairOutcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.outcome.is_success)
