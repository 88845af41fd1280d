"""
Domain exceptions for Rebirth.

All application errors inherit from RebirthError. Detection errors abort a
whole command; repair errors are scoped to the single node being processed.
"""


class RebirthError(Exception):
    """Base class for all Rebirth exceptions."""

    def __init__(self, message: str, context: dict = None):
        super().__init__(message)
        self.context = context or {}


class WorkspaceNotFound(RebirthError):
    """Raised when a workspace name does not resolve."""

    pass


class WorkspaceChainCycle(RebirthError):
    """Raised when following base workspaces revisits a workspace."""

    pass


class MalformedDimensionFilter(RebirthError):
    """Raised when a dimension filter is not a JSON object of string values."""

    pass


class RepairTargetError(RebirthError):
    """A restore target could not be used for the current node."""

    pass


class TargetNotFound(RepairTargetError):
    """Raised when a restore target cannot be resolved or created."""

    pass


class InvalidTargetType(RepairTargetError):
    """Raised when a resolved restore target is not a document node."""

    pass


class PersistenceFailure(RebirthError):
    """Raised when the tree store rejects a write."""

    def __init__(self, message: str, code: str = "persistence_failure", context: dict = None):
        super().__init__(message, context)
        self.code = code


class ConfigurationError(RebirthError):
    """Raised when configuration or node type definitions are invalid."""

    pass
