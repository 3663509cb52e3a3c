class RuleError(Exception):
    """Raised when a rule cannot finish computing a diagnostic or fix for one node."""


class FixConflictError(RuleError, ValueError):
    """Raised when the edits of a single fix overlap or fall outside the source."""
