"""Citation workflows.

The orchestrator lives in ``cratecite.operations.orchestrator``.
"""

from cratecite.operations.results import OperationResult, ResultStatus

__all__ = [
    "OperationResult",
    "ResultStatus",
]
