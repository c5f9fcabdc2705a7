from enum import StrEnum


class SelectionState(StrEnum):
    """Lifecycle of one checkout selection"""

    IDLE = 'idle'  # no ticket count chosen yet
    PICKING = 'picking'
    READY = 'ready'
    COMMITTING = 'committing'
    COMMITTED = 'committed'
    FAILED = 'failed'
    CANCELLED = 'cancelled'

    @property
    def is_terminal(self) -> bool:
        return self in (SelectionState.COMMITTED, SelectionState.CANCELLED)
