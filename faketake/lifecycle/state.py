"""Lifecycle state and run outcome."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LifecycleState(str, Enum):
    """Coordinator lifecycle state."""

    INIT = "init"
    NETWORK_CREATED = "network_created"
    RUNNING = "running"
    EXITED_NORMALLY = "exited_normally"
    INTERRUPTED = "interrupted"
    CLEANING_UP = "cleaning_up"
    TERMINATED = "terminated"


# Allowed transitions; EXITED_NORMALLY and TERMINATED are terminal.
TRANSITIONS: dict[LifecycleState, frozenset[LifecycleState]] = {
    LifecycleState.INIT: frozenset({LifecycleState.NETWORK_CREATED}),
    LifecycleState.NETWORK_CREATED: frozenset({LifecycleState.RUNNING}),
    LifecycleState.RUNNING: frozenset(
        {LifecycleState.EXITED_NORMALLY, LifecycleState.INTERRUPTED}
    ),
    LifecycleState.INTERRUPTED: frozenset({LifecycleState.CLEANING_UP}),
    LifecycleState.CLEANING_UP: frozenset({LifecycleState.TERMINATED}),
    LifecycleState.EXITED_NORMALLY: frozenset(),
    LifecycleState.TERMINATED: frozenset(),
}


@dataclass
class RunResult:
    """
    Outcome of a coordinator run.

    Attributes:
        state: Final lifecycle state
        interrupted: Whether an interrupt signal ended the run
        container_exit_code: Exit code when the container exited on its own
        cleanup_attempted: Whether network removal was attempted
        cleanup_succeeded: Outcome of network removal (None if not attempted)
    """

    state: LifecycleState
    interrupted: bool = False
    container_exit_code: Optional[int] = None
    cleanup_attempted: bool = False
    cleanup_succeeded: Optional[bool] = None

    @property
    def exit_code(self) -> int:
        """Process exit status for this outcome."""
        if self.cleanup_attempted and not self.cleanup_succeeded:
            return 1
        if self.interrupted:
            return 0
        return self.container_exit_code or 0
