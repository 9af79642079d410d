"""Network and container lifecycle coordination."""

from faketake.lifecycle.cleanup import CLEANUP_NOTICE, NetworkCleanup
from faketake.lifecycle.coordinator import LifecycleCoordinator, run_lifecycle
from faketake.lifecycle.state import LifecycleState, RunResult

__all__ = [
    "LifecycleCoordinator",
    "run_lifecycle",
    "NetworkCleanup",
    "CLEANUP_NOTICE",
    "LifecycleState",
    "RunResult",
]
