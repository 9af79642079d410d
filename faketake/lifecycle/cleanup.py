"""Interrupt handling and best-effort network teardown."""

import asyncio
import signal
from typing import Any, Callable, Optional

from rich.console import Console

from faketake.docker.runtime import ContainerRuntime
from faketake.logging_config import get_logger, log_error

console = Console()
logger = get_logger(__name__)

CLEANUP_NOTICE = "Cleaning up..."


def _signal_name(signum: Optional[int]) -> Optional[str]:
    if signum is None:
        return None
    try:
        return signal.Signals(signum).name
    except ValueError:
        return str(signum)


class NetworkCleanup:
    """
    Interrupt handler bound to one network.

    The first interrupt prints the cleanup notice and cancels the watched run
    task; later interrupts are ignored. ``cleanup()`` removes the network at
    most once, bounded by ``timeout_seconds``, and never raises.

    Usage:
        handler = NetworkCleanup(runtime, "zorknet")
        handler.watch(run_task)
        loop.add_signal_handler(signal.SIGINT, handler.interrupt, signal.SIGINT)
        ...
        removed = await handler.cleanup()
    """

    def __init__(
        self,
        runtime: ContainerRuntime,
        network_name: str,
        timeout_seconds: float = 10.0,
        notify: Optional[Callable[[str], Any]] = None,
    ):
        self.runtime = runtime
        self.network_name = network_name
        self.timeout_seconds = timeout_seconds
        self.notify = notify or console.print
        self.interrupted = False
        self.ignored_interrupts = 0
        self._task: Optional[asyncio.Task] = None
        self._cleanup: Optional[asyncio.Task] = None

    def watch(self, task: asyncio.Task) -> None:
        """Set the run task to cancel on interrupt."""
        self._task = task

    def interrupt(self, signum: Optional[int] = None) -> None:
        """Handle an interrupt signal."""
        if self.interrupted:
            self.ignored_interrupts += 1
            logger.warning(
                "interrupt_ignored",
                signal=_signal_name(signum),
                network=self.network_name,
            )
            return

        self.interrupted = True
        logger.info("interrupt_received", signal=_signal_name(signum), network=self.network_name)
        self.notify(CLEANUP_NOTICE)

        if self._task is not None and not self._task.done():
            self._task.cancel()

    @property
    def cleanup_started(self) -> bool:
        return self._cleanup is not None

    async def cleanup(self) -> bool:
        """
        Remove the network.

        Returns:
            True if the network was removed, False on failure or timeout
        """
        if self._cleanup is None:
            self._cleanup = asyncio.ensure_future(self._remove_network())
        return await self._cleanup

    async def _remove_network(self) -> bool:
        try:
            await asyncio.wait_for(
                self.runtime.remove_network(self.network_name),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(
                "cleanup_timed_out",
                network=self.network_name,
                timeout=self.timeout_seconds,
            )
            return False
        except Exception as e:
            log_error(logger, e, "remove_network", network=self.network_name)
            return False

        logger.info("cleanup_completed", network=self.network_name)
        return True
