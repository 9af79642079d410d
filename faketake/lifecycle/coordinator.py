"""Lifecycle coordinator: network up, container in the foreground, teardown on interrupt.

Order of operations:

1. Create the network. Failure propagates; nothing has been created, so
   there is nothing to clean up.
2. Install the interrupt handler for SIGINT and SIGTERM.
3. Run the container as a cancellable task and wait for it.

An interrupt cancels the run, removes the network (bounded by the cleanup
timeout) and ends the run with a status reflecting the removal outcome.
When the container exits on its own the network is left in place unless
``cleanup_on_exit`` is set.
"""

import asyncio
import signal
from typing import Any, Callable, Iterable, Optional

from faketake.config import Settings, get_settings
from faketake.docker.config import ContainerConfig
from faketake.docker.container import DOCKER_RUN_ERROR_CODES
from faketake.docker.exceptions import ContainerRunException
from faketake.docker.runtime import ContainerRuntime, DockerRuntime
from faketake.lifecycle.cleanup import NetworkCleanup
from faketake.lifecycle.state import TRANSITIONS, LifecycleState, RunResult
from faketake.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class LifecycleCoordinator:
    """
    Runs one container on one freshly created network.

    Usage:
        coordinator = LifecycleCoordinator(DockerRuntime())
        result = await coordinator.run()
        sys.exit(result.exit_code)
    """

    def __init__(
        self,
        runtime: ContainerRuntime,
        settings: Optional[Settings] = None,
        cleanup_on_exit: Optional[bool] = None,
        notify: Optional[Callable[[str], Any]] = None,
        signals: Iterable[signal.Signals] = DEFAULT_SIGNALS,
    ):
        """
        Initialize the coordinator.

        Args:
            runtime: Container runtime collaborator
            settings: Settings to use (defaults to the global settings)
            cleanup_on_exit: Remove the network when the container exits on
                its own; defaults to ``settings.cleanup_on_exit``
            notify: Console notice callback for the cleanup message
            signals: Signals that trigger cleanup
        """
        self.runtime = runtime
        self.settings = settings or get_settings()
        self.cleanup_on_exit = (
            self.settings.cleanup_on_exit if cleanup_on_exit is None else cleanup_on_exit
        )
        self.notify = notify
        self.signals = tuple(signals)
        self.state = LifecycleState.INIT
        self.handler: Optional[NetworkCleanup] = None

    @property
    def network_name(self) -> str:
        return self.settings.network_name

    def container_config(self) -> ContainerConfig:
        """Build the foreground run configuration."""
        return ContainerConfig(
            image=self.settings.image,
            name=self.settings.container_name,
            network=self.network_name,
            auto_remove=True,
            stop_timeout_seconds=self.settings.stop_timeout_seconds,
        )

    def _transition(self, new_state: LifecycleState) -> None:
        if new_state not in TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid lifecycle transition {self.state.value} -> {new_state.value}")
        logger.debug("lifecycle_transition", old=self.state.value, new=new_state.value)
        self.state = new_state

    async def run(self) -> RunResult:
        """
        Create the network, then run the container until it exits or is interrupted.

        Returns:
            RunResult describing how the run ended

        Raises:
            DockerException: If network creation fails, or the container run
                fails or exits non-zero without an interrupt
        """
        if self.state is not LifecycleState.INIT:
            raise RuntimeError("LifecycleCoordinator.run() can only be called once")

        await self.runtime.create_network(self.network_name)
        self._transition(LifecycleState.NETWORK_CREATED)

        handler = NetworkCleanup(
            self.runtime,
            self.network_name,
            timeout_seconds=self.settings.cleanup_timeout_seconds,
            notify=self.notify,
        )
        self.handler = handler

        loop = asyncio.get_running_loop()
        restore_signals = self._install_signal_handlers(loop, handler)
        try:
            run_task = asyncio.create_task(self.runtime.run_container(self.container_config()))
            handler.watch(run_task)
            self._transition(LifecycleState.RUNNING)

            try:
                returncode = await run_task
            except asyncio.CancelledError:
                if not handler.interrupted:
                    raise
                return await self._shutdown(handler)
            except Exception:
                if handler.interrupted:
                    return await self._shutdown(handler)
                if self.cleanup_on_exit:
                    await handler.cleanup()
                raise

            if handler.interrupted:
                return await self._shutdown(handler, returncode)
            return await self._finish(handler, returncode)
        finally:
            restore_signals()

    async def _shutdown(self, handler: NetworkCleanup, returncode: Optional[int] = None) -> RunResult:
        self._transition(LifecycleState.INTERRUPTED)
        self._transition(LifecycleState.CLEANING_UP)

        removed = await handler.cleanup()

        self._transition(LifecycleState.TERMINATED)
        logger.info("lifecycle_terminated", network=self.network_name, cleanup_succeeded=removed)
        return RunResult(
            state=self.state,
            interrupted=True,
            container_exit_code=returncode,
            cleanup_attempted=True,
            cleanup_succeeded=removed,
        )

    async def _finish(self, handler: NetworkCleanup, returncode: int) -> RunResult:
        self._transition(LifecycleState.EXITED_NORMALLY)

        result = RunResult(state=self.state, container_exit_code=returncode)
        if self.cleanup_on_exit:
            result.cleanup_attempted = True
            result.cleanup_succeeded = await handler.cleanup()
        else:
            logger.info("network_left_in_place", network=self.network_name)

        if returncode != 0:
            details = "docker could not run the container" if returncode in DOCKER_RUN_ERROR_CODES else ""
            raise ContainerRunException(self.settings.container_name, returncode, details)

        return result

    def _install_signal_handlers(
        self, loop: asyncio.AbstractEventLoop, handler: NetworkCleanup
    ) -> Callable[[], None]:
        """Route the configured signals to the handler; returns a restore callback."""
        via_loop: list[signal.Signals] = []
        via_signal: list[tuple[signal.Signals, Any]] = []

        for sig in self.signals:
            try:
                loop.add_signal_handler(sig, handler.interrupt, sig)
                via_loop.append(sig)
            except NotImplementedError:
                # Windows event loops cannot install signal handlers
                previous = signal.signal(
                    sig,
                    lambda signum, frame: loop.call_soon_threadsafe(handler.interrupt, signum),
                )
                via_signal.append((sig, previous))

        def restore() -> None:
            for sig in via_loop:
                loop.remove_signal_handler(sig)
            for sig, previous in via_signal:
                signal.signal(sig, previous)

        return restore


def run_lifecycle(
    settings: Optional[Settings] = None,
    cleanup_on_exit: Optional[bool] = None,
    runtime: Optional[ContainerRuntime] = None,
) -> int:
    """
    Run the coordinator to completion on a new event loop.

    Returns:
        Process exit code
    """
    settings = settings or get_settings()
    if runtime is None:
        runtime = DockerRuntime(
            docker_binary=settings.docker_binary,
            network_driver=settings.network_driver,
        )

    coordinator = LifecycleCoordinator(runtime, settings, cleanup_on_exit=cleanup_on_exit)
    result = asyncio.run(coordinator.run())
    return result.exit_code
