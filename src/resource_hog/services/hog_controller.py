"""Hog controller service.

Owns the single active load generator process and the HogState describing
it. Replaces a process-wide mutable global with a controller instance that
the Flask service holds, so several controllers can coexist (tests, multiple
apps) without sharing state.
"""

import atexit
import logging
import multiprocessing
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

import psutil

from resource_hog.constants import (
    HOG_GRACE_PERIOD_SECONDS,
    HOG_MINUTE_SECONDS,
    HOG_PROCESS_NAME,
    PROCESS_TERMINATE_TIMEOUT,
    STATUS_NOT_RUNNING,
    STATUS_RUNNING,
    STATUS_STARTED,
    STATUS_STOPPED,
)
from resource_hog.workers.hog_config import HogConfiguration, parse_config
from resource_hog.workers.hog_worker import hog_worker_target


class HogError(Exception):
    """Base error for the resource hog subsystem."""


class GeneratorSpawnError(HogError):
    """The load generator process could not be created."""


def _format_runtime(seconds: int) -> str:
    return f"{seconds} seconds"


@dataclass
class GeneratorHandle:
    """Controller-side ownership record for one generator process."""

    process: Any
    stop_event: Any
    watcher: Optional[threading.Thread] = None

    @property
    def pid(self) -> Optional[int]:
        return getattr(self.process, "pid", None)


@dataclass
class HogState:
    """State of the active generator.

    generator, config and started_at are always set or cleared together.
    """

    generator: Optional[GeneratorHandle] = None
    config: Optional[HogConfiguration] = None
    started_at: Optional[str] = None
    started_monotonic: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self.generator is not None

    def set(self, generator: GeneratorHandle, config: HogConfiguration, started_monotonic: float) -> None:
        self.generator = generator
        self.config = config
        self.started_at = datetime.now(timezone.utc).isoformat()
        self.started_monotonic = started_monotonic

    def clear(self) -> None:
        self.generator = None
        self.config = None
        self.started_at = None
        self.started_monotonic = None


@dataclass
class StartResult:
    config: HogConfiguration
    started_at: str
    status: str = STATUS_STARTED

    @property
    def message(self) -> str:
        return (
            f"Resource hog started. Will auto-stop after "
            f"{self.config.max_minutes} minutes."
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        return {
            "status": self.status,
            "config": self.config.to_dict(),
            "startedAt": self.started_at,
            "message": self.message,
        }


@dataclass
class StopResult:
    status: str
    config: Optional[HogConfiguration] = None
    runtime_seconds: Optional[int] = None

    @property
    def message(self) -> str:
        if self.status == STATUS_STOPPED:
            return "Resource hog stopped successfully."
        return "Resource hog is not currently running."

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        result: Dict[str, Any] = {"status": self.status}
        if self.status == STATUS_STOPPED:
            result["config"] = self.config.to_dict() if self.config else None
            result["runtime"] = _format_runtime(self.runtime_seconds or 0)
            result["runtimeSeconds"] = self.runtime_seconds or 0
        result["message"] = self.message
        return result


@dataclass
class StatusResult:
    status: str
    config: Optional[HogConfiguration] = None
    started_at: Optional[str] = None
    runtime_seconds: Optional[int] = None
    process: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        if self.status != STATUS_RUNNING:
            return {"status": self.status}
        return {
            "status": self.status,
            "config": self.config.to_dict() if self.config else None,
            "startedAt": self.started_at,
            "runtime": _format_runtime(self.runtime_seconds or 0),
            "runtimeSeconds": self.runtime_seconds or 0,
            "process": self.process,
        }


class HogController:
    """Starts, stops and reports on the single resource hog generator.

    At most one generator process is alive per controller. A second start
    replaces the first. A stop clears state immediately and leaves a grace
    timer to force-terminate the process if it ignores the stop signal.

    A watcher thread per generator joins the process and clears state when it
    exits on its own (expiry timer or fault), so status() can lag actual
    termination by the time it takes the watcher to wake up.
    """

    def __init__(
        self,
        grace_period_seconds: float = HOG_GRACE_PERIOD_SECONDS,
        minute_seconds: float = HOG_MINUTE_SECONDS,
        logger: Optional[logging.Logger] = None,
        process_factory: Callable[..., Any] = multiprocessing.Process,
        event_factory: Callable[[], Any] = multiprocessing.Event,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize hog controller.

        Args:
            grace_period_seconds: Wait after a stop signal before forcing
                termination
            minute_seconds: Length of one expiry minute handed to the worker
            logger: Optional logger instance. If not provided, creates one.
            process_factory: Builds the generator process (injectable for
                tests)
            event_factory: Builds the stop signal
            clock: Monotonic clock used for runtime
        """
        self.grace_period_seconds = grace_period_seconds
        self.minute_seconds = minute_seconds
        self._state = HogState()
        self._lock = threading.Lock()
        self._logger = logger or logging.getLogger(self.__class__.__name__)
        self._process_factory = process_factory
        self._event_factory = event_factory
        self._clock = clock
        # Never leave a hog running after the host process exits
        atexit.register(self.shutdown)

    @property
    def state(self) -> HogState:
        return self._state

    # ---- Operations ----

    def start(self, raw_params: Optional[Mapping[str, Any]] = None) -> StartResult:
        """Start a generator, replacing any active one.

        Raises:
            GeneratorSpawnError: If the worker process could not be started
        """
        config = parse_config(raw_params)

        with self._lock:
            previous = self._state.generator
            self._state.clear()

        if previous is not None:
            self._logger.info("Stopping existing generator to start with new configuration")
            self._terminate(previous)

        self._logger.info("Starting resource hog with config: %s", config.to_dict())

        try:
            stop_event = self._event_factory()
            process = self._process_factory(
                target=hog_worker_target,
                args=(config, stop_event, self.minute_seconds),
                name=HOG_PROCESS_NAME,
                daemon=True,
            )
            process.start()
        except (OSError, ValueError, RuntimeError) as exc:
            raise GeneratorSpawnError(str(exc)) from exc

        handle = GeneratorHandle(process=process, stop_event=stop_event)
        with self._lock:
            self._state.set(handle, config, self._clock())
            result = StartResult(config=config, started_at=self._state.started_at)

        handle.watcher = threading.Thread(
            target=self._watch,
            args=(handle,),
            name=f"{HOG_PROCESS_NAME}-watcher",
            daemon=True,
        )
        handle.watcher.start()

        return result

    def stop(self) -> StopResult:
        """Signal the active generator to stop and clear state immediately."""
        with self._lock:
            handle = self._state.generator
            if handle is None:
                return StopResult(status=STATUS_NOT_RUNNING)

            config = self._state.config
            runtime = self._runtime_seconds()
            self._state.clear()

        self._logger.info("Stopping resource hog")
        handle.stop_event.set()

        grace_timer = threading.Timer(
            self.grace_period_seconds, self._force_terminate, args=(handle,)
        )
        grace_timer.daemon = True
        grace_timer.start()

        return StopResult(status=STATUS_STOPPED, config=config, runtime_seconds=runtime)

    def status(self) -> StatusResult:
        """Report whether a generator is running and for how long."""
        with self._lock:
            handle = self._state.generator
            if handle is None:
                return StatusResult(status=STATUS_NOT_RUNNING)

            return StatusResult(
                status=STATUS_RUNNING,
                config=self._state.config,
                started_at=self._state.started_at,
                runtime_seconds=self._runtime_seconds(),
                process=self._process_info(handle),
            )

    def shutdown(self) -> None:
        """Terminate the active generator without waiting for the grace period."""
        with self._lock:
            handle = self._state.generator
            self._state.clear()
        if handle is not None:
            self._terminate(handle)

    # ---- Internals ----

    def _runtime_seconds(self) -> int:
        """Whole seconds since start. Must be called with lock held."""
        if self._state.started_monotonic is None:
            return 0
        return max(0, int(self._clock() - self._state.started_monotonic))

    def _process_info(self, handle: GeneratorHandle) -> Dict[str, Any]:
        info: Dict[str, Any] = {"pid": handle.pid, "rssMb": None}
        if handle.pid is None:
            return info
        try:
            rss = psutil.Process(handle.pid).memory_info().rss
            info["rssMb"] = rss // (1024 * 1024)
        except (psutil.Error, OSError):
            pass
        return info

    def _is_alive(self, handle: GeneratorHandle) -> bool:
        """Liveness as seen by the watcher.

        Only the watcher thread joins or polls the process: under forkserver
        a second reader of the process sentinel can see EOF and record a
        bogus exit code.
        """
        if handle.watcher is not None:
            return handle.watcher.is_alive()
        return handle.process.is_alive()

    def _kill(self, handle: GeneratorHandle) -> None:
        handle.process.terminate()
        if handle.watcher is not None:
            handle.watcher.join(timeout=PROCESS_TERMINATE_TIMEOUT)
        else:
            handle.process.join(timeout=PROCESS_TERMINATE_TIMEOUT)

    def _terminate(self, handle: GeneratorHandle) -> None:
        """Signal and unconditionally terminate a generator process."""
        handle.stop_event.set()
        if self._is_alive(handle):
            self._kill(handle)

    def _force_terminate(self, handle: GeneratorHandle) -> None:
        """Grace period expired: kill the process if it is still alive."""
        if not self._is_alive(handle):
            return
        self._logger.warning("Force terminating generator pid=%s", handle.pid)
        self._kill(handle)

    def _watch(self, handle: GeneratorHandle) -> None:
        """Wait for a generator to exit and reconcile state."""
        handle.process.join()
        exitcode = handle.process.exitcode

        if exitcode is None or exitcode == 0:
            self._logger.info("Generator exited with code %s", exitcode)
        elif exitcode < 0:
            self._logger.info("Generator terminated by signal %s", -exitcode)
        else:
            self._logger.error("Generator failed with exit code %s", exitcode)

        self._on_generator_exit(handle)

    def _on_generator_exit(self, handle: GeneratorHandle) -> None:
        with self._lock:
            # A replaced generator must not clear its successor's state
            if self._state.generator is handle:
                self._state.clear()
