"""
Waiting for a marker line in the output of a long-running process.

LogWatcher attaches to a command (normally `docker logs --follow NAME`) and
races three sources against each other:

- standard output lines, each checked for the target substring
- standard error output, fatal when break_on_error is set
- a deadline started when the watch begins, plus an optional cancel event

The first of them to resolve decides the terminal state. The process is torn
down before `watch()` returns or raises, whatever the outcome.

State machine: RUNNING -> MATCHED | TIMED_OUT | FAILED | CANCELLED
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, TypeVar, Union

from ..executor.stream_process import STDOUT, StreamEvent, StreamingProcess
from ..models.command import CommandSpec
from ..models.watch import ExitPolicy, LogWatchResult, WatchState
from ..validation import (
    LogWatchCancelledError,
    LogWatchExitedError,
    LogWatchTimeoutError,
    UpstreamFatalError,
    ValidationError,
    validate_positive_float,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Signal:
    """Non-output outcome of waiting for the next event."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.name}>"


_DEADLINE = _Signal("deadline")
_CANCELLED = _Signal("cancelled")


@dataclass(frozen=True)
class _Outcome:
    state: WatchState
    matched_line: str = ""
    exit_code: Optional[int] = None
    upstream_error: bool = False


class LogWatcher:
    """
    Single-use watcher for one target substring in one process's output.
    """

    def __init__(
        self,
        spec: CommandSpec,
        target: str,
        timeout: float,
        break_on_error: bool = True,
        exit_policy: Union[ExitPolicy, str] = ExitPolicy.WAIT,
        termination_timeout: float = 2.0,
        cancel_event: Optional[asyncio.Event] = None,
    ):
        """
        Args:
            spec: Command whose standard output is watched
            target: Substring to look for; matched literally
            timeout: Seconds before the watch gives up
            break_on_error: Treat any standard error output as fatal
            exit_policy: Behaviour when the process exits without a match
            termination_timeout: Grace period between SIGTERM and SIGKILL on teardown
            cancel_event: Setting this event terminates the watch early

        Raises:
            ValidationError: If target is empty or a duration is not positive
        """
        if not isinstance(target, str) or not target:
            raise ValidationError("target must be a non-empty string", field_name="target", value=target)

        self.spec = spec
        self.target = target
        self.timeout = validate_positive_float(timeout, field_name="timeout", exclusive_min=True)
        self.break_on_error = break_on_error
        try:
            self.exit_policy = ExitPolicy(exit_policy)
        except ValueError:
            raise ValidationError(
                f"exit_policy must be one of {[policy.value for policy in ExitPolicy]}, got {exit_policy!r}",
                field_name="exit_policy",
                value=exit_policy,
            )
        self.termination_timeout = validate_positive_float(
            termination_timeout, field_name="termination_timeout"
        )
        self.cancel_event = cancel_event

        self.state = WatchState.RUNNING
        self.pid: Optional[int] = None
        self._stdout: List[str] = []
        self._stderr: List[str] = []
        self._started = False

    @property
    def stdout(self) -> str:
        return "".join(self._stdout)

    @property
    def stderr(self) -> str:
        return "".join(self._stderr)

    async def watch(self) -> LogWatchResult:
        """
        Run the watch to a terminal state.

        Returns:
            LogWatchResult when the target appeared

        Raises:
            SpawnFailedError: If the command could not be started
            UpstreamFatalError: If error output arrived first and break_on_error is set
            LogWatchExitedError: If the process exited first and exit_policy is FAIL
            LogWatchTimeoutError: If the deadline passed first
            LogWatchCancelledError: If cancel_event was set first
            RuntimeError: If this watcher was already used
        """
        if self._started:
            raise RuntimeError("LogWatcher instances are single-use")
        self._started = True

        loop = asyncio.get_running_loop()
        start_time = loop.time()
        deadline = start_time + self.timeout
        logger.info(f"Waiting up to {self.timeout}s for {self.target!r} from '{self.spec}'")

        try:
            async with StreamingProcess(self.spec, self.termination_timeout) as process:
                self.pid = process.pid
                outcome = await self._consume(process, deadline)
                elapsed = loop.time() - start_time
        except asyncio.CancelledError:
            self._transition(WatchState.CANCELLED)
            raise
        except BaseException:
            if not self.state.is_terminal:
                self._transition(WatchState.FAILED)
            raise

        self._transition(outcome.state)
        return self._resolve(outcome, elapsed)

    def _transition(self, state: WatchState) -> None:
        if self.state.is_terminal:
            raise RuntimeError(f"Watch already finished as {self.state.value}")
        logger.debug(f"Watch for {self.target!r}: {self.state.value} -> {state.value}")
        self.state = state

    def _resolve(self, outcome: _Outcome, elapsed: float) -> LogWatchResult:
        if outcome.state is WatchState.MATCHED:
            logger.info(f"Found {self.target!r} after {elapsed:.2f}s")
            return LogWatchResult(
                target=self.target,
                matched_line=outcome.matched_line,
                elapsed_seconds=elapsed,
                stdout=self.stdout,
                stderr=self.stderr,
                pid=self.pid,
            )

        if outcome.state is WatchState.CANCELLED:
            logger.info(f"Watch for {self.target!r} cancelled after {elapsed:.2f}s")
            raise LogWatchCancelledError(self.target, self.stdout, self.stderr)

        if outcome.state is WatchState.TIMED_OUT:
            logger.error(f"Timed out after {elapsed:.2f}s waiting for {self.target!r}")
            raise LogWatchTimeoutError(self.target, self.timeout, self.stdout, self.stderr)

        if outcome.upstream_error:
            logger.error(f"Error output while waiting for {self.target!r}: {self.stderr.strip()}")
            raise UpstreamFatalError(self.target, self.stdout, self.stderr)

        logger.error(f"Process exited with code {outcome.exit_code} before {self.target!r} appeared")
        raise LogWatchExitedError(self.target, self.timeout, outcome.exit_code, self.stdout, self.stderr)

    async def _consume(self, process: StreamingProcess, deadline: float) -> _Outcome:
        closed_streams = set()

        while True:
            event = await self._next_event(process, deadline)

            if event is _CANCELLED:
                return _Outcome(WatchState.CANCELLED)
            if event is _DEADLINE:
                return _Outcome(WatchState.TIMED_OUT)

            if event.is_eof:
                closed_streams.add(event.stream)
                if len(closed_streams) < 2:
                    continue
                # Closed pipes do not mean the process is gone; keep racing the deadline.
                exit_code = await self._race(process.wait, deadline)
                if exit_code is _CANCELLED:
                    return _Outcome(WatchState.CANCELLED)
                if exit_code is _DEADLINE:
                    logger.warning(f"PID {process.pid} closed its output but was still running at the deadline")
                    return _Outcome(WatchState.TIMED_OUT)
                logger.info(f"Watched process exited on its own with code {exit_code}")
                # One final check over everything captured before deciding on the exit.
                matched_line = self._find_in_output()
                if matched_line is not None:
                    return _Outcome(WatchState.MATCHED, matched_line=matched_line)
                if self.exit_policy is ExitPolicy.FAIL:
                    return _Outcome(WatchState.FAILED, exit_code=exit_code)
                continue

            if event.stream == STDOUT:
                self._stdout.append(event.data)
                if self.target in event.data:
                    return _Outcome(WatchState.MATCHED, matched_line=event.data.rstrip("\r\n"))
            else:
                self._stderr.append(event.data)
                if self.break_on_error:
                    return _Outcome(WatchState.FAILED, upstream_error=True)

    def _find_in_output(self) -> Optional[str]:
        for line in self.stdout.splitlines():
            if self.target in line:
                return line
        return None

    async def _next_event(self, process: StreamingProcess, deadline: float) -> Union[StreamEvent, _Signal]:
        """Wait for the next output event, the deadline or cancellation, whichever is first."""
        return await self._race(process.events.get, deadline)

    async def _race(self, operation: Callable[[], Awaitable[T]], deadline: float) -> Union[T, _Signal]:
        """
        Run `operation()` against the deadline and the cancel event.

        Returns:
            The operation's result, or _DEADLINE / _CANCELLED if either came first
        """
        loop = asyncio.get_running_loop()

        while True:
            if self.cancel_event is not None and self.cancel_event.is_set():
                return _CANCELLED

            remaining = deadline - loop.time()
            if remaining <= 0:
                return _DEADLINE

            operation_task = asyncio.create_task(operation())
            waiters = {operation_task}
            cancel_task = None
            if self.cancel_event is not None:
                cancel_task = asyncio.create_task(self.cancel_event.wait())
                waiters.add(cancel_task)

            try:
                done, _ = await asyncio.wait(waiters, timeout=remaining, return_when=asyncio.FIRST_COMPLETED)
            finally:
                for task in waiters:
                    if not task.done():
                        task.cancel()
                await asyncio.gather(*waiters, return_exceptions=True)

            if cancel_task is not None and cancel_task in done:
                return _CANCELLED
            if operation_task in done:
                return operation_task.result()
            # Timer fired; the deadline is re-checked against the loop clock.


async def wait_for_output(
    spec: CommandSpec,
    target: str,
    timeout: float,
    **kwargs,
) -> LogWatchResult:
    """
    Convenience wrapper: watch `spec` until `target` appears.

    Accepts the same keyword arguments as LogWatcher.
    """
    return await LogWatcher(spec, target, timeout, **kwargs).watch()
