"""
Bounded-streaming process execution.

This module provides StreamingProcess, an async context manager that spawns a
long-running command and forwards its output, as it arrives, into a single
event queue. Standard output is forwarded line by line; standard error is
forwarded in raw chunks so that any error output is visible immediately, even
without a trailing newline.

Leaving the context always tears the process down: descendants are terminated
through psutil, the child gets SIGTERM and then SIGKILL if it does not exit
within the termination timeout, it is reaped, and the reader tasks are drained
and stopped. This holds for every exit path, including exceptions and
cancellation of the enclosing task.
"""

import asyncio
import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from ..models.command import CommandSpec
from ..system.processes import terminate_descendants
from ..validation import SpawnFailedError, handle_subprocess_error, ErrorSeverity

logger = logging.getLogger(__name__)

STDOUT = "stdout"
STDERR = "stderr"

# StreamReader buffer limit, i.e. the longest line readline() accepts.
DEFAULT_LINE_LIMIT = 1024 * 1024
STDERR_CHUNK_SIZE = 4096


@dataclass(frozen=True)
class StreamEvent:
    """A piece of output, or the end of one stream when `data` is None."""

    stream: str
    data: Optional[str]

    @property
    def is_eof(self) -> bool:
        return self.data is None


class StreamingProcess:
    """
    A spawned process whose output is consumed incrementally.

    Usage:
        async with StreamingProcess(spec) as process:
            event = await process.events.get()
    """

    def __init__(
        self,
        spec: CommandSpec,
        termination_timeout: float = 2.0,
        line_limit: int = DEFAULT_LINE_LIMIT,
    ):
        """
        Args:
            spec: The command to spawn
            termination_timeout: Seconds to wait after SIGTERM before SIGKILL
            line_limit: Longest standard output line accepted by the reader
        """
        self.spec = spec
        self.termination_timeout = termination_timeout
        self.line_limit = line_limit

        self.process: Optional[asyncio.subprocess.Process] = None
        self.events: "asyncio.Queue[StreamEvent]" = asyncio.Queue()
        self._readers: List[asyncio.Task] = []

    @property
    def pid(self) -> Optional[int]:
        return self.process.pid if self.process else None

    @property
    def returncode(self) -> Optional[int]:
        return self.process.returncode if self.process else None

    async def start(self) -> int:
        """
        Spawn the process and start forwarding its output.

        Returns:
            Process ID of the started process

        Raises:
            RuntimeError: If the process was already started
            SpawnFailedError: If the executable is missing or not runnable
        """
        if self.process is not None:
            raise RuntimeError("Process is already started")

        logger.debug(f"Spawning streaming command: {self.spec}")
        try:
            self.process = await asyncio.create_subprocess_exec(
                *self.spec.argv,
                stdin=subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=self.line_limit,
            )
        except FileNotFoundError as e:
            logger.error(f"Command not found: {self.spec.executable}: {e}")
            raise SpawnFailedError(self.spec, "executable not found") from e
        except PermissionError as e:
            logger.error(f"Command not runnable: {self.spec.executable}: {e}")
            raise SpawnFailedError(self.spec, "permission denied") from e
        except OSError as e:
            logger.error(f"Could not start '{self.spec}': {type(e).__name__}: {e}")
            raise SpawnFailedError(self.spec, str(e)) from e

        self._readers = [
            asyncio.create_task(self._forward_lines(self.process.stdout, STDOUT)),
            asyncio.create_task(self._forward_chunks(self.process.stderr, STDERR)),
        ]
        logger.info(f"Streaming process started with PID {self.process.pid}")
        return self.process.pid

    async def wait(self) -> int:
        """Wait for the process to exit on its own and return its exit code."""
        if self.process is None:
            raise RuntimeError("No process to wait for")
        return await self.process.wait()

    async def terminate(self) -> None:
        """
        Tear the process down and release its streams.

        Safe to call more than once and on a process that already exited.
        """
        if self.process is None:
            return

        if self.process.returncode is None:
            pid = self.process.pid
            try:
                loop = asyncio.get_running_loop()
                await loop.run_in_executor(
                    None, terminate_descendants, pid, self.termination_timeout
                )
            except Exception as e:
                handle_subprocess_error(
                    e, str(self.spec), severity=ErrorSeverity.WARNING, reraise=False, logger=logger
                )

            self._send(self.process.terminate)
            try:
                await asyncio.wait_for(self.process.wait(), timeout=self.termination_timeout)
            except asyncio.TimeoutError:
                logger.warning(f"PID {pid} ignored SIGTERM, sending SIGKILL")
                self._send(self.process.kill)
                await self.process.wait()

            logger.info(f"Streaming process {pid} terminated with code {self.process.returncode}")

        await self._stop_readers()

    def _send(self, signal_method) -> None:
        try:
            signal_method()
        except ProcessLookupError:
            # Exited between the returncode check and the signal.
            pass

    async def _stop_readers(self) -> None:
        if not self._readers:
            return
        # With the process gone the pipes reach EOF, so the readers normally
        # finish on their own and close the transports.
        _, pending = await asyncio.wait(self._readers, timeout=self.termination_timeout)
        for task in pending:
            task.cancel()
        await asyncio.gather(*self._readers, return_exceptions=True)
        self._readers = []

    async def _forward_lines(self, stream: asyncio.StreamReader, name: str) -> None:
        while True:
            try:
                line = await stream.readline()
            except ValueError as e:
                # readline() discards a line longer than the buffer limit.
                logger.warning(f"Dropped over-long line on {name}: {e}")
                continue
            if not line:
                break
            await self.events.put(StreamEvent(name, line.decode("utf-8", errors="replace")))
        await self.events.put(StreamEvent(name, None))

    async def _forward_chunks(self, stream: asyncio.StreamReader, name: str) -> None:
        while True:
            chunk = await stream.read(STDERR_CHUNK_SIZE)
            if not chunk:
                break
            await self.events.put(StreamEvent(name, chunk.decode("utf-8", errors="replace")))
        await self.events.put(StreamEvent(name, None))

    async def __aenter__(self) -> "StreamingProcess":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.terminate()
