"""
Unit tests for StreamingProcess.

Tests event forwarding for both output streams, end-of-stream markers, spawn
failures, and teardown of running processes and their descendants.
"""

import asyncio

import pytest

from dockcli.executor import STDERR, STDOUT, StreamEvent, StreamingProcess
from dockcli.models import CommandSpec
from dockcli.system import is_process_alive
from dockcli.validation import SpawnFailedError


async def collect_until_eof(process, timeout=10.0):
    """Gather events until both streams have reported end of stream."""
    events = []
    closed = set()
    while len(closed) < 2:
        event = await asyncio.wait_for(process.events.get(), timeout=timeout)
        if event.is_eof:
            closed.add(event.stream)
        else:
            events.append(event)
    return events


@pytest.mark.unit
class TestStreamingProcess:
    """Test cases for StreamingProcess."""

    @pytest.mark.asyncio
    async def test_forwards_stdout_lines_and_stderr_chunks(self, python_spec):
        """Test that both streams are forwarded with their stream name."""
        spec = python_spec("""
            import sys
            print("one")
            print("two")
            sys.stdout.flush()
            sys.stderr.write("oops")
        """)

        async with StreamingProcess(spec) as process:
            events = await collect_until_eof(process)
            assert await process.wait() == 0

        stdout = [event.data for event in events if event.stream == STDOUT]
        stderr = "".join(event.data for event in events if event.stream == STDERR)
        assert stdout == ["one\n", "two\n"]
        assert stderr == "oops"

    @pytest.mark.asyncio
    async def test_stderr_without_newline_is_delivered_while_running(self, python_spec):
        """Error output is forwarded before the process exits."""
        spec = python_spec("""
            import sys, time
            sys.stderr.write("partial")
            sys.stderr.flush()
            time.sleep(30)
        """)

        async with StreamingProcess(spec) as process:
            event = await asyncio.wait_for(process.events.get(), timeout=10)
            assert event == StreamEvent(STDERR, "partial")
            assert process.returncode is None

    @pytest.mark.asyncio
    async def test_teardown_kills_running_process(self, python_spec):
        spec = python_spec("import time; time.sleep(30)")

        async with StreamingProcess(spec, termination_timeout=1.0) as process:
            pid = process.pid
            assert is_process_alive(pid)

        assert process.returncode is not None
        assert not is_process_alive(pid)

    @pytest.mark.asyncio
    async def test_teardown_escalates_to_kill(self, python_spec):
        """A child ignoring SIGTERM is killed after the termination timeout."""
        spec = python_spec("""
            import signal, time
            signal.signal(signal.SIGTERM, signal.SIG_IGN)
            print("armed", flush=True)
            time.sleep(30)
        """)

        async with StreamingProcess(spec, termination_timeout=0.5) as process:
            event = await asyncio.wait_for(process.events.get(), timeout=10)
            assert event.data == "armed\n"

        assert process.returncode == -9

    @pytest.mark.asyncio
    async def test_teardown_terminates_descendants(self, python_spec):
        """Grandchildren do not outlive the watched process."""
        spec = python_spec("""
            import subprocess, sys, time
            child = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(60)"])
            print(child.pid, flush=True)
            time.sleep(60)
        """)

        async with StreamingProcess(spec, termination_timeout=1.0) as process:
            event = await asyncio.wait_for(process.events.get(), timeout=10)
            grandchild_pid = int(event.data)
            assert is_process_alive(grandchild_pid)

        assert not is_process_alive(grandchild_pid)

    @pytest.mark.asyncio
    async def test_teardown_after_exit_is_harmless(self, python_spec):
        process = StreamingProcess(python_spec("print('done')"))
        await process.start()
        await collect_until_eof(process)
        await process.wait()

        await process.terminate()
        await process.terminate()

        assert process.returncode == 0

    @pytest.mark.asyncio
    async def test_teardown_on_exception(self, python_spec):
        spec = python_spec("import time; time.sleep(30)")

        with pytest.raises(KeyError):
            async with StreamingProcess(spec, termination_timeout=1.0) as process:
                pid = process.pid
                raise KeyError("boom")

        assert not is_process_alive(pid)

    @pytest.mark.asyncio
    async def test_missing_executable(self):
        process = StreamingProcess(CommandSpec.of("dockcli-no-such-binary-4711", "logs"))

        with pytest.raises(SpawnFailedError):
            await process.start()

        assert process.pid is None

    @pytest.mark.asyncio
    async def test_start_twice_rejected(self, python_spec):
        async with StreamingProcess(python_spec("pass")) as process:
            with pytest.raises(RuntimeError):
                await process.start()

    @pytest.mark.asyncio
    async def test_over_long_line_is_dropped(self, python_spec):
        spec = python_spec("""
            print("x" * 5000)
            print("short")
        """)

        async with StreamingProcess(spec, line_limit=1024) as process:
            events = await collect_until_eof(process)

        lines = [event.data for event in events if event.stream == STDOUT]
        assert "short\n" in lines
        assert "x" * 5000 + "\n" not in lines
