"""
Pytest configuration and shared fixtures for the dockcli test suite.

Process tests never need a docker daemon: they spawn the running Python
interpreter, or a fake `docker` script written to a temporary directory that
answers each subcommand with canned output.
"""

import shutil
import stat
import sys
import tempfile
import textwrap
from pathlib import Path

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def python_spec():
    """Build a CommandSpec running a Python snippet in a fresh interpreter."""
    from dockcli.models import CommandSpec

    def make(code: str) -> CommandSpec:
        return CommandSpec(sys.executable, ("-c", textwrap.dedent(code)))

    return make


PS_HEADER = (
    "CONTAINER ID   IMAGE          COMMAND                  CREATED          "
    "STATUS                      PORTS                    NAMES"
)
PS_ROWS = [
    "4f1c2a9e8b7d   postgres:16    \"docker-entrypoint.sh\"   2 minutes ago    "
    "Up 2 minutes                0.0.0.0:5432->5432/tcp   db",
    "9a8b7c6d5e4f   nginx:latest   \"/docker-entrypoint.s\"   3 hours ago      "
    "Exited (0) 2 hours ago                               web,web-alias",
]


@pytest.fixture
def ps_output():
    """Full `ps -a` output with one running and one exited container."""
    return "\n".join([PS_HEADER, *PS_ROWS]) + "\n"


FAKE_DOCKER = '''\
#!{python}
import os
import sys
import time

PS_HEADER = {ps_header!r}
PS_ROWS = {ps_rows!r}

args = sys.argv[1:]
log_path = os.environ.get("FAKE_DOCKER_LOG")
if log_path:
    with open(log_path, "a") as log:
        log.write(" ".join(args) + "\\n")

command = args[0] if args else ""

if command == "ps":
    filters = [args[i + 1] for i, arg in enumerate(args) if arg == "--filter"]
    print(PS_HEADER)
    for row in PS_ROWS:
        if "-a" not in args and "Exited" in row:
            continue
        if any(f.startswith("name=") and f[5:] not in row for f in filters):
            continue
        print(row)
elif command == "build":
    print("Step 1/2 : FROM alpine")
    print("Step 2/2 : CMD echo hi")
    if "buildkit-ctx" not in args:
        print("Successfully built 3c1f9a7e2b4d")
elif command == "run":
    print("4f1c2a9e8b7d" + "0" * 52)
elif command == "pull":
    print("latest: Pulling from library/alpine")
elif command in ("start", "stop", "rm"):
    name = args[-1]
    if name == "ghost":
        sys.stderr.write("Error response from daemon: No such container: ghost\\n")
        sys.exit(1)
    print(name)
elif command == "logs":
    name = args[-1]
    if name == "ready":
        print("starting", flush=True)
        time.sleep(0.2)
        print("server is ready to accept connections", flush=True)
        time.sleep(30)
    elif name == "noisy":
        sys.stderr.write("fatal: bad config\\n")
        sys.stderr.flush()
        time.sleep(30)
    elif name == "quitter":
        print("bye", flush=True)
    else:
        time.sleep(30)
else:
    sys.stderr.write("unknown command: " + command + "\\n")
    sys.exit(125)
'''


@pytest.fixture
def fake_docker(temp_dir, monkeypatch):
    """
    Write an executable fake docker script and return its path.

    Every invocation appends its arguments to `calls.log` next to the script.
    """
    script = temp_dir / "docker"
    script.write_text(FAKE_DOCKER.format(python=sys.executable, ps_header=PS_HEADER, ps_rows=PS_ROWS))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    monkeypatch.setenv("FAKE_DOCKER_LOG", str(temp_dir / "calls.log"))
    return script


@pytest.fixture
def fake_docker_calls(fake_docker):
    """Return a function reading the argument lines the fake docker received."""
    def read():
        log = fake_docker.parent / "calls.log"
        return log.read_text().splitlines() if log.exists() else []

    return read


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Reset the configuration singleton around each test."""
    from dockcli.config import set_config_path

    set_config_path(None)
    yield
    set_config_path(None)
