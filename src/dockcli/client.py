"""
DockerClient: the programmatic façade over the docker command-line tool.

Each method builds an argument list, runs it through the synchronous invoker
and converts the output. `wait_for_log_async` is the exception: it follows a
container's logs through the bounded-streaming executor until a marker line
appears.
"""

import asyncio
import dataclasses
import logging
from typing import Iterable, List, Optional

from .commands import (
    Filter,
    NameFilter,
    RunArguments,
    build_args,
    logs_args,
    ps_args,
    pull_args,
    remove_args,
    start_args,
    stop_args,
)
from .config import get_config
from .models.command import CommandSpec, ExecutionResult
from .models.containers import ContainerInfo
from .models.watch import ExitPolicy, LogWatchResult
from .monitoring.log_watch import LogWatcher
from .parsing import extract_built_image_id, parse_ps_output
from .system.commands import run_command

logger = logging.getLogger(__name__)


class DockerClient:
    """
    Runs docker subcommands and returns structured results.

    Every call spawns exactly one process; failures surface as exceptions from
    dockcli.validation and are never retried here.
    """

    def __init__(self, executable: Optional[str] = None):
        """
        Args:
            executable: CLI name or path; defaults to the configured executable
        """
        self.executable = executable or get_config().docker.executable

    def _spec(self, args: Iterable[str]) -> CommandSpec:
        return CommandSpec(self.executable, tuple(args))

    def _run(self, args: Iterable[str]) -> ExecutionResult:
        return run_command(self._spec(args))

    def build(self, path: str = ".", tag: Optional[str] = None) -> Optional[str]:
        """
        Build an image from a directory.

        Returns:
            The built image id, or None when the build output does not report one
        """
        result = self._run(build_args(path, tag=tag))
        image_id = extract_built_image_id(result.stdout)
        if image_id is None:
            logger.warning(f"Build of {path} succeeded but reported no image id")
        else:
            logger.info(f"Built image {image_id} from {path}")
        return image_id

    def run_image(
        self,
        image: str,
        name: Optional[str] = None,
        hostname: Optional[str] = None,
        interactive: bool = False,
        arguments: Optional[RunArguments] = None,
    ) -> str:
        """
        Runs the specified image in a new, detached container.

        Pass `arguments` for environment, volumes, ports or a command; the
        other keyword arguments are ignored in that case.

        Returns:
            The long id of the created container
        """
        if arguments is None:
            arguments = RunArguments(image=image, name=name, hostname=hostname, interactive=interactive)
        result = self._run(arguments.to_args())
        container_id = result.stdout.strip()
        logger.info(f"Started container {arguments.name or container_id[:12]} from {arguments.image}")
        return container_id

    def pull_image(self, image: str, tag: str = "latest") -> None:
        self._run(pull_args(image, tag))
        logger.info(f"Pulled {image}:{tag}")

    def start_container(self, name: str) -> str:
        """Starts an existing container; returns what the tool echoes (its name)."""
        return self._run(start_args(name)).stdout.strip()

    def stop_container(self, name: str) -> str:
        """Stops a running container; returns what the tool echoes (its name)."""
        return self._run(stop_args(name)).stdout.strip()

    def remove_container(self, name: str, force: bool = False) -> str:
        return self._run(remove_args(name, force=force)).stdout.strip()

    def ps(self, all: bool = False, filters: Optional[Iterable[Filter]] = None) -> List[ContainerInfo]:
        """
        Returns info on this system's containers.

        Args:
            all: True for all containers, False for running containers only
            filters: Filters passed through as `--filter` options

        Raises:
            HeaderMismatchError: If the output header is not the expected table
        """
        result = self._run(ps_args(all=all, filters=filters))
        containers = parse_ps_output(result.stdout)
        logger.debug(f"ps returned {len(containers)} containers")
        return containers

    def find_container(self, name: str) -> Optional[ContainerInfo]:
        """Look a container up by exact name, running or not."""
        # The name filter matches substrings, so compare names exactly.
        for container in self.ps(all=True, filters=[NameFilter(name)]):
            if name in container.names:
                return container
        return None

    def container_exists(self, name: str) -> bool:
        return self.find_container(name) is not None

    def stop_and_remove_container(self, name: str) -> None:
        self.stop_container(name)
        self.remove_container(name)
        logger.info(f"Stopped and removed container {name}")

    def run_or_replace(self, image: str, name: str, **run_options) -> str:
        """
        Run `image` as `name`, first stopping and removing any container of that name.

        Returns:
            The long id of the new container
        """
        arguments = run_options.pop("arguments", None)
        if arguments is not None:
            run_options["arguments"] = dataclasses.replace(arguments, image=image, name=name)

        if self.container_exists(name):
            logger.info(f"Replacing existing container {name}")
            self.stop_and_remove_container(name)
        return self.run_image(image, name=name, **run_options)

    async def wait_for_log_async(
        self,
        name: str,
        text: str,
        timeout: Optional[float] = None,
        break_on_error: Optional[bool] = None,
        exit_policy: Optional[ExitPolicy] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> LogWatchResult:
        """
        Follow a container's logs until a line containing `text` appears.

        Unset options fall back to the [log_watch] configuration.

        Raises:
            LogWatchTimeoutError: If the text does not appear in time
            UpstreamFatalError: If the logs produce error output and break_on_error is set
            LogWatchCancelledError: If cancel_event is set first
        """
        watch_config = get_config().log_watch
        watcher = LogWatcher(
            self._spec(logs_args(name, follow=True)),
            text,
            timeout=watch_config.timeout_seconds if timeout is None else timeout,
            break_on_error=watch_config.break_on_error if break_on_error is None else break_on_error,
            exit_policy=exit_policy or watch_config.exit_policy,
            termination_timeout=watch_config.termination_timeout,
            cancel_event=cancel_event,
        )
        return await watcher.watch()

    def wait_for_log(
        self,
        name: str,
        text: str,
        timeout: Optional[float] = None,
        break_on_error: Optional[bool] = None,
        exit_policy: Optional[ExitPolicy] = None,
    ) -> LogWatchResult:
        """Blocking form of wait_for_log_async; must not be called from a running event loop."""
        return asyncio.run(
            self.wait_for_log_async(
                name, text, timeout=timeout, break_on_error=break_on_error, exit_policy=exit_policy
            )
        )
