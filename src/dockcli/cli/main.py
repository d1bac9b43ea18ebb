"""
Command-line interface for dockcli.

This module wires argparse subcommands to DockerClient methods, loads the
configuration, sets up logging, and turns surfaced failures into a logged
message and a non-zero exit code.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..client import DockerClient
from ..commands import NameFilter, RunArguments
from ..config import get_config, set_config_path
from ..models.containers import ContainerInfo
from ..models.watch import ExitPolicy
from ..system.commands import check_executable_installed
from ..validation import (
    DockerCliError,
    ValidationError,
    handle_cli_error,
    log_level_number,
    validate_positive_float,
)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"

logger = logging.getLogger(__name__)


def _parse_environment(pairs: Sequence[str]) -> Dict[str, str]:
    environment = {}
    for pair in pairs:
        key, separator, value = pair.partition("=")
        if not separator or not key:
            raise ValidationError(f"environment entries must look like KEY=VALUE, got {pair!r}",
                                  field_name="--env", value=pair)
        environment[key] = value
    return environment


def format_containers(containers: List[ContainerInfo]) -> str:
    """Render parsed containers as a compact table."""
    rows = [("CONTAINER ID", "IMAGE", "STATUS", "NAMES")]
    rows.extend(
        (c.container_id, c.image, c.status, ",".join(c.names)) for c in containers
    )
    widths = [max(len(row[i]) for row in rows) for i in range(3)]
    return "\n".join(
        "   ".join(cell.ljust(width) for cell, width in zip(row[:3], widths)) + "   " + row[3]
        for row in rows
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dockcli",
        description="Drive the docker command-line tool and parse its output.",
    )
    parser.add_argument("--config", type=Path, help="Path to a config.toml file.")
    parser.add_argument("--executable", help="docker executable to use (overrides config).")
    parser.add_argument("--log-level", help="Logging level (overrides config).")

    subparsers = parser.add_subparsers(dest="command", required=True)

    ps_parser = subparsers.add_parser("ps", help="List containers.")
    ps_parser.add_argument("-a", "--all", action="store_true", help="Include stopped containers.")
    ps_parser.add_argument("--name", help="Only containers whose name contains NAME.")

    build_parser_ = subparsers.add_parser("build", help="Build an image.")
    build_parser_.add_argument("path", nargs="?", default=".")
    build_parser_.add_argument("-t", "--tag")

    pull_parser = subparsers.add_parser("pull", help="Pull an image.")
    pull_parser.add_argument("image")
    pull_parser.add_argument("--tag", default="latest")

    run_parser = subparsers.add_parser("run", help="Run an image in a detached container.")
    run_parser.add_argument("image")
    run_parser.add_argument("--name")
    run_parser.add_argument("--hostname")
    run_parser.add_argument("-i", "--interactive", action="store_true")
    run_parser.add_argument("-e", "--env", action="append", default=[], metavar="KEY=VALUE")
    run_parser.add_argument("-v", "--volume", action="append", default=[])
    run_parser.add_argument("-p", "--publish", action="append", default=[])
    run_parser.add_argument("--replace", action="store_true",
                            help="Stop and remove an existing container of the same name first.")

    for name, help_text in (("start", "Start a container."), ("stop", "Stop a container.")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("name")

    rm_parser = subparsers.add_parser("rm", help="Remove a container.")
    rm_parser.add_argument("name")
    rm_parser.add_argument("-f", "--force", action="store_true")

    wait_parser = subparsers.add_parser("wait-for-log", help="Wait until a container logs a line containing TEXT.")
    wait_parser.add_argument("name")
    wait_parser.add_argument("text")
    wait_parser.add_argument("--timeout", type=float, help="Seconds to wait (overrides config).")
    wait_parser.add_argument("--no-break-on-error", action="store_true",
                             help="Do not fail when the container writes to stderr.")
    wait_parser.add_argument("--fail-on-exit", action="store_true",
                             help="Fail as soon as the log stream ends without a match.")

    return parser


def _dispatch(client: DockerClient, args: argparse.Namespace) -> None:
    if args.command == "ps":
        filters = [NameFilter(args.name)] if args.name else None
        print(format_containers(client.ps(all=args.all, filters=filters)))

    elif args.command == "build":
        image_id = client.build(args.path, tag=args.tag)
        print(image_id if image_id is not None else "(no image id reported)")

    elif args.command == "pull":
        client.pull_image(args.image, args.tag)

    elif args.command == "run":
        arguments = RunArguments(
            image=args.image,
            name=args.name,
            hostname=args.hostname,
            interactive=args.interactive,
            environment=_parse_environment(args.env),
            volumes=args.volume,
            ports=args.publish,
        )
        if args.replace and args.name and client.container_exists(args.name):
            client.stop_and_remove_container(args.name)
        print(client.run_image(args.image, arguments=arguments))

    elif args.command == "start":
        print(client.start_container(args.name))

    elif args.command == "stop":
        print(client.stop_container(args.name))

    elif args.command == "rm":
        print(client.remove_container(args.name, force=args.force))

    elif args.command == "wait-for-log":
        timeout = None
        if args.timeout is not None:
            timeout = validate_positive_float(args.timeout, exclusive_min=True, field_name="--timeout")
        result = client.wait_for_log(
            args.name,
            args.text,
            timeout=timeout,
            break_on_error=False if args.no_break_on_error else None,
            exit_policy=ExitPolicy.FAIL if args.fail_on_exit else None,
        )
        print(result.matched_line)


def main_cli(argv: Optional[Sequence[str]] = None) -> None:
    """
    Main command-line entry point.

    Raises:
        SystemExit: 1 on configuration errors or failed docker invocations,
            2 on usage errors.
    """
    args = build_parser().parse_args(argv)

    try:
        if args.config is not None:
            set_config_path(args.config)
        app_config = get_config()
        level = log_level_number(args.log_level or app_config.logging.level)
    except (FileNotFoundError, ValidationError, ValueError) as e:
        logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    executable = args.executable or app_config.docker.executable
    if not check_executable_installed(executable):
        logger.warning(f"'{executable}' was not found on PATH")

    try:
        _dispatch(DockerClient(executable), args)
    except (DockerCliError, ValidationError) as e:
        handle_cli_error(error=e, context=args.command, exit_code=1, logger=logger)


if __name__ == "__main__":
    main_cli()
