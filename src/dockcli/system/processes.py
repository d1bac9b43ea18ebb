"""
Process-tree teardown.

Log watching ends by killing the process it attached to. The direct child is
reaped by its asyncio handle; anything the child spawned in turn is found and
terminated here with psutil, escalating from SIGTERM to SIGKILL.
"""

import logging
from typing import List

import psutil

logger = logging.getLogger(__name__)


def is_process_alive(pid: int) -> bool:
    """Safely check if a process is still alive and not a zombie."""
    if pid <= 0:
        return False
    try:
        process = psutil.Process(pid)
        if not process.is_running():
            return False
        return process.status() not in (psutil.STATUS_ZOMBIE, psutil.STATUS_DEAD)
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return False


def get_descendants(pid: int) -> List[psutil.Process]:
    """Return the live descendants of a process, handling races with exiting children."""
    try:
        children = psutil.Process(pid).children(recursive=True)
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return []
    return [child for child in children if is_process_alive(child.pid)]


def terminate_processes(processes: List[psutil.Process], timeout: float) -> List[psutil.Process]:
    """
    Terminate processes with SIGTERM, then SIGKILL whatever survives `timeout`.

    Returns:
        Processes still alive after the SIGKILL phase (normally empty)
    """
    if not processes:
        return []

    for force in (False, True):
        signalled = []
        for process in processes:
            try:
                if force:
                    process.kill()
                else:
                    process.terminate()
                signalled.append(process)
            except psutil.NoSuchProcess:
                continue
            except psutil.AccessDenied:
                logger.warning(f"Access denied signalling PID {process.pid}")

        _, still_alive = psutil.wait_procs(signalled, timeout=timeout)
        processes = [process for process in still_alive if is_process_alive(process.pid)]
        if not processes:
            return []
        logger.debug(f"{len(processes)} processes survived {'SIGKILL' if force else 'SIGTERM'}")

    for process in processes:
        logger.error(f"Failed to terminate PID {process.pid}")
    return processes


def terminate_descendants(pid: int, timeout: float) -> int:
    """
    Terminate every descendant of `pid`, leaving `pid` itself alone.

    Returns:
        The number of descendants that were found
    """
    descendants = get_descendants(pid)
    if descendants:
        logger.info(f"Terminating {len(descendants)} descendants of PID {pid}")
        terminate_processes(descendants, timeout)
    return len(descendants)
