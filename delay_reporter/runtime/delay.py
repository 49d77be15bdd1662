"""
Delay Reporter: block for a fixed duration, then report success.

Responsibilities:
- Wait at least TARGET_SLEEP_TIME seconds by polling the clock every POLL_INTERVAL
- Read the process working directory once the wait is over
- Emit exactly one line: "ver1: Success. Slept for 5 seconds. CWD: <cwd>"
"""

import os
import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional, TextIO

TARGET_SLEEP_TIME = 5.0
POLL_INTERVAL = 0.1
REPORT_TAG = "ver1"


@dataclass
class DelayReport:
    target_sleep_time: float
    elapsed: float
    cwd: str
    line: str


def _log(message: str, verbose: bool):
    if verbose:
        print(f"delay_reporter: {message}", file=sys.stderr, flush=True)


def poll_wait(
    target_sleep_time: float = TARGET_SLEEP_TIME,
    poll_interval: float = POLL_INTERVAL,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> float:
    """
    Sleep in poll_interval steps until target_sleep_time has elapsed.

    Returns the elapsed seconds measured at loop exit, which is never
    below target_sleep_time.
    """
    start_time = clock()
    while (clock() - start_time) < target_sleep_time:
        sleep(poll_interval)
    return clock() - start_time


def format_duration(seconds: float) -> str:
    """
    Render 5.0 as '5'.

    The delay is fixed, so the fractional branch is only reached by tests.
    """
    seconds = float(seconds)
    if seconds.is_integer():
        return str(int(seconds))
    return repr(seconds)


def build_report(cwd: str) -> str:
    return f"{REPORT_TAG}: Success. Slept for {format_duration(TARGET_SLEEP_TIME)} seconds. CWD: {cwd}\n"


def read_working_directory(getcwd: Callable[[], str] = os.getcwd, verbose: bool = False) -> str:
    """Return the working directory, or an empty string if it no longer exists."""
    try:
        return getcwd()
    except OSError as e:
        # The report still goes out, with an empty CWD
        _log(f"Working directory unavailable: {e}", verbose)
        return ""


def collect_delayed_report(
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
    getcwd: Callable[[], str] = os.getcwd,
    verbose: bool = False,
) -> DelayReport:
    """Run the wait and build the report without writing it anywhere."""
    _log(f"Sleeping for {format_duration(TARGET_SLEEP_TIME)} seconds...", verbose)
    elapsed = poll_wait(TARGET_SLEEP_TIME, POLL_INTERVAL, clock=clock, sleep=sleep)
    _log(f"Sleep completed after {elapsed:.3f}s", verbose)

    cwd = read_working_directory(getcwd, verbose=verbose)
    return DelayReport(
        target_sleep_time=TARGET_SLEEP_TIME,
        elapsed=elapsed,
        cwd=cwd,
        line=build_report(cwd),
    )


def run_delayed_report(
    stream: Optional[TextIO] = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
    getcwd: Callable[[], str] = os.getcwd,
    verbose: bool = False,
) -> DelayReport:
    """Block for the fixed delay, then write the report line to stream (stdout by default)."""
    report = collect_delayed_report(clock=clock, sleep=sleep, getcwd=getcwd, verbose=verbose)

    out = stream if stream is not None else sys.stdout
    out.write(report.line)
    out.flush()
    return report
