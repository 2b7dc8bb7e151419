"""Measure the real, user and system time spent running a function."""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
import time
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence

_TIME_FORMAT = "time and date: %I:%M:%S %p, %a %b %d, %Y"
_LABELS = ("real", "user", "sys", "child user", "child sys")

Task = Callable[[], object]


@dataclass(frozen=True)
class TimesReport:
    """Seconds of elapsed, user, system and child CPU time for one run."""

    real: float
    user: float
    sys: float
    child_user: float
    child_sys: float

    @classmethod
    def _between(cls, start: os.times_result, end: os.times_result) -> "TimesReport":
        return cls(
            real=end.elapsed - start.elapsed,
            user=end.user - start.user,
            sys=end.system - start.system,
            child_user=end.children_user - start.children_user,
            child_sys=end.children_system - start.children_system,
        )

    def format(self) -> str:
        """Return the report as one line per measure."""
        values = (self.real, self.user, self.sys, self.child_user, self.child_sys)
        return "\n".join(f" {label}: {value:7.2f}" for label, value in zip(_LABELS, values))


def format_time(t: Optional[float] = None) -> str:
    """Describe the local time ``t`` (seconds since the epoch; now if omitted)."""
    moment = time.localtime(t)
    return time.strftime(_TIME_FORMAT, moment)


def name_of(registry: Mapping[Task, str], func: Task) -> Optional[str]:
    """Return the name registered for ``func``, or ``None`` if it has none."""
    return registry.get(func)


def time_it(registry: Mapping[Task, str], func: Task) -> TimesReport:
    """Run ``func``, print its name and the time it took, and return the measurements."""
    name = name_of(registry, func)
    print(f"function: {name if name is not None else '(null)'}")
    start = os.times()
    func()
    end = os.times()
    report = TimesReport._between(start, end)
    print(report.format())
    return report


def _sleep_task() -> None:
    x = 0
    time.sleep(2)
    print(f"x={x}.")


def _disk_usage_task() -> None:
    home = os.environ.get("HOME")
    if home is None:
        return
    print(f"dir = {home} ")
    result = subprocess.run(f"du -ks {shlex.quote(home)}/*", shell=True)
    code = result.returncode
    status = code << 8 if code >= 0 else -code
    print(f"status = {status}.")


_REGISTRY: dict[Task, str] = {
    _sleep_task: "f1()",
    _disk_usage_task: "f2()",
}


def _clock_readings() -> list[int]:
    return [
        time.time_ns(),
        time.monotonic_ns(),
        time.process_time_ns(),
        time.thread_time_ns(),
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: show the clocks, then time two sample tasks."""
    print(f"{format_time(time.time())}.")

    now_ns = time.time_ns()
    print(f"tv.sec = {now_ns // 1_000_000_000}, tv.tv_usec = {now_ns % 1_000_000_000 // 1000}.")

    for index, reading in enumerate(_clock_readings()):
        seconds, nanos = divmod(reading, 1_000_000_000)
        print(f"clock[{index}]: tsp.tv_sec = {seconds}, tsp.tv_nsec = {nanos}.")

    if hasattr(os, "sysconf"):
        try:
            ticks = os.sysconf("SC_CLK_TCK")
        except (ValueError, OSError):
            ticks = -1
        print(f"_SC_CLK_TCK = {ticks}.")

    time_it(_REGISTRY, _sleep_task)
    time_it(_REGISTRY, _disk_usage_task)
    return 0


if __name__ == "__main__":
    sys.exit(main())