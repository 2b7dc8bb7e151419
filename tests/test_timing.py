import re
import subprocess
import time
from unittest import mock

import pytest

from pngpaste.timing import TimesReport, format_time, main, name_of, time_it

_PATTERN = re.compile(
    r"^time and date: \d\d:\d\d:\d\d (AM|PM), [A-Z][a-z]{2} [A-Z][a-z]{2} \d\d, \d{4}$"
)


def _task_a():
    return "a"


def _task_b():
    return "b"


def test_format_time_shape():
    text = format_time(0)
    assert text.startswith("time and date: ")
    match = _PATTERN.fullmatch(text)
    assert bool(match) is True
    assert match.group(1) in ("AM", "PM")


def test_format_time_carries_year_and_day():
    t = 1_000_000_000
    local = time.localtime(t)
    text = format_time(t)
    assert text.endswith(f"{local.tm_mday:02d}, {local.tm_year}")


def test_format_time_defaults_to_now():
    text = format_time()
    assert text.endswith(str(time.localtime().tm_year))


def test_name_of_registered():
    registry = {_task_a: "f1()", _task_b: "f2()"}
    assert name_of(registry, _task_a) == "f1()"
    assert name_of(registry, _task_b) == "f2()"


def test_name_of_missing_is_none():
    assert name_of({_task_a: "f1()"}, _task_b) is None


def test_report_format_worked_example():
    report = TimesReport(real=2.0, user=0.5, sys=0.25, child_user=0.0, child_sys=0.0)
    assert report.format() == (
        " real:    2.00\n"
        " user:    0.50\n"
        " sys:    0.25\n"
        " child user:    0.00\n"
        " child sys:    0.00"
    )


def test_report_format_labels_in_order():
    lines = TimesReport(1, 1, 1, 1, 1).format().splitlines()
    labels = [line.split(":")[0].strip() for line in lines]
    assert labels == ["real", "user", "sys", "child user", "child sys"]


def test_time_it_runs_function_once(capsys):
    calls = []
    def task():
        calls.append(1)
    report = time_it({task: "task()"}, task)
    out = capsys.readouterr().out
    assert calls == [1]
    assert out.splitlines()[0] == "function: task()"
    assert report.real >= 0
    assert report.user >= 0


def test_time_it_unknown_function(capsys):
    time_it({}, _task_a)
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "function: (null)"
    assert len(out.splitlines()) == 6


def test_time_it_propagates_errors():
    def failing():
        raise RuntimeError("boom")
    with pytest.raises(RuntimeError):
        time_it({failing: "failing()"}, failing)


def test_main_times_both_tasks(capsys, monkeypatch):
    monkeypatch.setenv("HOME", "/tmp/home")
    completed = subprocess.CompletedProcess(args="du", returncode=0)
    with mock.patch("time.sleep") as sleep, mock.patch("subprocess.run", return_value=completed) as run:
        result = main([])
    out = capsys.readouterr().out
    assert result == 0
    sleep.assert_called_once_with(2)
    assert run.call_count == 1
    assert "function: f1()" in out
    assert "function: f2()" in out
    assert "x=0." in out
    assert "dir = /tmp/home " in out
    assert "status = 0." in out
    assert out.startswith("time and date: ")


def test_main_without_home_skips_du(capsys, monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    with mock.patch("time.sleep"), mock.patch("subprocess.run") as run:
        result = main([])
    out = capsys.readouterr().out
    assert result == 0
    assert run.call_count == 0
    assert "dir = " not in out
    assert "function: f2()" in out


def test_main_reports_nonzero_status(capsys, monkeypatch):
    monkeypatch.setenv("HOME", "/tmp/home")
    completed = subprocess.CompletedProcess(args="du", returncode=1)
    with mock.patch("time.sleep"), mock.patch("subprocess.run", return_value=completed):
        main([])
    out = capsys.readouterr().out
    assert "status = 256." in out