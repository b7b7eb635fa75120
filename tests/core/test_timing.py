"""Tests for the Timer context manager and timed decorator."""

import logging

import pytest

from lifegrid.core.timing import Timer, timed
from lifegrid.core.universe import Universe


class TestTimer:
    """Test cases for the Timer class."""

    def test_reports_elapsed(self):
        """Test the report callback receives the name and elapsed time."""
        reports = []

        with Timer("work", lambda name, elapsed: reports.append((name, elapsed))) as timer:
            sum(range(1000))

        assert len(reports) == 1
        assert reports[0][0] == "work"
        assert reports[0][1] >= 0.0
        assert timer.elapsed == reports[0][1]

    def test_reports_on_exception(self):
        """Test the report still fires when the block raises."""
        reports = []

        with pytest.raises(RuntimeError):
            with Timer("failing", lambda name, elapsed: reports.append(name)):
                raise RuntimeError("boom")

        assert reports == ["failing"]

    def test_default_report_logs(self, caplog):
        """Test the default report logs at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="lifegrid.core.timing"):
            with Timer("Universe.tick"):
                pass

        assert "Universe.tick:" in caplog.text
        assert "ms" in caplog.text

    def test_wrapping_tick_keeps_behavior(self):
        """Test timing a tick gives the same result as an untimed tick."""
        timed_universe = Universe(5, 5)
        plain_universe = Universe(5, 5)
        for universe in (timed_universe, plain_universe):
            universe.set_alive([(2, 1), (2, 2), (2, 3)])

        with Timer("tick", lambda name, elapsed: None):
            timed_universe.tick()
        plain_universe.tick()

        assert timed_universe == plain_universe


class TestTimedDecorator:
    """Test cases for the timed decorator."""

    def test_returns_value_and_reports(self):
        """Test the wrapped function's result passes through."""
        reports = []

        @timed("add", lambda name, elapsed: reports.append(name))
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        assert reports == ["add"]

    def test_default_name(self):
        """Test the qualified function name is used by default."""
        reports = []

        @timed(report=lambda name, elapsed: reports.append(name))
        def compute():
            return 1

        compute()
        assert reports[0].endswith("compute")
        assert compute.__name__ == "compute"
