"""Tests for opt-in debug tracing."""
from __future__ import annotations

import pytest

import debug_trace


@pytest.fixture()
def tracing(monkeypatch, tmp_path):
    monkeypatch.setattr(debug_trace, "DEBUG_TRACE", True)
    monkeypatch.setattr(debug_trace, "LOG_FILE", str(tmp_path / "trace.log"))
    yield tmp_path / "trace.log"
    debug_trace.close_log()


def test_disabled_by_default_prints_nothing(monkeypatch, capsys):
    monkeypatch.setattr(debug_trace, "DEBUG_TRACE", False)
    debug_trace.trace("hidden")
    assert capsys.readouterr().err == ""


def test_trace_writes_stderr_and_file(tracing, capsys):
    debug_trace.trace("hello", "LAYOUT")
    assert "[LAYOUT] hello" in capsys.readouterr().err
    debug_trace.close_log()
    assert "[LAYOUT] hello" in tracing.read_text(encoding="utf-8")


def test_geom_category_needs_its_own_switch(tracing, monkeypatch, capsys):
    monkeypatch.setattr(debug_trace, "TRACE_GEOM", False)
    debug_trace.trace("quiet", "GEOM")
    assert capsys.readouterr().err == ""


def test_trace_call_reports_exceptions(tracing, capsys):
    @debug_trace.trace_call("LAYOUT")
    def fails():
        raise KeyError("port")

    with pytest.raises(KeyError):
        fails()
    err = capsys.readouterr().err
    assert ">>> " in err
    assert "raised KeyError" in err
