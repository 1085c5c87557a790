from __future__ import annotations

from typing import Iterator

import pytest

from rc_substring import split_views
from rc_substring.runtime import telemetry


@pytest.fixture(autouse=True)
def fresh_logger() -> Iterator[None]:
    yield
    telemetry.configure()


def test_logger_is_cached() -> None:
    assert telemetry.get_logger() is telemetry.get_logger()


def test_configure_replaces_logger() -> None:
    before = telemetry.get_logger()

    after = telemetry.configure(level="debug")

    assert after is not before
    assert telemetry.get_logger() is after


def test_configure_accepts_explicit_config() -> None:
    config = telemetry.build_config("warning")

    assert telemetry.configure(config) is telemetry.get_logger()


def test_configure_rejects_config_and_level_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(telemetry.build_config(), level="debug")


def test_build_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RC_SUBSTRING_LOG_LEVEL", "debug")
    monkeypatch.setenv("RC_SUBSTRING_DISABLE_CONSOLE", "1")
    monkeypatch.setenv("RC_SUBSTRING_LOG_JSON", "yes")

    telemetry.configure()
    telemetry.record_event("view::test", level="debug", data={"start": 0})


def test_record_event_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unsupported log level"):
        telemetry.record_event("view::test", level="shouting")


def test_span_reraises_and_keeps_metadata() -> None:
    with pytest.raises(KeyError):
        with telemetry.span(
            "view::test", component="tests", metadata={"size": 3}
        ) as handle:
            assert handle.metadata == {"size": "3"}
            assert handle.component == "tests"
            raise KeyError("boom")


def test_split_runs_inside_a_span() -> None:
    assert split_views("a b") == ["a", "b"]


def test_env_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RC_SUBSTRING_SAMPLE", "On")
    assert telemetry.env_flag("SAMPLE", False) is True
    monkeypatch.delenv("RC_SUBSTRING_SAMPLE")
    assert telemetry.env_flag("SAMPLE", True) is True
