from __future__ import annotations

from typing import Iterator

import pytest

from rc_substring.runtime import config
from rc_substring.runtime.config import Settings, ValidationPolicy


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    config.reset_settings()
    yield
    config.reset_settings()


def test_defaults_to_strict(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RC_SUBSTRING_VALIDATION", raising=False)

    settings = config.get_settings()

    assert settings.validation is ValidationPolicy.STRICT
    assert settings.should_validate() is True


def test_environment_selects_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RC_SUBSTRING_VALIDATION", " Fast ")
    monkeypatch.setenv("RC_SUBSTRING_DEBUG_BUILD", "no")

    settings = config.get_settings()

    assert settings == Settings(validation=ValidationPolicy.FAST, debug_build=False)
    assert settings.should_validate() is False
    assert settings.should_validate(ValidationPolicy.STRICT) is True


def test_unknown_policy_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RC_SUBSTRING_VALIDATION", "sometimes")

    with pytest.raises(ValueError, match="sometimes"):
        config.get_settings()


def test_configure_updates_selected_fields() -> None:
    before = config.get_settings()

    updated = config.configure(validation="fast")

    assert updated.validation is ValidationPolicy.FAST
    assert updated.debug_build == before.debug_build
    assert config.get_settings() is updated


def test_override_settings_restores_previous() -> None:
    original = config.configure(validation="strict", debug_build=True)

    with config.override_settings(validation="fast", debug_build=False) as active:
        assert config.get_settings() is active
        assert active.should_validate() is False

    assert config.get_settings() is original
