"""Validation policy settings for view construction."""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Optional

from .telemetry import ENV_PREFIX, env_flag


class ValidationPolicy(str, Enum):
    """When ``SharedTextView`` checks its range against the buffer."""

    STRICT = "strict"  # every build, including ``python -O``
    FAST = "fast"  # debug builds only; malformed views fail on first read

    @classmethod
    def parse(cls, value: "str | ValidationPolicy") -> "ValidationPolicy":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        try:
            return cls(key)
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown validation policy '{value}' (expected one of: {choices})"
            ) from exc


@dataclass(frozen=True, slots=True)
class Settings:
    validation: ValidationPolicy = ValidationPolicy.STRICT
    debug_build: bool = __debug__

    def should_validate(self, policy: Optional[ValidationPolicy] = None) -> bool:
        effective = self.validation if policy is None else ValidationPolicy.parse(policy)
        if effective is ValidationPolicy.STRICT:
            return True
        return self.debug_build


def load_settings() -> Settings:
    """Build settings from ``RC_SUBSTRING_*`` environment variables."""

    raw_policy = os.getenv(f"{ENV_PREFIX}VALIDATION", ValidationPolicy.STRICT.value)
    return Settings(
        validation=ValidationPolicy.parse(raw_policy),
        debug_build=env_flag("DEBUG_BUILD", __debug__),
    )


_ACTIVE: Optional[Settings] = None


def get_settings() -> Settings:
    global _ACTIVE
    if _ACTIVE is None:
        _ACTIVE = load_settings()
    return _ACTIVE


def configure(
    *,
    validation: "str | ValidationPolicy | None" = None,
    debug_build: Optional[bool] = None,
) -> Settings:
    """Replace selected fields of the active settings and return the result."""

    global _ACTIVE
    current = get_settings()
    updated = replace(
        current,
        validation=(
            current.validation
            if validation is None
            else ValidationPolicy.parse(validation)
        ),
        debug_build=current.debug_build if debug_build is None else debug_build,
    )
    _ACTIVE = updated
    return updated


def reset_settings() -> None:
    """Forget overrides; the next lookup re-reads the environment."""

    global _ACTIVE
    _ACTIVE = None


@contextmanager
def override_settings(
    *,
    validation: "str | ValidationPolicy | None" = None,
    debug_build: Optional[bool] = None,
) -> Iterator[Settings]:
    global _ACTIVE
    previous = _ACTIVE
    try:
        yield configure(validation=validation, debug_build=debug_build)
    finally:
        _ACTIVE = previous


__all__ = [
    "Settings",
    "ValidationPolicy",
    "configure",
    "get_settings",
    "load_settings",
    "override_settings",
    "reset_settings",
]
