"""config.py - Configuration and constants for fibrope"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

LOGGER_NAME = "fibrope"
METRICS_NAMESPACE = "fibrope"
DEFAULT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_FALSY = ("0", "false", "no", "off")


def _env_flag(name: str, default: str = "1") -> bool:
    return os.getenv(name, default).strip().lower() not in _FALSY


@dataclass(frozen=True)
class RopeConfig:
    """Process-wide settings for rope construction and observability.

    Immutable: use with_overrides() to derive a modified copy.
    """

    # Shallow structural check on every node construction
    check_invariants: bool = __debug__
    log_level: str = DEFAULT_LOG_LEVEL
    metrics_enabled: bool = True
    # Used only to encode str arguments and to render str(rope)
    encoding: str = DEFAULT_ENCODING

    @classmethod
    def from_env(cls) -> "RopeConfig":
        """Read FIBROPE_* environment variables, falling back to defaults."""
        return cls(
            check_invariants=__debug__ and _env_flag("FIBROPE_CHECK_INVARIANTS"),
            log_level=os.getenv("FIBROPE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            metrics_enabled=_env_flag("FIBROPE_METRICS_ENABLED"),
            encoding=os.getenv("FIBROPE_ENCODING", DEFAULT_ENCODING),
        )

    def with_overrides(self, **changes) -> "RopeConfig":
        return replace(self, **changes)


_config: RopeConfig | None = None


def get_config() -> RopeConfig:
    global _config
    if _config is None:
        _config = RopeConfig.from_env()
    return _config


def set_config(config: RopeConfig | None) -> None:
    """Install ``config`` as the process-wide configuration.

    Passing None drops the cached instance so the next get_config() call
    re-reads the environment.
    """
    global _config
    _config = config
