"""Runtime configuration for an export run.

Values come from defaults, then ``KB_EXPORT_*`` environment variables, then
CLI flags. Empty environment values are ignored.
"""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from .client import DEFAULT_PAGE_SIZE, DEFAULT_TIMEOUT

DEFAULT_EXPORT_ROOT = Path("./exports")
DEFAULT_LOG_LEVEL = "INFO"

ENV_EXPORT_DIR = "KB_EXPORT_DIR"
ENV_LOG_LEVEL = "KB_EXPORT_LOG_LEVEL"
ENV_TIMEOUT = "KB_EXPORT_TIMEOUT"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ExportConfig:
    export_root: Path = DEFAULT_EXPORT_ROOT
    log_level: str = DEFAULT_LOG_LEVEL
    timeout: float = DEFAULT_TIMEOUT
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        level = self.log_level.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level '{self.log_level}'. Must be one of: {', '.join(_LOG_LEVELS)}")
        object.__setattr__(self, "log_level", level)
        object.__setattr__(self, "export_root", Path(self.export_root))
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ExportConfig":
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get(ENV_EXPORT_DIR):
            kwargs["export_root"] = Path(env[ENV_EXPORT_DIR])
        if env.get(ENV_LOG_LEVEL):
            kwargs["log_level"] = env[ENV_LOG_LEVEL]
        if env.get(ENV_TIMEOUT):
            try:
                kwargs["timeout"] = float(env[ENV_TIMEOUT])
            except ValueError as e:
                raise ValueError(f"{ENV_TIMEOUT} must be a number of seconds, got {env[ENV_TIMEOUT]!r}") from e
        return cls(**kwargs)

    def with_overrides(self, export_root: Optional[str] = None, log_level: Optional[str] = None) -> "ExportConfig":
        changes = {}
        if export_root:
            changes["export_root"] = Path(export_root)
        if log_level:
            changes["log_level"] = log_level
        return replace(self, **changes) if changes else self
