"""
Configuration for module dependency analysis
Values come from the environment, optionally seeded from a .env file
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError
from .normalizer import DESCRIPTOR_SUFFIX

load_dotenv()


@dataclass
class AnalyzerConfig:
    """Settings for discovery, loading and logging"""
    suffix: str = DESCRIPTOR_SUFFIX
    load_workers: int = 8
    load_timeout: Optional[float] = None
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'AnalyzerConfig':
        """Read settings from MODULE_DEPS_* variables"""
        env = os.environ if environ is None else environ

        workers = _parse_number(env, 'MODULE_DEPS_LOAD_WORKERS', int)
        timeout = _parse_number(env, 'MODULE_DEPS_LOAD_TIMEOUT', float)

        config = cls(
            suffix=env.get('MODULE_DEPS_SUFFIX') or DESCRIPTOR_SUFFIX,
            load_workers=workers if workers is not None else cls.load_workers,
            load_timeout=timeout,
            log_level=(env.get('MODULE_DEPS_LOG_LEVEL') or 'INFO').upper()
        )
        config.validate()
        return config

    def validate(self):
        """Reject values the load phase cannot use"""
        if self.load_workers < 1:
            raise ConfigError(f"load_workers must be at least 1, got {self.load_workers}")
        if self.load_timeout is not None and self.load_timeout <= 0:
            raise ConfigError(f"load_timeout must be positive, got {self.load_timeout}")
        if not self.suffix:
            raise ConfigError("suffix must not be empty")


def _parse_number(env: Mapping[str, str], key: str, kind):
    value = env.get(key)
    if value is None or value == '':
        return None
    try:
        return kind(value)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {value!r}") from None
