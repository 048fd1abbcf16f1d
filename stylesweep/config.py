"""Configuration management for stylesweep.

Loads environment variables (optionally from a ``.env`` file in the working
directory) and provides centralized config access. The analyzer itself takes
no options; everything here shapes the command line run around it.
"""
import os
from pathlib import Path
from typing import Optional, Set

from dotenv import load_dotenv

from .analyzer.rule_meta import DEFAULT_LOCALE, SUPPORTED_LOCALES

__version__ = "1.0.0"

# Never descended into when collecting files
DEFAULT_EXCLUDED_DIRS = {
    'node_modules', '.git', '.expo', '.next', 'dist', 'build', 'coverage',
    'android', 'ios', 'vendor', '__generated__',
}

TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off'}


def _parse_bool(raw: Optional[str], variable: str) -> Optional[bool]:
    """Parse a boolean environment value; None when unset or blank."""
    if raw is None or not raw.strip():
        return None
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"{variable}={raw!r} is not a boolean")


def is_ci_environment() -> bool:
    """Detect if running in CI/CD environment (GitHub Actions, GitLab CI, etc.)."""
    ci_indicators = [
        'GITHUB_ACTIONS',
        'CI',
        'GITLAB_CI',
        'CIRCLECI',
        'TRAVIS',
        'JENKINS_HOME',
    ]
    return any(os.getenv(indicator) for indicator in ci_indicators)


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self, env_file: Optional[Path] = None):
        """Initialize config by loading the .env file and validating values.

        Args:
            env_file: .env file to load (defaults to ./.env); existing
                environment variables take precedence

        Raises:
            ValueError: If a variable holds an invalid value
        """
        load_dotenv(env_file or Path.cwd() / ".env")
        self._validate()

    def _validate(self):
        """Fail fast on bad values instead of mid-run.

        Raises:
            ValueError: If STYLESWEEP_LOCALE or STYLESWEEP_FAIL_ON_FINDINGS is invalid
        """
        if self.locale not in SUPPORTED_LOCALES:
            raise ValueError(
                f"STYLESWEEP_LOCALE={self.locale!r} is not supported. "
                f"Must be one of {list(SUPPORTED_LOCALES)}."
            )
        _parse_bool(os.getenv("STYLESWEEP_FAIL_ON_FINDINGS"), "STYLESWEEP_FAIL_ON_FINDINGS")

    @property
    def locale(self) -> str:
        """Message locale (STYLESWEEP_LOCALE, default 'en')."""
        return os.getenv("STYLESWEEP_LOCALE", DEFAULT_LOCALE).strip().lower()

    @property
    def excluded_dirs(self) -> Set[str]:
        """Built-in excluded directories plus STYLESWEEP_EXCLUDE_DIRS (comma-separated)."""
        extra = os.getenv("STYLESWEEP_EXCLUDE_DIRS", "")
        return DEFAULT_EXCLUDED_DIRS | {name.strip() for name in extra.split(",") if name.strip()}

    @property
    def fail_on_findings(self) -> bool:
        """Whether findings turn into a non-zero exit code.

        Priority:
        1. STYLESWEEP_FAIL_ON_FINDINGS environment variable
        2. True in CI environments, False otherwise

        Raises:
            ValueError: If the variable is not a boolean
        """
        value = _parse_bool(os.getenv("STYLESWEEP_FAIL_ON_FINDINGS"), "STYLESWEEP_FAIL_ON_FINDINGS")
        return is_ci_environment() if value is None else value


# Singleton instance
_config = None


def get_config() -> Config:
    """Get or create singleton Config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config():
    """Drop the cached Config so the next get_config() re-reads the environment."""
    global _config
    _config = None
