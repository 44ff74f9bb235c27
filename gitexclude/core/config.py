"""Configuration management for gitexclude.

This module reads which ignore files make up a scan and how malformed
lines and rule precedence are handled, from repository-local and global
configuration files.
"""

import os
import configparser
from pathlib import Path
from typing import Dict, List, Optional

from gitexclude.core.errors import ConfigError
from gitexclude.core.group import PRECEDENCES, PRECEDENCE_LAST
from gitexclude.core.pattern import MALFORMED_POLICIES, ON_MALFORMED_SKIP

SECTION = 'exclude'

DEFAULTS = {
    'sources': '.gitignore, .git/info/exclude',
    'optional': '.git/info/exclude',
    'on-malformed': ON_MALFORMED_SKIP,
    'precedence': PRECEDENCE_LAST,
}


def _split_list(value: str) -> List[str]:
    items = []
    for line in value.splitlines():
        items.extend(item.strip() for item in line.split(','))
    return [item for item in items if item]


class Config:
    """
    Manages gitexclude configuration files.

    Configuration is stored in INI format under an ``[exclude]`` section:
    - Global config: ~/.gitexcluderc
    - Repository config: <root>/.gitexclude

    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.gitexcluderc'
    REPO_CONFIG_NAME = '.gitexclude'

    def __init__(self, repo_config_path: Optional[Path] = None,
                 overrides: Optional[Dict[str, str]] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if any
            overrides: Values that beat every other source (CLI flags)
        """
        self.repo_config_path = repo_config_path
        self.overrides = dict(overrides or {})
        self._global_config = None
        self._repo_config = None

    @classmethod
    def for_root(cls, root: Path, overrides: Optional[Dict[str, str]] = None) -> 'Config':
        """Config for a working tree root."""
        return cls(Path(root) / cls.REPO_CONFIG_NAME, overrides)

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = self._read(self.GLOBAL_CONFIG_PATH)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = self._read(self.repo_config_path)
        return self._repo_config

    @staticmethod
    def _read(path: Path) -> configparser.ConfigParser:
        config = configparser.ConfigParser()
        if path.exists():
            try:
                config.read(path)
            except configparser.Error as e:
                raise ConfigError(f"Cannot parse {path}: {e}") from e
        return config

    def get(self, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Explicit overrides
        2. Environment variables (GITEXCLUDE_EXCLUDE_<KEY>)
        3. Repository config
        4. Global config
        5. Built-in default, then fallback

        Args:
            key: Config key (e.g., 'sources', 'on-malformed')
            fallback: Value if not found anywhere

        Returns:
            Configuration value or fallback
        """
        if key in self.overrides:
            return self.overrides[key]

        env_key = f"GITEXCLUDE_{SECTION.upper()}_{key.upper().replace('-', '_')}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(SECTION, key):
            return self.repo_config.get(SECTION, key)

        if self.global_config.has_option(SECTION, key):
            return self.global_config.get(SECTION, key)

        return DEFAULTS.get(key, fallback)

    def _choice(self, key: str, choices) -> str:
        value = self.get(key).strip().lower()
        if value not in choices:
            raise ConfigError(
                f"Invalid value for {SECTION}.{key}: {value!r} "
                f"(expected one of: {', '.join(choices)})"
            )
        return value

    @property
    def on_malformed(self) -> str:
        """Policy for lines that fail to compile: 'skip' or 'abort'."""
        return self._choice('on-malformed', MALFORMED_POLICIES)

    @property
    def precedence(self) -> str:
        """Rule precedence within a file: 'last' or 'first'."""
        return self._choice('precedence', PRECEDENCES)

    def sources(self) -> list:
        """
        Ignore files to load, in order.

        Returns:
            List of IgnoreSource; entries listed under 'optional' may be
            missing on disk
        """
        from gitexclude.core.ignorer import IgnoreSource

        sources = _split_list(self.get('sources'))
        if not sources:
            raise ConfigError(f"{SECTION}.sources must name at least one file")
        optional = set(_split_list(self.get('optional', '')))
        return [IgnoreSource(path, required=path not in optional) for path in sources]
