"""Settings file discovery and loading.

Locates kubie's settings file from KUBECONFIG, the XDG config directory
and the ~/.kube default, then loads it into a KubieSettings record.
"""

import copy
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from kubie.config.exceptions import (
    ConfigFileNotFoundError,
    SettingsParseError,
    SettingsReadError,
)
from kubie.config.paths import (
    SETTINGS_FILENAMES,
    XDG_CONFIG_HOME_ENV,
    find_settings_in_dir,
    is_regular_file,
    is_settings_filename,
    parse_kubeconfig_env,
)
from kubie.config.settings import KubieSettings, build_settings, env_overrides

logger = logging.getLogger(__name__)

CONFIG_SUBDIR = "kubie"


class SettingsLocator:
    """Finds the path of kubie's settings file.

    The home directory is resolved once, when the locator is built, and
    reused for every lookup.
    """

    def __init__(
        self,
        home: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the locator.

        Args:
            home: The user's home directory (default: Path.home()).
            environ: Environment mapping (default: os.environ).
        """
        self.home = home if home is not None else Path.home()
        self.environ = environ if environ is not None else os.environ

    def get_config_home(self) -> Path:
        """Get the kubie directory under the XDG config home.

        Priority:
        1. $XDG_CONFIG_HOME/kubie if XDG_CONFIG_HOME is set and non-empty
        2. ~/.config/kubie (default)
        """
        if xdg_config_home := self.environ.get(XDG_CONFIG_HOME_ENV):
            return Path(xdg_config_home) / CONFIG_SUBDIR
        return self.home / ".config" / CONFIG_SUBDIR

    def default_settings_path(self) -> Path:
        """Path used when no settings file is found anywhere."""
        return self.home / ".kube" / SETTINGS_FILENAMES[0]

    def resolve_settings_path(self) -> Path:
        """Resolve the settings file path.

        Priority:
        1. A KUBECONFIG entry that is itself kubie.yaml/kubie.yml
        2. kubie.yaml/kubie.yml inside a KUBECONFIG directory entry
           (entries are checked in order; 1 and 2 apply per entry)
        3. kubie.yaml/kubie.yml in the XDG config home
        4. ~/.kube/kubie.yaml, whether or not it exists

        Returns:
            Path to the settings file.
        """
        for entry in parse_kubeconfig_env(self.environ):
            if is_settings_filename(entry) and is_regular_file(entry):
                logger.debug("Using settings file from KUBECONFIG entry: %s", entry)
                return entry
            if found := find_settings_in_dir(entry):
                logger.debug("Using settings file from KUBECONFIG directory: %s", found)
                return found

        if found := find_settings_in_dir(self.get_config_home()):
            logger.debug("Using settings file from config home: %s", found)
            return found

        default = self.default_settings_path()
        logger.debug("No settings file found, defaulting to %s", default)
        return default


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML settings file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Dictionary of settings values. An empty document gives {}.

    Raises:
        ConfigFileNotFoundError: If the file doesn't exist.
        SettingsReadError: If the file exists but cannot be read.
        SettingsParseError: If the file is not valid YAML or its top level
            is not a mapping.
    """
    if not is_regular_file(path):
        raise ConfigFileNotFoundError(path)

    try:
        with open(path, "rb") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SettingsParseError(path, str(e)) from e
    except OSError as e:
        raise SettingsReadError(path, e.strerror or str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsParseError(
            path, f"expected a mapping at top level, got {type(data).__name__}"
        )
    return data


def _drop_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Remove file values that an environment variable overrides.

    Constructor values outrank environment values in pydantic-settings,
    so overridden keys are removed before the file data is passed in.
    Sibling keys of an overridden nested key are kept.
    """
    result = copy.deepcopy(data)
    for key_path in env_overrides():
        node: Any = result
        for key in key_path[:-1]:
            node = node.get(key) if isinstance(node, dict) else None
        if isinstance(node, dict):
            node.pop(key_path[-1], None)
    return result


def load_settings_file(path: Path) -> KubieSettings:
    """Load settings from a specific path.

    A missing file is not an error: defaults are used. Either way the
    path is appended to configs.exclude so the settings file is never
    mistaken for a kubeconfig.

    Args:
        path: The settings file path.

    Returns:
        KubieSettings with the path appended to configs.exclude.

    Raises:
        SettingsReadError: If the file exists but cannot be read.
        SettingsParseError: If the file exists but cannot be parsed.
        EnvOverrideError: If a KUBIE_* variable holds an invalid value.
    """
    if is_regular_file(path):
        settings = build_settings(_drop_env_overrides(load_yaml_file(path)), path)
        logger.debug("Loaded settings from %s", path)
    else:
        settings = build_settings()
        logger.debug("Settings file %s does not exist, using defaults", path)

    settings.configs.exclude.append(str(path))
    return settings


def load_settings(
    locator: SettingsLocator | None = None,
    explicit_config: Path | None = None,
) -> KubieSettings:
    """Locate and load kubie's settings.

    This is the main entry point for loading settings.

    Args:
        locator: Settings locator (default: one built from Path.home()
            and os.environ).
        explicit_config: Explicit settings file path (--config option).
            If provided, no discovery happens and the file must exist.

    Returns:
        KubieSettings object.

    Raises:
        ConfigFileNotFoundError: If explicit_config doesn't exist.
        SettingsReadError: If the settings file cannot be read.
        SettingsParseError: If the settings file cannot be parsed.
        EnvOverrideError: If a KUBIE_* variable holds an invalid value.
    """
    if explicit_config is not None:
        if not is_regular_file(explicit_config):
            raise ConfigFileNotFoundError(explicit_config)
        return load_settings_file(explicit_config)

    if locator is None:
        locator = SettingsLocator()
    return load_settings_file(locator.resolve_settings_path())
