"""Configuration package for kubie.

This package locates kubie's YAML settings file and resolves the set of
active kubeconfig files from KUBECONFIG and include/exclude glob patterns.
"""

from kubie.config.exceptions import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    EnvOverrideError,
    GlobAccessError,
    GlobPatternError,
    SettingsParseError,
    SettingsReadError,
)
from kubie.config.loader import (
    SettingsLocator,
    load_settings,
    load_settings_file,
    load_yaml_file,
)
from kubie.config.paths import (
    expand_glob,
    expanduser,
    is_settings_filename,
    parse_kubeconfig_env,
)
from kubie.config.resolver import resolve_config_paths
from kubie.config.settings import (
    DEFAULT_INCLUDE_PATTERNS,
    Behavior,
    Configs,
    ContextHeaderBehavior,
    Fzf,
    Hooks,
    KubieSettings,
    Prompt,
    ValidateNamespacesBehavior,
    default_settings,
)

__all__ = [
    # Exceptions
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "EnvOverrideError",
    "GlobAccessError",
    "GlobPatternError",
    "SettingsParseError",
    "SettingsReadError",
    # Discovery (loader)
    "SettingsLocator",
    "load_settings",
    "load_settings_file",
    "load_yaml_file",
    # Paths
    "expand_glob",
    "expanduser",
    "is_settings_filename",
    "parse_kubeconfig_env",
    # Resolver
    "resolve_config_paths",
    # Settings
    "DEFAULT_INCLUDE_PATTERNS",
    "Behavior",
    "Configs",
    "ContextHeaderBehavior",
    "Fzf",
    "Hooks",
    "KubieSettings",
    "Prompt",
    "ValidateNamespacesBehavior",
    "default_settings",
]
