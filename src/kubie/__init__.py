"""kubie - settings and kubeconfig discovery for a multi-kubeconfig tool."""

from kubie.config import (
    KubieSettings,
    SettingsLocator,
    load_settings,
    resolve_config_paths,
)

__all__ = [
    "KubieSettings",
    "SettingsLocator",
    "load_settings",
    "resolve_config_paths",
]
