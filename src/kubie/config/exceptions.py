"""Configuration exceptions for kubie."""

from pathlib import Path


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class SettingsParseError(ConfigError):
    """Raised when the settings file exists but cannot be parsed.

    The underlying YAML or validation error is chained as ``__cause__``.
    """

    def __init__(self, path: Path | str, detail: str | None = None) -> None:
        self.path = str(path)
        message = f"Could not parse kubie settings file: {self.path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class GlobPatternError(ConfigError):
    """Raised when an include/exclude or KUBECONFIG-derived glob is malformed."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid glob pattern {pattern!r}: {reason}")


class SettingsReadError(ConfigError):
    """Raised when the settings file exists but cannot be read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Could not read kubie settings file: {self.path}: {reason}")


class EnvOverrideError(ConfigError):
    """Raised when a KUBIE_* environment variable holds an invalid value.

    The underlying validation error is chained as ``__cause__``.
    """

    def __init__(self, names: list[str], detail: str | None = None) -> None:
        self.names = names
        message = f"Invalid settings override in environment: {', '.join(names)}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class GlobAccessError(ConfigError):
    """Raised when a directory cannot be read while expanding a glob."""

    def __init__(self, pattern: str, path: str, reason: str) -> None:
        self.pattern = pattern
        self.path = path
        self.reason = reason
        super().__init__(
            f"Could not read {path} while expanding glob pattern {pattern!r}: "
            f"{reason}"
        )


class ConfigFileNotFoundError(ConfigError):
    """Raised when an explicitly specified settings file is not found."""

    def __init__(self, path: Path | str) -> None:
        self.path = str(path)
        super().__init__(f"Settings file not found: {self.path}")


# Name used by callers that think of the settings file as "the config"
ConfigParseError = SettingsParseError
