"""Settings record for kubie.

Uses Pydantic v2 BaseSettings so that KUBIE_* environment variables can
override individual values from the YAML settings file. All defaults live
in this module.
"""

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from kubie.config.exceptions import EnvOverrideError, SettingsParseError

DEFAULT_INCLUDE_PATTERNS = (
    "~/.kube/config",
    "~/.kube/*.yml",
    "~/.kube/*.yaml",
    "~/.kube/configs/*.yml",
    "~/.kube/configs/*.yaml",
    "~/.kube/kubie/*.yml",
    "~/.kube/kubie/*.yaml",
)


class ContextHeaderBehavior(str, Enum):
    """When to print the context header before `kubie exec` output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    def should_print_headers(self, is_terminal: bool | None = None) -> bool:
        """Decide whether headers should be printed.

        Args:
            is_terminal: Whether stdout is a terminal. Detected from
                sys.stdout when not given.
        """
        if self is ContextHeaderBehavior.ALWAYS:
            return True
        if self is ContextHeaderBehavior.NEVER:
            return False
        if is_terminal is None:
            is_terminal = sys.stdout.isatty()
        return is_terminal


class ValidateNamespacesBehavior(str, Enum):
    """How strictly namespaces are checked when switching."""

    TRUE = "true"
    FALSE = "false"
    PARTIAL = "partial"

    def can_list_namespaces(self) -> bool:
        return self is not ValidateNamespacesBehavior.FALSE


class _Section(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Configs(_Section):
    """Glob patterns selecting which kubeconfig files are active."""

    include: list[str] = Field(
        default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS),
        description="Glob patterns of kubeconfig files to include",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns removed after all includes are applied",
    )


class Prompt(_Section):
    disable: bool = False
    show_depth: bool = True
    zsh_use_rps1: bool = False
    fish_use_rprompt: bool = False
    xonsh_use_right_prompt: bool = False


class Behavior(_Section):
    validate_namespaces: ValidateNamespacesBehavior = ValidateNamespacesBehavior.TRUE
    print_context_in_exec: ContextHeaderBehavior = ContextHeaderBehavior.AUTO
    allow_multiple_context_patterns: bool = False

    @field_validator("validate_namespaces", mode="before")
    @classmethod
    def _accept_yaml_booleans(cls, value: object) -> object:
        # YAML reads a bare true/false as a bool, not the enum literal
        if isinstance(value, bool):
            return "true" if value else "false"
        return value


class Hooks(_Section):
    start_ctx: str = ""
    stop_ctx: str = ""


class Fzf(_Section):
    mouse: bool = False
    reverse: bool = False
    ignore_case: bool = False
    info_hidden: bool = False
    prompt: str | None = None
    color: str | None = None


class KubieSettings(BaseSettings):
    """kubie's own settings.

    Settings are loaded from the following sources, highest priority first:
    1. Environment variables with the KUBIE_ prefix (nested with __,
       e.g. KUBIE_PROMPT__DISABLE=true)
    2. The YAML settings file located by SettingsLocator
    3. Field defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="KUBIE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown keys in the settings file
    )

    shell: str | None = Field(
        default=None,
        description="Shell to spawn; detected by the caller when unset",
    )
    default_editor: str | None = Field(
        default=None,
        description="Editor used to edit kubeconfig files",
    )
    configs: Configs = Field(default_factory=Configs)
    prompt: Prompt = Field(default_factory=Prompt)
    behavior: Behavior = Field(default_factory=Behavior)
    hooks: Hooks = Field(default_factory=Hooks)
    fzf: Fzf = Field(default_factory=Fzf)


def env_overrides() -> dict[tuple[str, ...], str]:
    """Map settings keys overridden by KUBIE_* variables to the variable names.

    Nested keys are split on the nested delimiter, so
    KUBIE_PROMPT__DISABLE gives ("prompt", "disable").
    """
    prefix = KubieSettings.model_config.get("env_prefix", "").lower()
    delimiter = KubieSettings.model_config.get("env_nested_delimiter") or None

    overrides: dict[tuple[str, ...], str] = {}
    for name in os.environ:
        lowered = name.lower()
        if not prefix or not lowered.startswith(prefix) or lowered == prefix:
            continue
        remainder = lowered[len(prefix):]
        key = tuple(remainder.split(delimiter)) if delimiter else (remainder,)
        overrides[key] = name
    return overrides


def _overrides_in_error(error: ValidationError) -> list[str]:
    """Names of the KUBIE_* variables behind the fields that failed."""
    overrides = env_overrides()
    names: set[str] = set()
    for detail in error.errors():
        loc = tuple(str(part).lower() for part in detail["loc"])
        for key, name in overrides.items():
            if loc[: len(key)] == key:
                names.add(name)
    return sorted(names)


def build_settings(
    data: dict[str, Any] | None = None, path: Path | None = None
) -> KubieSettings:
    """Construct KubieSettings, blaming the right source on failure.

    Args:
        data: Values read from the settings file, if any.
        path: The settings file the data came from, or None.

    Raises:
        EnvOverrideError: If a KUBIE_* variable holds an invalid value.
        SettingsParseError: If a value from the settings file is invalid.
    """
    try:
        return KubieSettings(**(data or {}))
    except SettingsError as e:
        # Raised for environment values that are not valid JSON
        raise EnvOverrideError(sorted(env_overrides().values()), str(e)) from e
    except ValidationError as e:
        names = _overrides_in_error(e)
        if names or path is None:
            raise EnvOverrideError(
                names or sorted(env_overrides().values()), str(e)
            ) from e
        raise SettingsParseError(path, str(e)) from e


def default_settings() -> KubieSettings:
    """Build settings from field defaults, without reading any file.

    KUBIE_* environment overrides still apply.

    Raises:
        EnvOverrideError: If a KUBIE_* variable holds an invalid value.
    """
    return build_settings()
