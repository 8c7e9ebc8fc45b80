"""Path helpers shared by the settings locator and the kubeconfig resolver.

Covers home-directory expansion, recognition of kubie's own settings
filenames, parsing of the KUBECONFIG search path, and glob expansion.
"""

import fnmatch
import os
import re
from collections.abc import Mapping
from pathlib import Path

from kubie.config.exceptions import GlobAccessError, GlobPatternError

KUBECONFIG_ENV = "KUBECONFIG"
XDG_CONFIG_HOME_ENV = "XDG_CONFIG_HOME"

# Checked in this order wherever a directory is searched
SETTINGS_FILENAMES = ("kubie.yaml", "kubie.yml")

# Cluster configs picked up from a KUBECONFIG directory entry
KUBECONFIG_DIR_PATTERNS = ("*.yml", "*.yaml")

_MAGIC_CHARS = re.compile(r"[*?[]")


def expanduser(pattern: str, home: Path) -> str:
    """Expand a leading ``~/`` to the given home directory.

    Only the ``~/`` form is handled. A bare ``~`` or ``~user/...`` is
    returned unchanged.

    Examples:
        >>> expanduser("~/.kube/*.yaml", Path("/home/me"))
        '/home/me/.kube/*.yaml'

        >>> expanduser("/etc/kube/config", Path("/home/me"))
        '/etc/kube/config'
    """
    if pattern.startswith("~/"):
        return f"{home}/{pattern[2:]}"
    return pattern


def is_settings_filename(path: Path) -> bool:
    """Check if a path's filename is one of kubie's settings filenames."""
    return path.name in SETTINGS_FILENAMES


def is_regular_file(path: Path) -> bool:
    """Like ``Path.is_file`` but treats any OS error as "does not exist"."""
    try:
        return path.is_file()
    except OSError:
        return False


def is_directory(path: Path) -> bool:
    """Like ``Path.is_dir`` but treats any OS error as "does not exist"."""
    try:
        return path.is_dir()
    except OSError:
        return False


def parse_kubeconfig_env(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Split KUBECONFIG into its individual entries.

    Args:
        environ: Environment mapping to read from (default: os.environ).

    Returns:
        Entries in their original order. Unset or empty KUBECONFIG gives
        an empty list. Empty segments (``a::b``) are skipped.
    """
    if environ is None:
        environ = os.environ

    value = environ.get(KUBECONFIG_ENV, "")
    if not value:
        return []

    return [Path(entry) for entry in value.split(os.pathsep) if entry]


def find_settings_in_dir(directory: Path) -> Path | None:
    """Find a kubie settings file inside a directory.

    Args:
        directory: Directory to search. Need not exist.

    Returns:
        The first of ``kubie.yaml``, ``kubie.yml`` that is a regular file,
        or None.
    """
    for name in SETTINGS_FILENAMES:
        candidate = directory / name
        if is_regular_file(candidate):
            return candidate
    return None


def validate_glob_pattern(pattern: str) -> None:
    """Reject glob patterns with malformed syntax.

    fnmatch silently treats bad syntax as literal text.
    kubie refuses it instead, so a typo in an include or exclude entry
    fails loudly.

    Raises:
        GlobPatternError: On an unclosed or empty ``[...]`` class, a run
            of three or more ``*``, or a ``**`` that is not a whole path
            component.
    """
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if char == "[":
            j = i + 1
            if j < n and pattern[j] == "!":
                j += 1
            # A "]" right after the opening bracket is a literal member
            if j < n and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise GlobPatternError(pattern, "unclosed character class")
            i = close + 1
            continue
        if char == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            run = j - i
            if run > 2:
                raise GlobPatternError(pattern, "too many consecutive wildcards")
            if run == 2:
                starts_component = i == 0 or pattern[i - 1] == "/"
                ends_component = j == n or pattern[j] == "/"
                if not (starts_component and ends_component):
                    raise GlobPatternError(
                        pattern,
                        "recursive wildcards must form a single path component",
                    )
            i = j
            continue
        i += 1


def _has_magic(component: str) -> bool:
    return _MAGIC_CHARS.search(component) is not None


def _list_dir(directory: str, pattern: str) -> list[os.DirEntry]:
    """List a directory, turning read failures into GlobAccessError."""
    target = directory or os.curdir
    try:
        with os.scandir(target) as entries:
            return list(entries)
    except OSError as e:
        raise GlobAccessError(pattern, target, e.strerror or str(e)) from e


def _is_dir_entry(entry: os.DirEntry, follow_symlinks: bool = True) -> bool:
    try:
        return entry.is_dir(follow_symlinks=follow_symlinks)
    except OSError:
        return False


def _walk(directory: str, pattern: str, include_files: bool) -> list[str]:
    """Collect a directory and everything below it for a ``**`` component.

    Symlinked directories are listed but not descended into.
    """
    if not os.path.isdir(directory or os.curdir):
        return []

    found = [directory]
    for entry in _list_dir(directory, pattern):
        path = os.path.join(directory, entry.name)
        if _is_dir_entry(entry, follow_symlinks=False):
            found.extend(_walk(path, pattern, include_files))
        elif include_files:
            found.append(path)
    return found


def expand_glob(pattern: str) -> list[Path]:
    """Expand a glob pattern into the existing paths it matches.

    ``**`` matches zero or more directories and hidden files are matched.
    The pattern is walked one path component at a time so that a
    directory that cannot be read fails the expansion instead of being
    skipped.

    Args:
        pattern: Glob pattern, already home-expanded.

    Returns:
        Matching paths in sorted order. Empty if nothing matches.

    Raises:
        GlobPatternError: If the pattern is malformed.
        GlobAccessError: If a directory on the way cannot be read.
    """
    validate_glob_pattern(pattern)

    candidates = ["/"] if pattern.startswith("/") else [""]
    components = [part for part in pattern.split("/") if part]

    for index, component in enumerate(components):
        last = index == len(components) - 1
        matched: list[str] = []

        for base in candidates:
            if component == "**":
                matched.extend(_walk(base, pattern, include_files=last))
            elif _has_magic(component):
                if not os.path.isdir(base or os.curdir):
                    continue
                for entry in _list_dir(base, pattern):
                    if not fnmatch.fnmatch(entry.name, component):
                        continue
                    if last or _is_dir_entry(entry):
                        matched.append(os.path.join(base, entry.name))
            else:
                path = os.path.join(base, component)
                if os.path.lexists(path) if last else os.path.isdir(path):
                    matched.append(path)

        candidates = matched

    if not components:
        candidates = [path for path in candidates if os.path.lexists(path)]

    return [Path(path) for path in sorted(set(candidates)) if path]
