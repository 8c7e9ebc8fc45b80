"""Resolution of the active kubeconfig file set.

Combines KUBECONFIG entries with the include/exclude glob patterns from
kubie's settings.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from kubie.config.paths import (
    KUBECONFIG_DIR_PATTERNS,
    expand_glob,
    expanduser,
    is_directory,
    is_regular_file,
    is_settings_filename,
    parse_kubeconfig_env,
)
from kubie.config.settings import KubieSettings

logger = logging.getLogger(__name__)


def _kubeconfig_env_paths(environ: Mapping[str, str] | None) -> set[Path]:
    """Collect kubeconfig files named by KUBECONFIG.

    File entries are taken as-is and directory entries contribute their
    *.yml and *.yaml files. kubie settings files are skipped in both
    cases, as are entries that don't exist.
    """
    paths: set[Path] = set()

    for entry in parse_kubeconfig_env(environ):
        if is_regular_file(entry) and not is_settings_filename(entry):
            paths.add(entry)
        elif is_directory(entry):
            for pattern in KUBECONFIG_DIR_PATTERNS:
                for match in expand_glob(str(entry / pattern)):
                    if not is_settings_filename(match):
                        paths.add(match)

    return paths


def resolve_config_paths(
    settings: KubieSettings,
    home: Path,
    environ: Mapping[str, str] | None = None,
) -> set[Path]:
    """Compute the set of active kubeconfig files.

    Phases run in this order:
    1. KUBECONFIG entries are added
    2. Matches of each include pattern are added
    3. Matches of each exclude pattern are removed

    A path removed in phase 3 stays removed, no matter how many times it
    was added before.

    Args:
        settings: Loaded kubie settings.
        home: Home directory used to expand ``~/`` in patterns.
        environ: Environment mapping (default: os.environ).

    Returns:
        Set of kubeconfig file paths.

    Raises:
        GlobPatternError: If any pattern is malformed.
        GlobAccessError: If a directory cannot be read during expansion.

        Either way no partial result is returned.
    """
    paths = _kubeconfig_env_paths(environ)
    logger.debug("%d kubeconfig file(s) from KUBECONFIG", len(paths))

    for pattern in settings.configs.include:
        paths.update(expand_glob(expanduser(pattern, home)))
    logger.debug("%d kubeconfig file(s) after includes", len(paths))

    for pattern in settings.configs.exclude:
        paths.difference_update(expand_glob(expanduser(pattern, home)))
    logger.debug("%d kubeconfig file(s) after excludes", len(paths))

    return paths
