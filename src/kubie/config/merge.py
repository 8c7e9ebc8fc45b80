"""Deep merge utility for settings documents."""

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two settings documents.

    Merges `override` into `base` recursively. Nested sections such as
    ``behavior`` are merged key by key. Any other value, including the
    ``configs.include`` pattern lists, replaces the base value entirely.

    Args:
        base: The base document, typically the default settings.
        override: The document whose values take precedence.

    Returns:
        A new dictionary with merged values. Neither input is modified.

    Examples:
        >>> deep_merge({"shell": None}, {"shell": "zsh"})
        {'shell': 'zsh'}

        >>> deep_merge({"prompt": {"disable": False, "show_depth": True}},
        ...            {"prompt": {"disable": True}})
        {'prompt': {'disable': True, 'show_depth': True}}

        >>> deep_merge({"configs": {"include": ["~/.kube/config"]}},
        ...            {"configs": {"include": ["~/clusters/*.yaml"]}})
        {'configs': {'include': ['~/clusters/*.yaml']}}
    """
    result = base.copy()

    for key, override_value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
        else:
            result[key] = override_value

    return result
