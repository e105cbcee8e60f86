"""Utilities for handling YAML parsing quirks."""

from typing import Any, Dict, Iterable


def require_string_scalars(
    entry: Dict[str, Any], keys: Iterable[str], where: str
) -> None:
    """Reject values of ``keys`` that YAML resolved to a bool or a number.

    Unquoted scalars such as ``010``, ``1.50`` or ``yes`` load as int, float or
    bool, and their original text cannot be recovered (``010`` is ``8``). Such
    values must be quoted in the document. ``None`` and missing keys pass.

    Args:
        entry: Mapping parsed from YAML.
        keys: Keys whose values must be strings.
        where: Location used in the error message, e.g. ``"plan entry #2"``.

    Raises:
        ValueError: If a listed value is a bool, int or float.

    Examples:
        >>> require_string_scalars({"id": "7", "parent": None}, ("id",), "x")
        >>> require_string_scalars({"id": 7}, ("id",), "plan entry #0")
        Traceback (most recent call last):
        ...
        ValueError: plan entry #0: 'id' must be a quoted string, got int 7
    """
    for key in keys:
        value = entry.get(key)
        if isinstance(value, (bool, int, float)):
            raise ValueError(
                f"{where}: '{key}' must be a quoted string, "
                f"got {type(value).__name__} {value!r}"
            )
